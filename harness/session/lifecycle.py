"""
Per-test session setup and teardown hooks.

Setup registers a session for the calling unit only once it is fully
launched and configured. Teardown runs once per attempt, tolerates a missing
session and never raises.
"""

from typing import Any, Optional, TYPE_CHECKING

from ..core.exceptions import NavigationError, TeardownError
from ..core.logging_config import get_logger
from .models import BrowserKind, ExecutionUnit, Session

if TYPE_CHECKING:
    from ..execution.context import SuiteContext


logger = get_logger(__name__)


def setup_session(context: "SuiteContext", browser_kind: Optional[str] = None) -> Session:
    """
    Launch, configure and register a browser session for the calling unit.

    Args:
        context: Suite context carrying config, launcher and registry
        browser_kind: Browser to launch; defaults to the configured browser

    Returns:
        The registered session

    Raises:
        UnsupportedBrowserError: For an unknown browser kind
        BrowserLaunchError: If the browser cannot be started or configured
    """
    unit = ExecutionUnit.current()
    kind = BrowserKind.parse(browser_kind or context.config.browser)

    stale = context.registry.clear(unit)
    if stale is not None:
        logger.warning(f"Stale session found for {unit}, quitting it before setup")
        _quit(context, stale.browser, unit)

    handle = context.launcher.create(kind, context.config)
    try:
        try:
            context.launcher.configure(handle, context.config)
        except NavigationError as e:
            logger.warning(
                f"Continuing after navigation failure: {e.message}",
                extra={"metadata": e.to_dict()},
            )
        actions = context.action_factory(handle) if context.action_factory else None
    except BaseException:
        _quit(context, handle, unit)
        raise

    session = Session(browser=handle, browser_kind=kind, unit=unit, actions=actions)
    context.registry.set(session, unit)
    logger.info(
        f"Driver & ActionDriver initialized for {unit}",
        extra={"metadata": {"browser": kind.value, "unit": str(unit)}},
    )
    return session


def teardown_session(context: "SuiteContext") -> None:
    """Quit and unregister the calling unit's session, if it has one."""
    unit = ExecutionUnit.current()
    session = context.registry.clear(unit)
    if session is None:
        logger.debug(f"No session to tear down for {unit}")
        return

    if _quit(context, session.browser, unit):
        logger.info(f"WebDriver closed successfully for {unit}")


def _quit(context: "SuiteContext", handle: Any, unit: ExecutionUnit) -> bool:
    try:
        context.launcher.quit(handle)
    except TeardownError as e:
        e.unit = str(unit)
        e.context["unit"] = str(unit)
        logger.warning(
            f"Teardown failed for {unit}: {e.message}",
            extra={"metadata": e.to_dict()},
        )
        return False
    return True
