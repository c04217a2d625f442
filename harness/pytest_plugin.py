"""
pytest integration for the QA harness.

The plugin stays inert unless --harness-config is given. When active it:

1. Loads the run configuration once in pytest_configure and aborts the run
   on ConfigLoadError before any test is collected
2. Registers the retry predicate on every collected item
3. Re-runs failed items while the predicate allows, logging only the final
   attempt's reports so retried attempts never count toward the tally
4. Drives the lifecycle listener from pytest_runtest_makereport, while the
   browser session is still alive for screenshots
5. Provides the harness_context fixture wrapping session setup and teardown
6. Flushes the report when the session finishes
"""

from typing import Callable, Optional

import pytest
from _pytest.runner import runtestprotocol

from . import hookspecs
from .core.config import ConfigStore
from .core.exceptions import ConfigLoadError
from .core.logging_config import get_logger
from .execution.context import SuiteContext, TestContext
from .execution.listener import TestLifecycleListener
from .execution.models import TestKind
from .session.lifecycle import setup_session, teardown_session


logger = get_logger(__name__)

SUITE_KEY = pytest.StashKey[SuiteContext]()
LISTENER_KEY = pytest.StashKey[TestLifecycleListener]()
RETRY_KEY = pytest.StashKey[Callable[[str, int], bool]]()
ATTEMPT_KEY = pytest.StashKey[int]()
RETRYING_KEY = pytest.StashKey[bool]()


def pytest_addhooks(pluginmanager):
    pluginmanager.add_hookspecs(hookspecs)


def pytest_addoption(parser):
    group = parser.getgroup("harness", "QA harness options")
    group.addoption(
        "--harness-config",
        action="store",
        dest="harness_config",
        default=None,
        help="Path to the run configuration (.properties or .yaml)",
    )
    group.addoption(
        "--harness-browser",
        action="store",
        dest="harness_browser",
        default=None,
        help="Browser for UI tests, overriding the configured browser",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "api: API test, runs without a browser session")
    config.addinivalue_line("markers", "ui: UI test, runs with a browser session")
    config.addinivalue_line("markers", "browser(kind): browser kind for a UI test")

    path = config.getoption("harness_config")
    if not path:
        return

    try:
        run_config = ConfigStore().load(path)
    except ConfigLoadError as e:
        raise pytest.UsageError(e.message) from e

    report_dir = None
    workerinput = getattr(config, "workerinput", None)
    if workerinput is not None:
        report_dir = f"{run_config.report_dir}/{workerinput['workerid']}"

    hook = config.pluginmanager.hook
    context = SuiteContext.create(
        run_config,
        provider=hook.pytest_harness_provider(config=config),
        action_factory=hook.pytest_harness_action_factory(config=config),
        report_dir=report_dir,
    )
    config.stash[SUITE_KEY] = context
    config.stash[LISTENER_KEY] = TestLifecycleListener(context)


def pytest_report_header(config):
    context = config.stash.get(SUITE_KEY, None)
    if context is None:
        return None
    run_config = context.config
    target = run_config.grid_url if run_config.selenium_grid else "local"
    return (
        f"harness: suite={context.suite_id} browser={run_config.browser} "
        f"target={target} maxRetries={run_config.max_retries}"
    )


def pytest_sessionstart(session):
    listener = session.config.stash.get(LISTENER_KEY, None)
    if listener is not None:
        listener.on_suite_start()


def pytest_sessionfinish(session, exitstatus):
    listener = session.config.stash.get(LISTENER_KEY, None)
    if listener is not None:
        listener.on_suite_finish()


def pytest_collection_modifyitems(session, config, items):
    context = config.stash.get(SUITE_KEY, None)
    if context is None:
        return
    predicate = context.retry_analyzer.should_retry
    for item in items:
        item.stash[RETRY_KEY] = predicate
    logger.debug(f"Retry policy registered for {len(items)} tests")


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_protocol(item, nextitem):
    context = item.config.stash.get(SUITE_KEY, None)
    listener = item.config.stash.get(LISTENER_KEY, None)
    if context is None or listener is None:
        return None

    item.ihook.pytest_runtest_logstart(nodeid=item.nodeid, location=item.location)
    while True:
        item.stash[ATTEMPT_KEY] = context.retry_analyzer.next_attempt(item.nodeid)
        item.stash[RETRYING_KEY] = False
        listener.on_test_start(item.nodeid)

        reports = runtestprotocol(item, nextitem=nextitem, log=False)
        if item.stash[RETRYING_KEY]:
            continue

        for report in reports:
            item.ihook.pytest_runtest_logreport(report=report)
        break
    item.ihook.pytest_runtest_logfinish(nodeid=item.nodeid, location=item.location)
    return True


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()

    listener = item.config.stash.get(LISTENER_KEY, None)
    if listener is None or report.when == "teardown":
        return

    identity = item.nodeid
    if report.skipped:
        listener.on_test_skipped(identity)
    elif report.failed:
        _report_failure(listener, item, call)
    elif report.when == "call":
        listener.on_test_success(identity, item_kind(item))


@pytest.fixture
def harness_context(request):
    """Session-backed TestContext for the requesting test."""
    context = request.config.stash.get(SUITE_KEY, None)
    if context is None:
        pytest.fail("harness_context requires --harness-config", pytrace=False)

    item = request.node
    try:
        if item_kind(item) is TestKind.UI:
            setup_session(context, item_browser(item))
        yield TestContext(context, item.nodeid)
    finally:
        teardown_session(context)


def item_kind(item) -> TestKind:
    """API or UI, from markers first, then from the test class or module name."""
    if item.get_closest_marker("api") is not None:
        return TestKind.API
    if item.get_closest_marker("ui") is not None:
        return TestKind.UI
    cls = getattr(item, "cls", None)
    if cls is not None:
        return TestKind.infer(cls.__name__)
    module = getattr(item, "module", None)
    return TestKind.infer(module.__name__ if module is not None else item.nodeid)


def item_browser(item) -> Optional[str]:
    marker = item.get_closest_marker("browser")
    if marker is not None and marker.args:
        return marker.args[0]
    return item.config.getoption("harness_browser")


def _report_failure(listener: TestLifecycleListener, item, call) -> None:
    identity = item.nodeid
    attempt = item.stash.get(ATTEMPT_KEY, 0)
    predicate = item.stash.get(RETRY_KEY, None)
    message = _failure_message(call)

    retry = predicate is not None and predicate(identity, attempt)
    item.stash[RETRYING_KEY] = retry
    if retry:
        listener.on_test_retry(identity, attempt, message)
    else:
        listener.on_test_failure(identity, item_kind(item), message)


def _failure_message(call) -> str:
    excinfo = call.excinfo
    if excinfo is None:
        return "Test failed"
    return str(excinfo.value) or excinfo.exconly()
