"""
Main CLI interface for the QA harness.

Provides configuration validation and a browser health check for verifying a
run configuration before starting a suite.
"""

import argparse
import json
import sys
from typing import Optional, List

from .core.config import ConfigStore
from .core.exceptions import HarnessError, ConfigLoadError
from .core.logging_config import setup_logging
from .execution.context import generate_suite_id
from .session.launcher import BrowserLauncher
from .session.providers import BrowserProvider


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a configuration file command."""
    try:
        config = ConfigStore().load(args.config)
    except ConfigLoadError as e:
        print(f"❌ Configuration invalid: {e.message}")
        for violation in e.violations:
            print(f"   • {violation}")
        return 1

    print(f"✅ Configuration is valid: {args.config}")
    if args.json:
        print(json.dumps(config.to_dict(), indent=2))
    else:
        for key, value in config.to_dict().items():
            print(f"   {key:15} {value}")
    return 0


def cmd_health(args: argparse.Namespace, provider: Optional[BrowserProvider] = None) -> int:
    """Browser health check command: launch, configure and quit a browser."""
    try:
        config = ConfigStore().load(args.config)
    except ConfigLoadError as e:
        print(f"❌ Configuration invalid: {e.message}")
        return 1

    setup_logging(config, generate_suite_id())
    browser = args.browser or config.browser
    target = config.grid_url if config.selenium_grid else "local"
    print(f"🏥 Browser health check: {browser} ({target})")

    launcher = BrowserLauncher(provider)
    try:
        handle = launcher.create(browser, config)
    except HarnessError as e:
        print(f"❌ Launch failed: {e.message}")
        return 1

    status = 0
    try:
        launcher.configure(handle, config)
        print(f"✅ Browser launched and opened {config.url}")
    except HarnessError as e:
        print(f"⚠️  Browser launched but configuration failed: {e.message}")
        status = 1
    finally:
        try:
            launcher.quit(handle)
        except HarnessError as e:
            print(f"⚠️  Browser did not quit cleanly: {e.message}")

    return status


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qa-harness",
        description="QA harness - browser session lifecycle and retry coordination",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate a run configuration")
    validate_parser.add_argument("config", help="Path to the configuration file")
    validate_parser.add_argument(
        "--json", action="store_true", help="Print the configuration as JSON"
    )
    validate_parser.set_defaults(func=cmd_validate)

    health_parser = subparsers.add_parser(
        "health", help="Launch, configure and quit a browser"
    )
    health_parser.add_argument("config", help="Path to the configuration file")
    health_parser.add_argument("--browser", help="Browser kind to check")
    health_parser.set_defaults(func=cmd_health)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
