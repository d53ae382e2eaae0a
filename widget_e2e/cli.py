"""
Command-line interface for the events widget e2e suite.

Runs the browser suites through pytest, cleans generated reports and shows
the resolved configuration.
"""

import argparse
import json
import os
import shutil
import sys
from typing import Dict, List, Optional, Tuple

import pytest

from .core.config import Config
from .core.environments import DEFAULT_PROJECTS
from .core.exceptions import WidgetE2EError

E2E_ROOT = "tests/e2e"

SUITES: Dict[str, str] = {
    "smoke": f"{E2E_ROOT}/smoke",
    "functional": f"{E2E_ROOT}/functional",
    "visual": f"{E2E_ROOT}/visual",
    "a11y": f"{E2E_ROOT}/accessibility",
    "all": E2E_ROOT,
}

CROSS_BROWSER_PROJECTS = ("chromium", "firefox", "mobile-chrome")


def build_pytest_args(
    suite: str,
    project: str,
    config: Config,
    debug: bool = False,
    extra: Optional[List[str]] = None,
) -> List[str]:
    """
    Build the pytest argument list for one suite and browser project.

    Retries and parallel workers come from the environment profile: reruns
    through pytest-rerunfailures, workers through pytest-xdist. Debug runs
    are serial and never rerun.

    Args:
        suite: Suite name, one of ``SUITES``
        project: Browser project name
        config: Resolved configuration
        debug: Stop on the first failure and show full tracebacks
        extra: Additional raw pytest arguments

    Returns:
        Arguments for ``pytest.main``
    """
    if suite not in SUITES:
        raise WidgetE2EError(f"Unknown suite: {suite}. Must be one of {sorted(SUITES)}")
    if project not in DEFAULT_PROJECTS:
        raise WidgetE2EError(
            f"Unknown project: {project}. Must be one of {sorted(DEFAULT_PROJECTS)}"
        )

    args = [
        SUITES[suite],
        "--run-e2e",
        f"--project={project}",
        f"--alluredir={config.allure_results_dir}",
    ]
    if debug:
        args.extend(["-x", "--tb=long", "-s"])
    else:
        profile = config.profile
        if profile.retries:
            args.append(f"--reruns={profile.retries}")
        if profile.workers and profile.workers > 1:
            args.extend(["-n", str(profile.workers)])
    if extra:
        args.extend(extra)
    return args


def _apply_run_environment(args: argparse.Namespace) -> None:
    """Export CLI choices so the pytest session's Config picks them up."""
    if args.headed:
        os.environ["WIDGET_E2E_HEADLESS"] = "false"
    if args.env:
        os.environ["WIDGET_E2E_ENV"] = args.env
    if args.debug:
        os.environ["WIDGET_E2E_LOG_LEVEL"] = "DEBUG"


def cmd_run(args: argparse.Namespace) -> int:
    """Run one suite in one browser project."""
    try:
        _apply_run_environment(args)
        config = Config.from_env()
        config.validate()

        pytest_args = build_pytest_args(
            args.suite, args.project, config, debug=args.debug, extra=args.pytest_args
        )
        print(f"🚀 Running {args.suite} tests on {args.project} ({config.effective_base_url})")
        return int(pytest.main(pytest_args))

    except WidgetE2EError as e:
        print(f"❌ {e}")
        return 1


def cmd_browsers(args: argparse.Namespace) -> int:
    """Run a suite on Chrome, Firefox and mobile Chrome one after another."""
    try:
        _apply_run_environment(args)
        config = Config.from_env()
        config.validate()

        results = {}
        for project in CROSS_BROWSER_PROJECTS:
            print(f"ℹ️  Running {project} tests...")
            pytest_args = build_pytest_args(
                args.suite, project, config, debug=args.debug, extra=args.pytest_args
            )
            results[project] = int(pytest.main(pytest_args))

    except WidgetE2EError as e:
        print(f"❌ {e}")
        return 1

    print()
    print("📊 Test Results Summary")
    print("=" * 40)
    for project, code in results.items():
        status = "✅ PASSED" if code == 0 else "❌ FAILED"
        print(f"  {project:15} {status}")

    return 0 if all(code == 0 for code in results.values()) else 1


def cmd_cleanup(args: argparse.Namespace) -> int:
    """Remove generated reports and Allure results."""
    config = Config.from_env()
    removed = 0

    for directory in (config.reports_dir, config.allure_results_dir):
        if directory.exists():
            shutil.rmtree(directory)
            print(f"🗑️  Removed {directory}")
            removed += 1

    if removed == 0:
        print("ℹ️  Nothing to clean")
    else:
        print("✅ Cleanup complete")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration as JSON."""
    config = Config.from_env()
    print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))

    if args.validate:
        try:
            config.validate()
        except WidgetE2EError as e:
            print(f"❌ {e}")
            return 1
        print("✅ Configuration is valid")
    return 0


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "suite",
        nargs="?",
        default="smoke",
        choices=sorted(SUITES),
        help="Suite to run (default: smoke)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--debug", action="store_true", help="Stop on first failure, debug logs")
    parser.add_argument("--env", help="Environment profile (development, staging, production, ci)")


def create_main_parser() -> argparse.ArgumentParser:
    """Create main CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="widget-e2e",
        description="End-to-end tests for the events calendar widget",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  widget-e2e run smoke
  widget-e2e run functional --project firefox --headed
  widget-e2e run all --env production
  widget-e2e run smoke -- -k SMOKE-01
  widget-e2e browsers smoke
  widget-e2e cleanup
  widget-e2e config --validate
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run a test suite")
    _add_run_options(run_parser)
    run_parser.add_argument(
        "--project",
        default="chromium",
        choices=sorted(DEFAULT_PROJECTS),
        help="Browser project (default: chromium)",
    )
    run_parser.set_defaults(func=cmd_run, pytest_args=[])

    browsers_parser = subparsers.add_parser(
        "browsers", help="Run a suite on Chrome, Firefox and mobile Chrome"
    )
    _add_run_options(browsers_parser)
    browsers_parser.set_defaults(func=cmd_browsers, pytest_args=[])

    cleanup_parser = subparsers.add_parser("cleanup", help="Remove generated reports")
    cleanup_parser.set_defaults(func=cmd_cleanup)

    config_parser = subparsers.add_parser("config", help="Show resolved configuration")
    config_parser.add_argument(
        "--validate", action="store_true", help="Also validate the configuration"
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def split_passthrough(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split ``argv`` at the first ``--``; what follows goes to pytest verbatim."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_main_parser()
    own_args, passthrough = split_passthrough(
        list(sys.argv[1:] if args is None else args)
    )
    parsed_args, unknown = parser.parse_known_args(own_args)

    if not hasattr(parsed_args, "func"):
        parser.print_help()
        return 1

    extra = unknown + passthrough
    if hasattr(parsed_args, "pytest_args"):
        parsed_args.pytest_args = extra
    elif extra:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")

    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
