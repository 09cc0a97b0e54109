"""
SassWatch Command Line Interface.

Builds SCSS and ES6 sources once, watches them, or both.
Requires Python 3.11+.

Usage:
    sasswatch            build once, then watch forever
    sasswatch build      build once and exit
    sasswatch watch      watch without an initial build
"""

import argparse
import sys
from pathlib import Path

from builder.batch import BatchBuilder
from builder.persist import CompilePersister
from compiler.base import BuildToolError
from compiler.paths import source_roots
from utils.config import FailurePolicy, get_settings
from utils.logger import configure_logging, get_logger
from watcher.file_watcher import ChangeWatcher


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sasswatch",
        description="Compile styles/*.scss to CSS and scripts/*.js6 to JS, once or on change",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["build", "watch"],
        default=None,
        help="build: compile once and exit; watch: only watch. Default: build, then watch",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory holding styles/ and scripts/ (default: current directory)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Log compile errors and continue instead of stopping on the first one",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Wait this long after the last change to a file before recompiling",
    )
    parser.add_argument(
        "--no-scripts",
        action="store_true",
        help="Only compile style sheets",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    """
    Run the requested build and/or watch.

    Raises:
        BuildToolError: On any fatal build or watch error
    """
    settings = get_settings()

    roots = source_roots(args.root or settings.build.root_dir)
    persister = CompilePersister(
        scripts_enabled=settings.build.scripts_enabled and not args.no_scripts,
    )

    if args.command in (None, "build"):
        policy = FailurePolicy.CONTINUE if args.keep_going else settings.build.failure_policy
        report = BatchBuilder(roots, persister, policy=policy).build_all()
        if args.command == "build" and not report.ok:
            raise BuildToolError(f"{len(report.failures)} file(s) failed to compile")

    if args.command in (None, "watch"):
        policy = FailurePolicy.CONTINUE if args.keep_going else settings.watcher.failure_policy
        watcher = ChangeWatcher(
            roots,
            persister,
            policy=policy,
            debounce_delay_ms=args.debounce_ms,
        )
        watcher.run()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        run(args)
    except KeyboardInterrupt:
        get_logger("sasswatch").info("interrupted")
        return 0
    except BuildToolError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
