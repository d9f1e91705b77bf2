"""CLI entrypoint for mdocs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import InternalError, MdocsError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdocs",
        description="Expand `*.template.md` files into markdown documentation.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to process (defaults to current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for mdocs."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    directory = Path.cwd() / args.directory if args.directory else Path.cwd()
    try:
        outcome = Orchestrator().run(directory)
    except InternalError as exc:
        parser.exit(1, f"mdocs internal error: {exc}\nRun with --verbose for more details.\n")
    except MdocsError as exc:
        parser.exit(1, f"{exc}\n")
    print(f"Wrote {len(outcome.written)} file(s)")


if __name__ == "__main__":
    main(sys.argv[1:])
