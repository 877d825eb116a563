from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable

from mockprune import __version__
from mockprune.models import RemoveOptions


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mockprune",
        description=(
            "Remove files generated by pegomock, plus matchers directories "
            "that only held generated files. Deletions are permanent."
        ),
    )
    parser.add_argument("--path", default=".", help="Directory to clean up")
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Remove generated files in all subdirectories as well",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the files that would be removed",
    )
    parser.add_argument(
        "-n",
        "--non-interactive",
        action="store_true",
        help="Do not ask for confirmation before deleting",
    )
    parser.add_argument(
        "--silent",
        action="store_true",
        help="Do not list the files being deleted (with --non-interactive)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = RemoveOptions(
        recursive=args.recursive,
        confirm=not args.non_interactive,
        dry_run=args.dry_run,
        silent=args.silent,
    )

    from mockprune.remover import remove

    remove(args.path, options=options, out=sys.stdout, in_=sys.stdin)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
