"""Confirmation and deletion for planned mock cleanups."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, TextIO

from mockprune.analyzer import TraversalError, analyze, is_empty, render_plan
from mockprune.models import DeletionError, ExecutionResult, RemoveOptions

LOGGER = logging.getLogger(__name__)

RemoveFn = Callable[[Path], None]

AFFIRMATIVE = {"y", "yes"}
NEGATIVE = {"n", "no"}


def remove_path(path: Path) -> None:
    """Delete a single file or an empty directory, raising ``OSError`` on failure."""
    if path.is_dir() and not path.is_symlink():
        path.rmdir()
    else:
        path.unlink()


def remove(
    path: Path | str,
    *,
    recursive: bool | None = None,
    confirm: bool | None = None,
    dry_run: bool | None = None,
    silent: bool | None = None,
    out: TextIO | None = None,
    in_: TextIO | None = None,
    remove_fn: RemoveFn = remove_path,
    options: RemoveOptions | None = None,
) -> None:
    """Plan, confirm and delete pegomock-generated files under ``path``.

    Every outcome is written to ``out`` as plain text. Flags are passed
    either individually or as ``options``, never both.
    """
    flags = {"recursive": recursive, "confirm": confirm, "dry_run": dry_run, "silent": silent}
    given = sorted(name for name, value in flags.items() if value is not None)
    if options is None:
        options = RemoveOptions(**{name: bool(value) for name, value in flags.items()})
    elif given:
        raise TypeError(f"remove() got both options and {', '.join(given)}")
    out = out if out is not None else sys.stdout
    in_ = in_ if in_ is not None else sys.stdin

    try:
        plan = analyze(path, options.recursive, out)
    except TraversalError as exc:
        out.write(f"{exc}\n")
        return
    if plan.empty:
        out.write("No files to remove.\n")
        return

    listing = render_plan(plan)
    if options.dry_run:
        out.write("This is a dry-run. Would delete the following files:\n")
        out.write(f"{listing}\n")
        return

    if options.confirm:
        out.write("Will delete the following files:\n")
        out.write(f"{listing}\n")
        if not ask_for_confirmation("Continue?", in_, out):
            return
    elif not options.silent:
        out.write("Deleting the following files:\n")
        out.write(f"{listing}\n")

    result = execute(plan.files, plan.directories, remove_fn)
    if not result.ok:
        errors = ", ".join(str(error) for error in result.errors)
        out.write(f"There were some errors when trying to delete files: [{errors}]\n")


def ask_for_confirmation(message: str, in_: TextIO, out: TextIO) -> bool:
    while True:
        out.write(f"{message} [y/n]: ")
        out.flush()
        try:
            line = in_.readline()
        except OSError as exc:
            out.write(f"Could not get confirmation from StdIn: {exc}\n")
            return False
        if not line:
            out.write("Could not get confirmation from StdIn: end of input\n")
            return False

        response = line.strip().lower()
        if response in AFFIRMATIVE:
            return True
        if response in NEGATIVE:
            return False


def execute(
    files: Iterable[Path],
    directories: Iterable[Path],
    remove_fn: RemoveFn = remove_path,
) -> ExecutionResult:
    result = ExecutionResult()
    for path in files:
        _remove_one(path, remove_fn, result)
    # Emptiness is re-checked after the file pass; leftovers keep the directory.
    for directory in directories:
        if not is_empty(directory):
            LOGGER.debug("Keeping non-empty directory %s", directory)
            continue
        _remove_one(directory, remove_fn, result)
    return result


def _remove_one(path: Path, remove_fn: RemoveFn, result: ExecutionResult) -> None:
    try:
        remove_fn(path)
    except OSError as exc:
        LOGGER.warning("Failed to delete %s: %s", path, exc)
        result.errors.append(DeletionError(path, exc))
        return
    LOGGER.debug("Deleted %s", path)
    result.deleted.append(path)
