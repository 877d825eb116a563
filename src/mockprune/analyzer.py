from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, TextIO

from mockprune.models import Plan, ProbeResult

LOGGER = logging.getLogger(__name__)

MARKER = "// Code generated by pegomock. DO NOT EDIT."
HEADER_BYTES = 50
SOURCE_EXTENSION = ".go"
MATCHERS_DIR_NAME = "matchers"


class TraversalError(OSError):
    """The root path could not be listed; nothing was planned."""


def analyze(root: Path | str, recursive: bool, out: TextIO) -> Plan:
    files, candidate_dirs = walk(root, recursive, out)
    return build_plan(root, files, candidate_dirs)


def build_plan(
    root: Path | str,
    files: Iterable[Path],
    candidate_dirs: Iterable[Path],
) -> Plan:
    files = tuple(files)
    candidate_dirs = tuple(sorted(set(candidate_dirs), key=str))
    directories = tuple(d for d in candidate_dirs if is_fully_generated(d, files))
    entries = sorted(set(files) | set(directories), key=str)
    return Plan(
        root=str(root),
        files=files,
        candidate_dirs=candidate_dirs,
        directories=directories,
        entries=tuple(entries),
    )


def render_plan(plan: Plan) -> str:
    return "\n".join(str(path) for path in plan.entries)


def walk(root: Path | str, recursive: bool, out: TextIO) -> tuple[list[Path], list[Path]]:
    """Collect generated files under ``root`` and the matcher directories holding them.

    Raises :class:`TraversalError` when ``root`` itself cannot be listed.
    """
    root = Path(root)
    files: list[Path] = []
    candidate_dirs: dict[Path, None] = {}
    for path in _iter_files(root, recursive):
        if not path.name.endswith(SOURCE_EXTENSION):
            continue
        if not is_generated(path, out):
            continue
        files.append(path)
        if path.parent.name == MATCHERS_DIR_NAME:
            candidate_dirs[path.parent] = None
    return files, list(candidate_dirs)


def _iter_files(root: Path, recursive: bool) -> Iterable[Path]:
    # Listing the root up front so a bad root fails before anything is yielded.
    names = _list_root(root)
    if not recursive:
        for name, is_dir in names:
            if not is_dir:
                yield root / name
        return

    def _onerror(exc: OSError) -> None:
        LOGGER.warning("Skipping unreadable directory %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_onerror):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _list_root(root: Path) -> list[tuple[str, bool]]:
    try:
        with os.scandir(root) as entries:
            names = [(entry.name, entry.is_dir()) for entry in entries]
    except OSError as exc:
        LOGGER.debug("Could not list %s: %s", root, exc)
        raise TraversalError(f"Could not get files in path {root}") from exc
    names.sort()
    return names


def probe_header(path: Path | str) -> ProbeResult:
    try:
        handle = open(path, "rb")
    except OSError as exc:
        return ProbeResult(False, exc, stage="open")
    with handle:
        try:
            header = handle.read(HEADER_BYTES)
        except OSError as exc:
            return ProbeResult(False, exc, stage="read")
    return ProbeResult(MARKER.encode("utf-8") in header)


def is_generated(path: Path | str, out: TextIO) -> bool:
    result = probe_header(path)
    if result.failed:
        LOGGER.warning("Could not %s header of %s: %s", result.stage, path, result.error)
        if result.stage == "open":
            out.write(f"Could not open file {path}. Error: {result.error}\n")
        else:
            out.write(f"Could not read from file {path}. Error: {result.error}\n")
    return result.squash()


def probe_fully_generated(directory: Path | str, known: Iterable[Path]) -> ProbeResult:
    directory = Path(directory)
    try:
        present = {directory / name for name in os.listdir(directory)}
    except OSError as exc:
        return ProbeResult(False, exc)
    return ProbeResult(not present.difference(Path(p) for p in known))


def is_fully_generated(directory: Path | str, known: Iterable[Path]) -> bool:
    result = probe_fully_generated(directory, known)
    if result.failed:
        LOGGER.warning("Keeping %s, could not classify it: %s", directory, result.error)
    return result.squash()


def probe_empty(directory: Path | str) -> ProbeResult:
    try:
        with os.scandir(directory) as entries:
            first = next(entries, None)
    except OSError as exc:
        return ProbeResult(False, exc)
    return ProbeResult(first is None)


def is_empty(directory: Path | str) -> bool:
    result = probe_empty(directory)
    if result.failed:
        LOGGER.debug("Could not check whether %s is empty: %s", directory, result.error)
    return result.squash()
