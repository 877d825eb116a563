from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a filesystem check that is allowed to fail.

    A failed probe carries the ``OSError`` that stopped it. Callers decide
    what to do with the error and use :meth:`squash` to fall back to
    ``False``.
    """

    value: bool
    error: OSError | None = None
    stage: str = ""  # "open" or "read" for header probes

    @property
    def failed(self) -> bool:
        return self.error is not None

    def squash(self) -> bool:
        if self.error is not None:
            return False
        return self.value


@dataclass(frozen=True)
class Plan:
    root: str
    files: tuple[Path, ...]  # discovery order
    candidate_dirs: tuple[Path, ...]
    directories: tuple[Path, ...]  # candidates holding only generated files
    entries: tuple[Path, ...]  # files + directories, sorted for review

    @property
    def empty(self) -> bool:
        return not self.files


@dataclass(frozen=True)
class DeletionError:
    path: Path
    error: OSError

    def __str__(self) -> str:
        # OSErrors raised by the filesystem already name the path.
        if self.error.filename is not None:
            return str(self.error)
        return f"{self.path}: {self.error}"


@dataclass
class ExecutionResult:
    deleted: list[Path] = field(default_factory=list)
    errors: list[DeletionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class RemoveOptions:
    recursive: bool = False
    confirm: bool = False
    dry_run: bool = False
    silent: bool = False
