from __future__ import annotations

import io
from pathlib import Path

from mockprune.analyzer import analyze

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "sample_repo"


def test_fixture_recursive_plan() -> None:
    plan = analyze(FIXTURE_ROOT, recursive=True, out=io.StringIO())

    rel = [path.relative_to(FIXTURE_ROOT).as_posix() for path in plan.entries]
    assert rel == [
        "matchers",
        "matchers/time_time.go",
        "mock_display.go",
        "mocks/matchers/duration.go",
        "mocks/mock_clock.go",
    ]
    assert len(plan.candidate_dirs) == 2


def test_fixture_single_level_plan() -> None:
    plan = analyze(FIXTURE_ROOT, recursive=False, out=io.StringIO())

    assert [path.name for path in plan.entries] == ["mock_display.go"]
