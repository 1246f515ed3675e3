from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
EXAMPLES_DIR = REPO_ROOT / "examples"


@pytest.fixture(scope="session", autouse=True)
def _add_repo_root_to_syspath() -> None:
    """Make local packages importable when running tests from `tests/`.

    Some PyTest invocations end up with `tests/` as the import root.
    Ensure the repo root is on `sys.path` so `import steplab` works.
    """

    root_str = str(REPO_ROOT)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


@pytest.fixture
def sample_edges() -> list[tuple[str, str]]:
    """The seven-step example graph: C->A, C->F, A->B, A->D, B->E, D->E, F->E."""

    from steplab.parse import read_edges

    return read_edges(EXAMPLES_DIR / "sample.txt")


@pytest.fixture
def puzzle_edges() -> list[tuple[str, str]]:
    from steplab.parse import read_edges

    return read_edges(EXAMPLES_DIR / "steps.txt")
