from __future__ import annotations

import re
from pathlib import Path

_STEP_RE = re.compile(
    r"^Step (?P<source>\w+) must be finished before step (?P<destination>\w+) can begin\.$"
)


class MalformedEdgeError(ValueError):
    def __init__(self, line_no: int, line: str) -> None:
        super().__init__(f"line {line_no}: cannot parse step instruction {line!r}")
        self.line_no = line_no
        self.line = line


def parse_edge(line: str, *, line_no: int = 1) -> tuple[str, str]:
    m = _STEP_RE.match(line.strip())
    if m is None:
        raise MalformedEdgeError(line_no, line)
    return m.group("source"), m.group("destination")


def parse_edges(text: str) -> list[tuple[str, str]]:
    edges: list[tuple[str, str]] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        edges.append(parse_edge(line, line_no=line_no))
    return edges


def read_edges(path: Path) -> list[tuple[str, str]]:
    return parse_edges(path.read_text(encoding="utf-8"))
