from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from steplab.cost import TaskId
from steplab.graph import TaskGraph
from steplab.parse import parse_edge
from steplab.pool import WorkerPoolScheduler

_VERSION_KEYS = ("schema_version", "version", "model_version")


def _read_version(obj: dict[str, Any]) -> int:
    for key in _VERSION_KEYS:
        if key in obj:
            return int(obj[key])
    raise ValueError(
        "scenario is missing 'schema_version' (aliases: 'version', 'model_version')"
    )


def _parse_edges(obj: dict[str, Any]) -> tuple[tuple[TaskId, TaskId], ...]:
    edges: list[tuple[TaskId, TaskId]] = []
    for line_no, line in enumerate(obj.get("steps", []), start=1):
        edges.append(parse_edge(str(line), line_no=line_no))
    for item in obj.get("edges", []):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(
                f"edges must be [source, destination] pairs (got {item!r})"
            )
        source, destination = item
        edges.append((source, destination))
    return tuple(edges)


def _coerce_cost_keys(
    costs: dict[str, Any], edges: tuple[tuple[TaskId, TaskId], ...]
) -> dict[TaskId, int]:
    # JSON object keys are always strings; map them back onto int ids.
    int_ids = bool(edges) and all(
        isinstance(tid, int) for edge in edges for tid in edge
    )
    return {(int(k) if int_ids else str(k)): int(v) for k, v in costs.items()}


@dataclass(frozen=True)
class Scenario:
    version: int
    edges: tuple[tuple[TaskId, TaskId], ...]
    workers: int = 1
    base_cost: int = 0
    first_id: TaskId | None = None
    costs: dict[TaskId, int] = field(default_factory=dict)
    max_ticks: int | None = None

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "Scenario":
        version = _read_version(obj)
        edges = _parse_edges(obj)
        max_ticks = obj.get("max_ticks")
        return Scenario(
            version=version,
            edges=edges,
            workers=int(obj.get("workers", 1)),
            base_cost=int(obj.get("base_cost", 0)),
            first_id=obj.get("first_id"),
            costs=_coerce_cost_keys(obj.get("costs", {}), edges),
            max_ticks=int(max_ticks) if max_ticks is not None else None,
        )

    def graph(self) -> TaskGraph:
        return TaskGraph.build(self.edges)

    def scheduler(self, *, workers: int | None = None) -> WorkerPoolScheduler:
        return WorkerPoolScheduler(
            worker_count=self.workers if workers is None else workers,
            base_cost=self.base_cost,
            first_id=self.first_id,
            cost_overrides=self.costs,
            max_ticks=self.max_ticks,
        )
