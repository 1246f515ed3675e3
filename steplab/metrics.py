from __future__ import annotations

import math
from collections import Counter
from typing import Any, Sequence

from steplab.cost import TaskId
from steplab.graph import TaskGraph
from steplab.types import RunResult, TaskAssignment


_REPORTED_PERCENTILES = (50, 90, 95, 99)


def _quantile(ordered: Sequence[float], p: int) -> float:
    # Linear interpolation between the two ranks around p.
    if not ordered:
        return math.nan
    rank = (len(ordered) - 1) * min(max(p, 0), 100) / 100
    below = math.floor(rank)
    above = min(below + 1, len(ordered) - 1)
    return float(ordered[below] + (ordered[above] - ordered[below]) * (rank - below))


def _distribution(values: Sequence[float]) -> dict[str, float]:
    ordered = sorted(values)
    return {f"p{p}": _quantile(ordered, p) for p in _REPORTED_PERCENTILES}


def format_path(path: Sequence[TaskId]) -> str:
    return ">".join(str(t) for t in path)


def critical_path(
    graph: TaskGraph, assignments: Sequence[TaskAssignment]
) -> list[TaskId]:
    """Chain of tasks that determined when the last task finished.

    From each task, step back to whichever released it later: its last
    finishing dependency, or the previous task on the same worker.
    """

    if not assignments:
        return []

    by_task = {a.task_id: a for a in assignments}
    by_worker: dict[int, list[TaskAssignment]] = {}
    for a in sorted(assignments, key=lambda a: (a.worker, a.start_tick)):
        by_worker.setdefault(a.worker, []).append(a)

    def _worker_pred(a: TaskAssignment) -> TaskAssignment | None:
        prev = [p for p in by_worker[a.worker] if p.start_tick < a.start_tick]
        return prev[-1] if prev else None

    def _dep_pred(a: TaskAssignment) -> TaskAssignment | None:
        deps = [by_task[d] for d in graph.dependencies_of(a.task_id) if d in by_task]
        if not deps:
            return None
        return max(deps, key=lambda d: (d.completion_tick, d.worker))

    cur: TaskAssignment | None = max(
        assignments, key=lambda a: (a.completion_tick, a.worker)
    )
    path: list[TaskId] = []
    while cur is not None:
        path.append(cur.task_id)
        dep = _dep_pred(cur)
        slot = _worker_pred(cur)
        dep_time = dep.completion_tick if dep is not None else -1
        slot_time = slot.completion_tick if slot is not None else -1

        if slot is not None and slot_time > dep_time:
            cur = slot
        elif dep is not None:
            cur = dep
        else:
            cur = None

    path.reverse()
    return path


def summarize_run(result: RunResult) -> dict[str, Any]:
    busy = [0] * result.worker_count
    for a in result.assignments:
        # A worker holds its task through the completion tick.
        busy[a.worker] += a.completion_tick - a.start_tick + 1

    makespan = result.makespan
    return {
        "worker_count": result.worker_count,
        "base_cost": result.base_cost,
        "makespan": makespan,
        "tasks": len(result.assignments),
        "start_order": [str(t) for t in result.start_order],
        "critical_path": format_path(result.critical_path),
        "workers": [
            {
                "worker": i,
                "busy_ticks": b,
                "utilization": (b / makespan) if makespan else 0.0,
            }
            for i, b in enumerate(busy)
        ],
        "failed": result.failed,
        "failure_reason": result.failure_reason,
    }


def aggregate_runs(*, runs: list[RunResult]) -> dict[str, Any]:
    ok = [r for r in runs if not r.failed]

    makespans = [r.makespan for r in ok]
    utilization = [
        sum(a.completion_tick - a.start_tick + 1 for a in r.assignments)
        / (r.makespan * r.worker_count)
        for r in ok
        if r.makespan
    ]

    crit_paths = [format_path(r.critical_path) for r in ok if r.critical_path]
    counts = {k: int(v) for k, v in Counter(crit_paths).items()}

    return {
        "runs_requested": len(runs),
        "runs_ok": len(ok),
        "runs_failed": len(runs) - len(ok),
        "makespan": _distribution(makespans),
        "utilization": _distribution(utilization),
        "critical_path": {
            "top_paths": [
                {"tasks": path, "count": counts[path]}
                for path in sorted(counts, key=lambda p: (-counts[p], p))[:10]
            ]
        },
    }
