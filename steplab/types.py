from __future__ import annotations

from dataclasses import dataclass

from steplab.cost import TaskId


@dataclass(frozen=True)
class TaskAssignment:
    task_id: TaskId
    worker: int
    start_tick: int
    completion_tick: int  # worker is busy through this tick, inclusive
    cost: int


@dataclass(frozen=True)
class RunResult:
    worker_count: int
    base_cost: int
    makespan: int
    start_order: tuple[TaskId, ...]
    assignments: tuple[TaskAssignment, ...]
    critical_path: tuple[TaskId, ...] = ()
    failed: bool = False
    failure_reason: str | None = None
