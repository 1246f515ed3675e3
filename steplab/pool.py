from __future__ import annotations

# Tick-stepped simulation of N identical workers draining the ready frontier.

import logging
from dataclasses import dataclass, field
from typing import Mapping

from steplab.cost import CostModel, TaskId, default_first_id
from steplab.graph import TaskGraph
from steplab.metrics import critical_path
from steplab.run_state import RunState
from steplab.types import RunResult, TaskAssignment

logger = logging.getLogger(__name__)


class ScheduleStalledError(RuntimeError):
    pass


@dataclass(frozen=True)
class _Working:
    task_id: TaskId
    start_tick: int
    completion_tick: int


@dataclass(frozen=True)
class WorkerPoolScheduler:
    worker_count: int
    base_cost: int = 0
    first_id: TaskId | None = None
    cost_overrides: Mapping[TaskId, int] = field(default_factory=dict)
    # Safety limit for cyclic graphs, which otherwise never finish.
    max_ticks: int | None = None

    def cost_model(self, graph: TaskGraph) -> CostModel:
        first_id = self.first_id
        if first_id is None:
            first_id = default_first_id(graph.ids())
        return CostModel(
            base_cost=self.base_cost,
            first_id=first_id,
            overrides=dict(self.cost_overrides),
        )

    def run(self, graph: TaskGraph) -> RunResult:
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be >= 1 (got {self.worker_count})")

        costs = self.cost_model(graph)
        state = RunState(graph)
        workers: list[_Working | None] = [None] * self.worker_count
        assignments: list[TaskAssignment] = []
        scheduled = 0
        t = 0

        while True:
            if self.max_ticks is not None and t > self.max_ticks:
                reason = f"max_ticks exceeded ({self.max_ticks})"
                logger.warning(
                    "Stopping simulation: %s with %d of %d tasks scheduled",
                    reason,
                    scheduled,
                    len(graph),
                )
                return self._result(
                    graph, makespan=t, assignments=assignments, failure_reason=reason
                )

            # Assignment: first idle worker takes the lowest ready id.
            for i in range(self.worker_count):
                if workers[i] is not None:
                    continue
                task_id = state.frontier.pop()
                if task_id is None:
                    break
                cost = costs.cost(task_id)
                workers[i] = _Working(
                    task_id=task_id, start_tick=t, completion_tick=t + cost
                )
                assignments.append(
                    TaskAssignment(
                        task_id=task_id,
                        worker=i,
                        start_tick=t,
                        completion_tick=t + cost,
                        cost=cost,
                    )
                )
                scheduled += 1
                logger.debug("t=%d worker %d starts %r (cost %d)", t, i, task_id, cost)

            if (
                all(w is None for w in workers)
                and not state.frontier
                and scheduled == len(graph)
            ):
                logger.debug("All %d tasks finished at t=%d", len(graph), t)
                return self._result(graph, makespan=t, assignments=assignments)

            for i, w in enumerate(workers):
                if w is not None and t >= w.completion_tick:
                    ready = state.complete(w.task_id)
                    workers[i] = None
                    logger.debug(
                        "t=%d worker %d finished %r, ready: %s", t, i, w.task_id, ready
                    )

            t += 1

    def _result(
        self,
        graph: TaskGraph,
        *,
        makespan: int,
        assignments: list[TaskAssignment],
        failure_reason: str | None = None,
    ) -> RunResult:
        path = critical_path(graph, assignments) if failure_reason is None else []
        return RunResult(
            worker_count=self.worker_count,
            base_cost=self.base_cost,
            makespan=makespan,
            start_order=tuple(a.task_id for a in assignments),
            assignments=tuple(assignments),
            critical_path=tuple(path),
            failed=failure_reason is not None,
            failure_reason=failure_reason,
        )


def simulate(
    graph: TaskGraph,
    worker_count: int,
    base_cost: int,
    *,
    max_ticks: int | None = None,
) -> int:
    result = WorkerPoolScheduler(
        worker_count=worker_count, base_cost=base_cost, max_ticks=max_ticks
    ).run(graph)
    if result.failed:
        raise ScheduleStalledError(result.failure_reason)
    return result.makespan
