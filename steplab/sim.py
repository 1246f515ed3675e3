from __future__ import annotations

# Public entrypoints. Each call builds its own graph and run state, so calls
# never share mutable scheduling state.

import dataclasses
import logging
from typing import Iterable, Sequence

from steplab.cost import TaskId
from steplab.generate import random_edges, rng_for_run
from steplab.graph import TaskGraph
from steplab import pool, sequential
from steplab.pool import WorkerPoolScheduler
from steplab.types import RunResult

logger = logging.getLogger(__name__)

Edges = Iterable[tuple[TaskId, TaskId]]


def execution_order(edges: Edges) -> str | list[TaskId]:
    order = sequential.execution_order(TaskGraph.build(edges))
    if all(isinstance(t, str) and len(t) == 1 for t in order):
        return "".join(order)
    return order


def simulate(
    edges: Edges,
    worker_count: int,
    base_cost: int,
    *,
    max_ticks: int | None = None,
) -> int:
    return pool.simulate(
        TaskGraph.build(edges), worker_count, base_cost, max_ticks=max_ticks
    )


def simulate_sweep(
    graph: TaskGraph,
    *,
    scheduler: WorkerPoolScheduler,
    worker_counts: Sequence[int],
) -> list[RunResult]:
    results: list[RunResult] = []
    for n in worker_counts:
        res = dataclasses.replace(scheduler, worker_count=n).run(graph)
        logger.info("workers=%d makespan=%d", n, res.makespan)
        results.append(res)
    return results


def simulate_many(
    *,
    task_count: int,
    edge_probability: float,
    runs: int,
    seed: int,
    scheduler: WorkerPoolScheduler,
) -> list[RunResult]:
    all_runs: list[RunResult] = []
    for run_id in range(runs):
        rng = rng_for_run(seed, run_id)
        edges = random_edges(
            task_count=task_count, edge_probability=edge_probability, rng=rng
        )
        graph = TaskGraph.build(edges)
        res = scheduler.run(graph)
        logger.debug(
            "run %d: %d tasks, %d edges, makespan=%d",
            run_id,
            len(graph),
            len(edges),
            res.makespan,
        )
        all_runs.append(res)
    return all_runs
