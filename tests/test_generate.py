from __future__ import annotations

import numpy as np
import pytest

from steplab.generate import random_edges, rng_for_run, seed_for_run
from steplab.graph import TaskGraph
from steplab.pool import WorkerPoolScheduler
from steplab.sim import simulate_many


def test_random_edges_only_point_forward() -> None:
    edges = random_edges(task_count=40, edge_probability=0.2, rng=rng_for_run(1, 0))
    assert edges
    assert all(src < dst for src, dst in edges)
    assert all(isinstance(src, int) and isinstance(dst, int) for src, dst in edges)
    assert edges == sorted(set(edges))


def test_random_edges_are_seed_deterministic() -> None:
    a = random_edges(task_count=25, edge_probability=0.3, rng=rng_for_run(42, 3))
    b = random_edges(task_count=25, edge_probability=0.3, rng=rng_for_run(42, 3))
    assert a == b
    assert seed_for_run(42, 3) == seed_for_run(42, 3)
    assert seed_for_run(42, 3) != seed_for_run(42, 4)


def test_every_id_is_present_even_without_random_edges() -> None:
    edges = random_edges(
        task_count=5, edge_probability=0.0, rng=np.random.default_rng(0)
    )
    assert TaskGraph.build(edges).ids() == [0, 1, 2, 3, 4]


def test_fully_connected_graph_is_a_chain() -> None:
    n = 6
    edges = random_edges(task_count=n, edge_probability=1.0, rng=rng_for_run(0, 0))
    assert len(edges) == n * (n - 1) // 2
    result = WorkerPoolScheduler(worker_count=3, first_id=0).run(TaskGraph.build(edges))
    assert result.start_order == tuple(range(n))
    assert result.makespan == sum(i + 1 for i in range(n))


@pytest.mark.parametrize(
    ("task_count", "edge_probability"), [(-1, 0.5), (3, -0.1), (3, 1.5)]
)
def test_random_edges_rejects_bad_arguments(
    task_count: int, edge_probability: float
) -> None:
    with pytest.raises(ValueError):
        random_edges(
            task_count=task_count,
            edge_probability=edge_probability,
            rng=np.random.default_rng(0),
        )


def test_simulate_many_is_deterministic_for_seed() -> None:
    scheduler = WorkerPoolScheduler(worker_count=3, base_cost=2, first_id=0)
    runs1 = simulate_many(
        task_count=20, edge_probability=0.2, runs=10, seed=123, scheduler=scheduler
    )
    runs2 = simulate_many(
        task_count=20, edge_probability=0.2, runs=10, seed=123, scheduler=scheduler
    )
    assert len(runs1) == 10
    assert [(r.makespan, r.start_order) for r in runs1] == [
        (r.makespan, r.start_order) for r in runs2
    ]
    assert not any(r.failed for r in runs1)
    assert all(len(r.assignments) == 20 for r in runs1)
