from __future__ import annotations

"""Seeded random DAGs for benchmarking the worker-pool scheduler.

Ids are the integers 0..task_count-1 and every edge points from a lower id to
a higher one, so generated graphs are acyclic by construction.
"""

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from numpy.random import Generator


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    return z ^ (z >> 31)


def seed_for_run(base_seed: int, run_id: int) -> int:
    return _splitmix64((base_seed & 0xFFFFFFFFFFFFFFFF) ^ (run_id & 0xFFFFFFFFFFFFFFFF))


def rng_for_run(base_seed: int, run_id: int) -> "Generator":
    return np.random.default_rng(seed_for_run(base_seed, run_id))


def random_edges(
    *, task_count: int, edge_probability: float, rng: "Generator"
) -> list[tuple[int, int]]:
    if task_count < 0:
        raise ValueError(f"task_count must be >= 0 (got {task_count})")
    if not 0.0 <= edge_probability <= 1.0:
        raise ValueError(
            f"edge_probability must be within [0, 1] (got {edge_probability})"
        )

    # Upper triangle only: i -> j for i < j.
    draws = rng.random((task_count, task_count))
    mask = np.triu(draws < edge_probability, k=1)
    src, dst = np.nonzero(mask)
    edges = [(int(s), int(d)) for s, d in zip(src, dst)]

    # Isolated ids would vanish from an edge-built graph; chain them to the
    # next id so every id up to task_count-1 is present.
    touched = set(src.tolist()) | set(dst.tolist())
    for i in range(task_count):
        if i in touched:
            continue
        if i + 1 < task_count:
            edges.append((i, i + 1))
            touched.add(i + 1)
        elif i > 0:
            edges.append((i - 1, i))
        touched.add(i)
    return sorted(set(edges))
