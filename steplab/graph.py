from __future__ import annotations

"""Dependency graph over steps.

Both directions of every edge are kept as adjacency maps (id -> frozenset of
ids), built in a single pass and never mutated afterwards. A graph can be
shared read-only by any number of scheduler runs.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Iterator

from steplab.cost import TaskId


class UnknownTaskError(KeyError):
    def __init__(self, task_id: TaskId) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"unknown task {self.task_id!r}"


@dataclass(frozen=True)
class Task:
    task_id: TaskId
    dependencies: frozenset = frozenset()
    unlocks: frozenset = frozenset()

    @property
    def is_root(self) -> bool:
        return not self.dependencies


class TaskGraph:
    def __init__(
        self,
        *,
        dependencies: dict[TaskId, frozenset],
        unlocks: dict[TaskId, frozenset],
    ) -> None:
        self._dependencies = dependencies
        self._unlocks = unlocks

    @staticmethod
    def build(edges: Iterable[tuple[TaskId, TaskId]]) -> "TaskGraph":
        deps: dict[TaskId, set] = defaultdict(set)
        unlocks: dict[TaskId, set] = defaultdict(set)
        order: dict[TaskId, None] = {}
        for source, destination in edges:
            order.setdefault(source, None)
            order.setdefault(destination, None)
            unlocks[source].add(destination)
            deps[destination].add(source)

        return TaskGraph(
            dependencies={tid: frozenset(deps.get(tid, ())) for tid in order},
            unlocks={tid: frozenset(unlocks.get(tid, ())) for tid in order},
        )

    def __len__(self) -> int:
        return len(self._dependencies)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._dependencies

    def __iter__(self) -> Iterator[TaskId]:
        return iter(self.ids())

    def ids(self) -> list[TaskId]:
        return sorted(self._dependencies)

    def roots(self) -> list[TaskId]:
        # Unordered; callers sort.
        return [tid for tid, deps in self._dependencies.items() if not deps]

    def task(self, task_id: TaskId) -> Task:
        if task_id not in self._dependencies:
            raise UnknownTaskError(task_id)
        return Task(
            task_id=task_id,
            dependencies=self._dependencies[task_id],
            unlocks=self._unlocks[task_id],
        )

    def dependencies_of(self, task_id: TaskId) -> frozenset:
        try:
            return self._dependencies[task_id]
        except KeyError:
            raise UnknownTaskError(task_id) from None

    def unlocks_of(self, task_id: TaskId) -> frozenset:
        try:
            return self._unlocks[task_id]
        except KeyError:
            raise UnknownTaskError(task_id) from None

    def edges(self) -> list[tuple[TaskId, TaskId]]:
        return sorted(
            (src, dst) for src, dsts in self._unlocks.items() for dst in dsts
        )
