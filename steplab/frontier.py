from __future__ import annotations

import heapq

from steplab.cost import TaskId


class ReadyFrontier:
    """Min-heap of ready task ids; the smallest id is always popped first.

    Every id may enter the frontier once per run. A second push means the
    readiness bookkeeping is broken, so it raises instead of queueing twice.
    """

    def __init__(self, ready: list[TaskId] | None = None) -> None:
        self._heap: list[TaskId] = []
        self._seen: set[TaskId] = set()
        for task_id in sorted(ready or ()):
            self.push(task_id)

    def push(self, task_id: TaskId) -> None:
        if task_id in self._seen:
            raise ValueError(f"task {task_id!r} was already made ready in this run")
        self._seen.add(task_id)
        heapq.heappush(self._heap, task_id)

    def pop(self) -> TaskId | None:
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> TaskId | None:
        return self._heap[0] if self._heap else None

    def pending(self) -> list[TaskId]:
        return sorted(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
