from __future__ import annotations

from steplab.cost import TaskId
from steplab.frontier import ReadyFrontier
from steplab.graph import TaskGraph


class RunState:
    """Completion set and frontier for a single scheduler run."""

    def __init__(self, graph: TaskGraph) -> None:
        self.graph = graph
        self.completed: set[TaskId] = set()
        self.frontier = ReadyFrontier(graph.roots())

    def is_ready(self, task_id: TaskId) -> bool:
        return all(d in self.completed for d in self.graph.dependencies_of(task_id))

    def complete(self, task_id: TaskId) -> list[TaskId]:
        """Mark `task_id` done and push every task it made ready."""

        self.completed.add(task_id)
        newly_ready: list[TaskId] = []
        for unlocked in sorted(self.graph.unlocks_of(task_id)):
            if self.is_ready(unlocked):
                self.frontier.push(unlocked)
                newly_ready.append(unlocked)
        return newly_ready

    @property
    def done(self) -> bool:
        return len(self.completed) == len(self.graph)
