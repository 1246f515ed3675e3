from __future__ import annotations

import logging
from dataclasses import dataclass

from steplab.cost import TaskId
from steplab.graph import TaskGraph
from steplab.run_state import RunState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequentialScheduler:
    """Single-stream topological order with a lowest-id-first tie-break."""

    def execution_order(self, graph: TaskGraph) -> list[TaskId]:
        state = RunState(graph)
        order: list[TaskId] = []
        while True:
            task_id = state.frontier.pop()
            if task_id is None:
                break
            order.append(task_id)
            state.complete(task_id)

        if len(order) != len(graph):
            # Tasks on a cycle never become ready; they are simply absent.
            logger.warning(
                "Execution order covers %d of %d tasks", len(order), len(graph)
            )
        return order


def execution_order(graph: TaskGraph) -> list[TaskId]:
    return SequentialScheduler().execution_order(graph)
