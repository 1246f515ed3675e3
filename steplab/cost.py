from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, Mapping

TaskId = Hashable


class CostError(ValueError):
    pass


def ordinal(task_id: TaskId) -> int:
    # bool is an int subclass; True/False are not meaningful step ids.
    if isinstance(task_id, bool):
        raise CostError(f"task id {task_id!r} has no ordinal")
    if isinstance(task_id, int):
        return task_id
    if isinstance(task_id, str) and len(task_id) == 1:
        return ord(task_id)
    raise CostError(
        f"task id {task_id!r} has no ordinal (give it an explicit cost override)"
    )


def default_first_id(ids: Iterable[TaskId]) -> TaskId:
    """First possible id of the alphabet the ids are drawn from.

    Ints count from 0. Single characters count from the start of the lowest
    class present among them: "0" for digits, then "A", then "a".
    """

    chars = set()
    for task_id in ids:
        if isinstance(task_id, int) and not isinstance(task_id, bool):
            return 0
        if isinstance(task_id, str) and len(task_id) == 1:
            chars.add(task_id)
    if any(c.isdigit() for c in chars):
        return "0"
    if chars and all(c.islower() for c in chars):
        return "a"
    return "A"


@dataclass(frozen=True)
class CostModel:
    """Per-task cost: distance of the id from `first_id`, plus `base_cost`.

    `overrides` replaces the formula for individual tasks, which is the only
    way to cost ids that have no single ordinal (multi-character names).
    """

    base_cost: int = 0
    first_id: TaskId = "A"
    overrides: Mapping[TaskId, int] = field(default_factory=dict)

    def cost(self, task_id: TaskId) -> int:
        if task_id in self.overrides:
            value = int(self.overrides[task_id])
        else:
            value = ordinal(task_id) - ordinal(self.first_id) + int(self.base_cost)
        if value < 0:
            raise CostError(f"task {task_id!r} has negative cost {value}")
        return value
