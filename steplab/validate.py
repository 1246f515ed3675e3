from __future__ import annotations

from steplab.cost import CostError
from steplab.model import Scenario


class ScenarioValidationError(ValueError):
    pass


def validate_scenario(scenario: Scenario, *, check_costs: bool = True) -> None:
    if scenario.version != 1:
        raise ScenarioValidationError(
            f"Unsupported scenario version: {scenario.version} (expected 1)"
        )

    if scenario.workers < 1:
        raise ScenarioValidationError(
            f"workers must be >= 1 (got {scenario.workers})"
        )

    if scenario.base_cost < 0:
        raise ScenarioValidationError(
            f"base_cost must be >= 0 (got {scenario.base_cost})"
        )

    if scenario.max_ticks is not None and scenario.max_ticks < 0:
        raise ScenarioValidationError(
            f"max_ticks must be >= 0 (got {scenario.max_ticks})"
        )

    for task_id, cost in scenario.costs.items():
        if cost < 0:
            raise ScenarioValidationError(
                f"cost override for task {task_id!r} must be >= 0 (got {cost})"
            )

    for source, destination in scenario.edges:
        if source == destination:
            raise ScenarioValidationError(
                f"step {source!r} cannot depend on itself"
            )

    graph = scenario.graph()
    try:
        ids = graph.ids()
    except TypeError as e:
        raise ScenarioValidationError(
            "step ids must be mutually comparable (all strings or all integers)"
        ) from e

    if not check_costs:
        return

    costs = scenario.scheduler().cost_model(graph)
    for task_id in ids:
        try:
            costs.cost(task_id)
        except CostError as e:
            raise ScenarioValidationError(str(e)) from e
