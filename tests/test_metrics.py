from __future__ import annotations

import math

import pytest

from steplab.graph import TaskGraph
from steplab.metrics import (
    _quantile,
    aggregate_runs,
    critical_path,
    format_path,
    summarize_run,
)
from steplab.pool import WorkerPoolScheduler
from steplab.types import RunResult, TaskAssignment


def test_summarize_run_reports_busy_ticks_and_utilization(sample_edges) -> None:
    result = WorkerPoolScheduler(worker_count=2).run(TaskGraph.build(sample_edges))
    summary = summarize_run(result)

    assert summary["makespan"] == 15
    assert summary["tasks"] == 6
    assert summary["start_order"] == ["C", "A", "F", "B", "D", "E"]
    assert summary["critical_path"] == "C>A>B>D>E"
    assert summary["workers"][0]["busy_ticks"] == 15
    assert summary["workers"][0]["utilization"] == pytest.approx(1.0)
    assert summary["workers"][1]["busy_ticks"] == 6
    assert summary["workers"][1]["utilization"] == pytest.approx(0.4)
    assert summary["failed"] is False


def test_summarize_empty_run_has_zero_utilization() -> None:
    result = WorkerPoolScheduler(worker_count=3).run(TaskGraph.build([]))
    summary = summarize_run(result)
    assert summary["makespan"] == 0
    assert [w["utilization"] for w in summary["workers"]] == [0.0, 0.0, 0.0]
    assert summary["critical_path"] == ""


def test_critical_path_follows_the_busy_worker_when_it_releases_later() -> None:
    graph = TaskGraph.build([("A", "C"), ("B", "D")])
    # One worker: A, B, C, D in order; C waits on the worker, not on A.
    assignments = [
        TaskAssignment("A", 0, 0, 0, 0),
        TaskAssignment("B", 0, 1, 2, 1),
        TaskAssignment("C", 0, 3, 5, 2),
        TaskAssignment("D", 0, 6, 9, 3),
    ]
    assert critical_path(graph, assignments) == ["A", "B", "C", "D"]
    assert critical_path(graph, []) == []


def test_format_path() -> None:
    assert format_path(["C", "A"]) == "C>A"
    assert format_path([0, 3, 4]) == "0>3>4"


def test_percentile_edges_p0_p100_and_singleton() -> None:
    assert math.isnan(_quantile([], 50))
    vals = [1.0, 2.0, 3.0]
    assert _quantile(vals, 0) == 1.0
    assert _quantile(vals, 100) == 3.0
    assert _quantile(vals, 50) == 2.0
    assert _quantile([1.0, 2.0], 50) == pytest.approx(1.5)
    assert _quantile([5.0], 50) == 5.0


def test_aggregate_runs_counts_failures_and_top_paths(sample_edges) -> None:
    graph = TaskGraph.build(sample_edges)
    ok = WorkerPoolScheduler(worker_count=2).run(graph)
    failed = RunResult(
        worker_count=2,
        base_cost=0,
        makespan=3,
        start_order=(),
        assignments=(),
        failed=True,
        failure_reason="boom",
    )
    summary = aggregate_runs(runs=[ok, ok, failed])

    assert summary["runs_requested"] == 3
    assert summary["runs_ok"] == 2
    assert summary["runs_failed"] == 1
    assert summary["makespan"]["p50"] == 15.0
    assert summary["utilization"]["p99"] == pytest.approx(21 / 30)
    assert summary["critical_path"]["top_paths"] == [
        {"tasks": "C>A>B>D>E", "count": 2}
    ]


def test_aggregate_runs_all_failed_is_nan() -> None:
    failed = RunResult(
        worker_count=1,
        base_cost=0,
        makespan=0,
        start_order=(),
        assignments=(),
        failed=True,
        failure_reason="boom",
    )
    summary = aggregate_runs(runs=[failed])
    assert math.isnan(summary["makespan"]["p50"])
    assert math.isnan(summary["utilization"]["p90"])
    assert summary["critical_path"]["top_paths"] == []
