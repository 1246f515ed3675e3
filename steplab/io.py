from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from steplab.metrics import format_path
from steplab.types import RunResult


def write_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")


def write_runs_csv(path: Path, runs: list[RunResult]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(
            [
                "worker_count",
                "base_cost",
                "makespan",
                "tasks",
                "start_order",
                "critical_path",
                "failed",
                "failure_reason",
            ]
        )
        for r in runs:
            w.writerow(
                [
                    r.worker_count,
                    r.base_cost,
                    r.makespan,
                    len(r.assignments),
                    ";".join(str(t) for t in r.start_order),
                    format_path(r.critical_path),
                    int(r.failed),
                    r.failure_reason or "",
                ]
            )


def write_trace_csv(path: Path, result: RunResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["task_id", "worker", "start_tick", "completion_tick", "cost"])
        for a in result.assignments:
            w.writerow([a.task_id, a.worker, a.start_tick, a.completion_tick, a.cost])
