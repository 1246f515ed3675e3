from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from steplab.io import write_runs_csv, write_summary_json, write_trace_csv
from steplab.metrics import aggregate_runs, summarize_run
from steplab.model import Scenario
from steplab.parse import read_edges
from steplab.pool import ScheduleStalledError, WorkerPoolScheduler
from steplab.sim import execution_order, simulate_many, simulate_sweep
from steplab.validate import validate_scenario

logger = logging.getLogger(__name__)


def _add_input_args(sp: argparse.ArgumentParser) -> None:
    src = sp.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", type=Path, help="Text file of step instructions")
    src.add_argument("--scenario", type=Path, help="JSON scenario file")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="steplab", description="StepLab scheduler simulator")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    order = sub.add_parser("order", help="Print the single-worker execution order")
    _add_input_args(order)

    sim = sub.add_parser("simulate", help="Simulate a worker pool and print the makespan")
    _add_input_args(sim)
    sim.add_argument("--workers", type=int)
    sim.add_argument("--base-cost", type=int)
    sim.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Safety limit to prevent infinite runs on cyclic inputs",
    )
    sim.add_argument("--out-summary", type=Path)
    sim.add_argument("--out-trace", type=Path)

    sweep = sub.add_parser("sweep", help="Simulate every worker count from 1 to N")
    _add_input_args(sweep)
    sweep.add_argument("--max-workers", required=True, type=int)
    sweep.add_argument("--base-cost", type=int)
    sweep.add_argument("--max-ticks", type=int, default=None)
    sweep.add_argument("--out-runs", required=True, type=Path)

    bench = sub.add_parser("bench", help="Simulate seeded random graphs")
    bench.add_argument("--tasks", required=True, type=int)
    bench.add_argument("--edge-probability", required=True, type=float)
    bench.add_argument("--runs", required=True, type=int)
    bench.add_argument("--seed", required=True, type=int)
    bench.add_argument("--workers", required=True, type=int)
    bench.add_argument("--base-cost", type=int, default=0)
    bench.add_argument("--out-summary", required=True, type=Path)
    bench.add_argument("--out-runs", type=Path)
    return p


def _load_scenario(args: argparse.Namespace, *, check_costs: bool = True) -> Scenario:
    if args.scenario is not None:
        raw = json.loads(args.scenario.read_text(encoding="utf-8"))
        scenario = Scenario.from_json(raw)
    else:
        scenario = Scenario(version=1, edges=tuple(read_edges(args.input)))

    overrides = {}
    for attr in ("workers", "base_cost", "max_ticks"):
        value = getattr(args, attr, None)
        if value is not None:
            overrides[attr] = value
    if overrides:
        scenario = dataclasses.replace(scenario, **overrides)

    validate_scenario(scenario, check_costs=check_costs)
    return scenario


def _run(args: argparse.Namespace) -> int:
    if args.cmd == "order":
        scenario = _load_scenario(args, check_costs=False)
        order = execution_order(scenario.edges)
        print(order if isinstance(order, str) else " ".join(str(t) for t in order))
        return 0

    if args.cmd == "simulate":
        scenario = _load_scenario(args)
        result = scenario.scheduler().run(scenario.graph())
        if result.failed:
            raise ScheduleStalledError(result.failure_reason)

        logger.info(
            "Simulated %d tasks on %d workers: makespan %d",
            len(result.assignments),
            result.worker_count,
            result.makespan,
        )
        if args.out_summary:
            write_summary_json(args.out_summary, summarize_run(result))
        if args.out_trace:
            write_trace_csv(args.out_trace, result)
        print(result.makespan)
        return 0

    if args.cmd == "sweep":
        if args.max_workers < 1:
            raise ValueError(f"--max-workers must be >= 1 (got {args.max_workers})")
        scenario = _load_scenario(args)
        runs = simulate_sweep(
            scenario.graph(),
            scheduler=scenario.scheduler(),
            worker_counts=range(1, args.max_workers + 1),
        )
        write_runs_csv(args.out_runs, runs)
        for r in runs:
            print(f"{r.worker_count}\t{r.makespan}")
        return 0

    if args.cmd == "bench":
        # Fewer than two tasks yields no edges, hence an empty graph.
        if args.tasks < 2:
            raise ValueError(f"--tasks must be >= 2 (got {args.tasks})")
        runs = simulate_many(
            task_count=args.tasks,
            edge_probability=args.edge_probability,
            runs=args.runs,
            seed=args.seed,
            scheduler=WorkerPoolScheduler(
                worker_count=args.workers, base_cost=args.base_cost, first_id=0
            ),
        )
        summary = aggregate_runs(runs=runs)
        write_summary_json(args.out_summary, summary)
        if args.out_runs:
            write_runs_csv(args.out_runs, runs)
        return 0

    raise AssertionError(f"Unhandled command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run(args)
    except (ValueError, ScheduleStalledError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        sys.stderr.write(f"steplab: error: {e}\n")
        return 2
