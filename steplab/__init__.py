"""Dependency-ordered step scheduler and worker-pool simulator.

The core is headless and pure: build a `TaskGraph` from (source, destination)
edges, then ask for a single-stream execution order or simulate a pool of
identical workers on a discrete clock.

    python -m steplab order --input steps.txt
    python -m steplab simulate --input steps.txt --workers 5 --base-cost 60
"""

from __future__ import annotations

from steplab.sim import execution_order, simulate

__all__ = ["__version__", "execution_order", "simulate"]

__version__ = "0.1.0"
