"""
Headless Runner
===============
Loads node records, builds the graph and drives the simulation for a fixed
number of ticks, logging progress along the way.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root for hosts without a renderer. It:
1. Sets up logging.
2. Collects node records from a file and/or an inline payload.
3. Builds the graph and the parameter store.
4. Runs the ticks and reports how far the layout spread.

A malformed payload is reported and the runner exits with status 1; the
engine itself never decides that policy.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from forcelayout import config
from forcelayout.dev import timer
from forcelayout.errors import MalformedInputError
from forcelayout.logging_config import setup_logging
from forcelayout.model.graph import DependencyGraph
from forcelayout.model.io import collect_records
from forcelayout.model.parameters import ParameterStore
from forcelayout.physics.simulation import Simulation

logger = logging.getLogger("forcelayout.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forcelayout",
        description="Run the force-directed layout of a dependency graph.",
    )
    parser.add_argument("input", nargs="?", default=None,
                        help=f"JSON file with node records (default: {config.DEFAULT_GRAPH_PATH})")
    parser.add_argument("--inline", default=None,
                        help="JSON array of node records, merged after the file records")
    parser.add_argument("--ticks", type=int, default=500, help="number of ticks to run")
    parser.add_argument("--seed", type=int, default=None, help="seed for the initial positions")
    parser.add_argument("--spread", type=float, default=config.INITIAL_SPREAD,
                        help="half-width of the square the initial positions are drawn from")
    parser.add_argument("--exclude", action="append", default=[], metavar="NAME",
                        help="skip every edge touching NAME (repeatable)")
    parser.add_argument("--report-every", type=int, default=100, metavar="N",
                        help="log a progress line every N ticks")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    for name in config.PARAMETER_NAMES:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=float, default=None,
                            help=f"override {name} (default: {config.DEFAULT_PARAMETERS[name]:g})")
    return parser


def parameters_from_args(args: argparse.Namespace) -> ParameterStore:
    overrides = {
        name: getattr(args, name)
        for name in config.PARAMETER_NAMES
        if getattr(args, name) is not None
    }
    return ParameterStore(**overrides)


@timer
def run_layout(simulation: Simulation, n_ticks: int, report_every: int) -> None:
    def report(sim: Simulation) -> None:
        if report_every > 0 and sim.tick_count % report_every == 0:
            radii = sim.state.radii()
            logger.info(
                f"Tick {sim.tick_count}/{n_ticks} - mean radius: {radii.mean():.1f}"
                f" - max radius: {radii.max():.1f}"
            )

    simulation.run(n_ticks, callback=report if simulation.graph.n_nodes else None)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Collect records
    filepath = args.input
    if filepath is None and args.inline is None:
        filepath = config.DEFAULT_GRAPH_PATH

    try:
        records = collect_records(filepath=filepath, inline=args.inline)
        graph = DependencyGraph.from_records(records, exclude=args.exclude)
    except MalformedInputError as e:
        logger.error(f"Invalid node records: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read node records: {e}")
        return 1

    # 3. Parameters & simulation
    parameters = parameters_from_args(args)
    logger.info(f"Parameters: {parameters.as_dict()}")
    simulation = Simulation(graph, parameters=parameters, seed=args.seed, spread=args.spread)

    # 4. Run
    run_layout(simulation, args.ticks, args.report_every)

    frame = simulation.frame()
    if graph.n_nodes:
        min_x, min_y, max_x, max_y = frame.bounds()
        logger.info(
            f"Layout after {frame.tick} ticks spans "
            f"[{min_x:.1f}, {max_x:.1f}] x [{min_y:.1f}, {max_y:.1f}]"
        )
        lengths = frame.edge_segments().length
        if lengths.size:
            logger.info(f"Mean edge length: {float(np.mean(lengths)):.1f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
