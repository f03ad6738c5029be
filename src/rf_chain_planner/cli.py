# src/rf_chain_planner/cli.py
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config_models import default_config
from .optimizer import ChainPlanner, Found
from .outputs import format_report, write_selection_json
from .plotting import plot_gain_profile
from .progress import ProgressReporter


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Lowest-cost RF signal-chain selector (dual-output chain)"
    )
    parser.add_argument(
        "--json-out",
        type=str,
        default=None,
        help="Write a JSON record of the selection to this path",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save a gain-profile plot of the selected chain to this path",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Split the sweep across worker processes",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable textual progress indicators",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable INFO logging on stderr",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = default_config()
    if args.parallel:
        cfg = dataclasses.replace(
            cfg, settings=dataclasses.replace(cfg.settings, parallel=True)
        )

    progress = None if args.no_progress else ProgressReporter()
    planner = ChainPlanner(cfg, progress=progress)
    outcome = planner.run()

    sys.stdout.write(format_report(outcome))

    if args.json_out:
        out = Path(args.json_out)
        out.parent.mkdir(parents=True, exist_ok=True)
        write_selection_json(out, cfg, outcome)

    if args.plot:
        if isinstance(outcome, Found):
            out = Path(args.plot)
            out.parent.mkdir(parents=True, exist_ok=True)
            plot_gain_profile(outcome.configuration, cfg.requirements, out_path=out)
        elif progress is not None:
            progress.message("No feasible chain; skipping gain-profile plot.")


if __name__ == "__main__":
    main()
