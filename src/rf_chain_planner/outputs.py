# src/rf_chain_planner/outputs.py
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .components import Amplifier, Switch
from .config_models import SelectionConfig
from .optimizer import Found, SelectionOutcome
from .validator import gain_profile


def _num(x: float) -> str:
    """Shortest general form: 20.0 -> '20', 0.01 -> '0.01'."""
    return f"{x:g}"


def format_report(outcome: SelectionOutcome) -> str:
    """
    Human-readable summary of the selected chain:

        Best Configuration:
        Type: <kind>, Gain: <gain> dB, Cost: $<cost>
        ...
        Total Cost: $<total>
    """
    lines: List[str] = ["Best Configuration:"]
    if not isinstance(outcome, Found):
        lines.append("No feasible configuration found.")
        return "\n".join(lines) + "\n"

    for comp in outcome.configuration:
        lines.append(
            f"Type: {comp.kind.label}, Gain: {_num(comp.gain_db)} dB, "
            f"Cost: ${_num(comp.cost_usd)}"
        )
    lines.append(f"Total Cost: ${_num(outcome.cost)}")
    return "\n".join(lines) + "\n"


def write_selection_json(
    path: str | Path,
    cfg: SelectionConfig,
    outcome: SelectionOutcome,
) -> None:
    """
    JSON record of the run: requirements, the selected chain stage by stage
    (null when nothing is feasible), total cost and sweep statistics.
    """
    path = Path(path)
    req = cfg.requirements

    chain = None
    total_cost = None
    if isinstance(outcome, Found):
        profile = gain_profile(outcome.configuration.components)
        chain = []
        for stage, (idx, comp) in enumerate(
            zip(outcome.configuration.indices, outcome.configuration.components)
        ):
            chain.append(
                {
                    "stage": stage,
                    "catalog_index": idx,
                    "kind": comp.kind.label,
                    "gain_db": comp.gain_db,
                    "cost_usd": comp.cost_usd,
                    "p1db_dbm": comp.p1db_dbm if isinstance(comp, Amplifier) else None,
                    "leakage_db": comp.leakage_db if isinstance(comp, Switch) else None,
                    "cumulative_gain_db": float(profile[stage]),
                }
            )
        total_cost = outcome.cost

    stats = outcome.stats
    record = {
        "description": cfg.description,
        "feasible": isinstance(outcome, Found),
        "requirements": {
            "required_gain_db": req.required_gain_db,
            "max_leakage_db": req.max_leakage_db,
            "max_power_dbm": req.max_power_dbm,
            "required_kind": req.required_kind.label,
        },
        "chain_length": cfg.settings.chain_length,
        "catalog_size": len(cfg.catalog),
        "chain": chain,
        "total_cost_usd": total_cost,
        "search": {
            "candidates_total": stats.candidates_total,
            "candidates_evaluated": stats.candidates_evaluated,
            "feasible": stats.feasible,
            "rejections": stats.rejections,
        },
        "modelling_notes": {
            "power_check": "cumulative gain vs each amplifier's p1dB",
            "max_power_dbm_used": False,
            "gain_contributors": ["amplifier", "variable attenuator", "fixed attenuator"],
        },
    }
    path.write_text(json.dumps(record, indent=2))
