# src/rf_chain_planner/validator.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .components import Amplifier, Component, dB, dBm


class RejectionReason(Enum):
    POWER_HANDLING = "power_handling"
    INSUFFICIENT_GAIN = "insufficient_gain"
    EXCESS_LEAKAGE = "excess_leakage"


@dataclass(frozen=True)
class ChainEvaluation:
    """
    Outcome of evaluating one ordered chain.

    total_gain_db / total_leakage_db are the running sums at the point the
    evaluation stopped: after the offending amplifier for a power-handling
    rejection, after the last stage otherwise.
    """
    feasible: bool
    total_gain_db: dB
    total_leakage_db: dB
    reason: Optional[RejectionReason] = None
    failed_stage: Optional[int] = None


def evaluate_configuration(
    configuration: Sequence[Component],
    required_gain_db: dB,
    max_leakage_db: dB,
    max_power_dbm: dBm,
    chain_length: Optional[int] = None,
) -> ChainEvaluation:
    """
    Walk the chain in order, accumulating gain (amplifiers, attenuators) and
    leakage (switches).

    Each amplifier is checked against its own p1dB using the cumulative gain
    up to and including that amplifier, so the verdict depends on stage
    order. A chain is feasible when no amplifier trips and the final totals
    meet required_gain_db / max_leakage_db.

    max_power_dbm is accepted for interface compatibility and ignored.
    """
    if chain_length is not None and len(configuration) != chain_length:
        raise ValueError(
            f"Expected a chain of {chain_length} components, got {len(configuration)}"
        )

    total_gain = 0.0
    total_leakage = 0.0

    for stage, comp in enumerate(configuration):
        kind = comp.kind
        if kind.contributes_gain:
            total_gain += comp.gain_db
        if kind.contributes_leakage:
            total_leakage += comp.leakage_db
        if isinstance(comp, Amplifier) and total_gain > comp.p1db_dbm:
            return ChainEvaluation(
                feasible=False,
                total_gain_db=total_gain,
                total_leakage_db=total_leakage,
                reason=RejectionReason.POWER_HANDLING,
                failed_stage=stage,
            )

    if total_gain < required_gain_db:
        reason: Optional[RejectionReason] = RejectionReason.INSUFFICIENT_GAIN
    elif total_leakage > max_leakage_db:
        reason = RejectionReason.EXCESS_LEAKAGE
    else:
        reason = None

    return ChainEvaluation(
        feasible=reason is None,
        total_gain_db=total_gain,
        total_leakage_db=total_leakage,
        reason=reason,
    )


def is_valid_configuration(
    configuration: Sequence[Component],
    required_gain_db: dB,
    max_leakage_db: dB,
    max_power_dbm: dBm,
    chain_length: Optional[int] = None,
) -> bool:
    return evaluate_configuration(
        configuration,
        required_gain_db,
        max_leakage_db,
        max_power_dbm,
        chain_length=chain_length,
    ).feasible


def gain_profile(configuration: Sequence[Component]) -> np.ndarray:
    """Cumulative chain gain (dB) after each stage; non-contributors add 0 dB."""
    steps = np.array(
        [c.gain_db if c.kind.contributes_gain else 0.0 for c in configuration],
        dtype=float,
    )
    return np.cumsum(steps)
