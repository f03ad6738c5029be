# src/rf_chain_planner/components.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

dB = float
dBm = float
USD = float


class ComponentKind(Enum):
    """Closed set of signal-chain component types."""
    AMPLIFIER = "amplifier"
    SWITCH = "switch"
    VARIABLE_ATTENUATOR = "variable attenuator"
    FIXED_ATTENUATOR = "fixed attenuator"
    POWER_DIVIDER = "power divider"

    @property
    def label(self) -> str:
        return self.value

    @property
    def contributes_gain(self) -> bool:
        return self in _GAIN_KINDS

    @property
    def contributes_leakage(self) -> bool:
        return self is ComponentKind.SWITCH


_GAIN_KINDS = frozenset(
    {
        ComponentKind.AMPLIFIER,
        ComponentKind.VARIABLE_ATTENUATOR,
        ComponentKind.FIXED_ATTENUATOR,
    }
)


def _check_cost(cost_usd: USD) -> None:
    if cost_usd < 0:
        raise ValueError(f"cost_usd must be non-negative, got {cost_usd}")


@dataclass(frozen=True)
class Amplifier:
    """
    Gain stage with a power-handling ceiling.

    p1db_dbm is compared against the running chain gain at this stage.
    """
    gain_db: dB
    cost_usd: USD
    p1db_dbm: dBm

    def __post_init__(self) -> None:
        _check_cost(self.cost_usd)

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.AMPLIFIER


@dataclass(frozen=True)
class Switch:
    """
    RF switch. gain_db is its insertion loss; only leakage_db (OFF-state
    leakage) enters the chain evaluation.
    """
    gain_db: dB
    cost_usd: USD
    leakage_db: dB

    def __post_init__(self) -> None:
        _check_cost(self.cost_usd)
        if self.leakage_db < 0:
            raise ValueError(f"leakage_db must be non-negative, got {self.leakage_db}")

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.SWITCH


@dataclass(frozen=True)
class VariableAttenuator:
    gain_db: dB
    cost_usd: USD

    def __post_init__(self) -> None:
        _check_cost(self.cost_usd)

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.VARIABLE_ATTENUATOR


@dataclass(frozen=True)
class FixedAttenuator:
    gain_db: dB
    cost_usd: USD

    def __post_init__(self) -> None:
        _check_cost(self.cost_usd)

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.FIXED_ATTENUATOR


@dataclass(frozen=True)
class PowerDivider:
    """Splits the path for dual output. Its insertion loss is informational."""
    gain_db: dB
    cost_usd: USD

    def __post_init__(self) -> None:
        _check_cost(self.cost_usd)

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.POWER_DIVIDER


Component = Union[Amplifier, Switch, VariableAttenuator, FixedAttenuator, PowerDivider]
