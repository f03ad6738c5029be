# src/rf_chain_planner/catalog.py
from __future__ import annotations

from typing import Sequence, Tuple

from .components import (
    Amplifier,
    Component,
    ComponentKind,
    FixedAttenuator,
    PowerDivider,
    Switch,
    VariableAttenuator,
)


# Example part values; order matters because results are reported by index.
DEFAULT_CATALOG: Tuple[Component, ...] = (
    Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=10.0),
    Switch(gain_db=-1.0, cost_usd=10.0, leakage_db=0.01),
    VariableAttenuator(gain_db=-10.0, cost_usd=20.0),
    FixedAttenuator(gain_db=-5.0, cost_usd=5.0),
    PowerDivider(gain_db=-3.0, cost_usd=15.0),
)


def catalog_has_kind(catalog: Sequence[Component], kind: ComponentKind) -> bool:
    return any(c.kind is kind for c in catalog)


def indices_of_kind(catalog: Sequence[Component], kind: ComponentKind) -> Tuple[int, ...]:
    """Catalog indices whose component is of the given kind."""
    return tuple(i for i, c in enumerate(catalog) if c.kind is kind)
