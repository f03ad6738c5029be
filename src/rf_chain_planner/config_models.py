# src/rf_chain_planner/config_models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .catalog import DEFAULT_CATALOG
from .components import Component, ComponentKind, dB, dBm


DEFAULT_CHAIN_LENGTH = 3


@dataclass(frozen=True)
class Requirements:
    """
    Chain-level acceptance thresholds.

    max_power_dbm is carried through to the validator but is not compared
    against anything; the power check uses each amplifier's own p1dB.
    """
    required_gain_db: dB = 15.0
    max_leakage_db: dB = 0.05
    max_power_dbm: dBm = 10.0
    # at least one chain stage must be of this kind ("dual output" needs a divider)
    required_kind: ComponentKind = ComponentKind.POWER_DIVIDER


@dataclass(frozen=True)
class SearchSettings:
    chain_length: int = DEFAULT_CHAIN_LENGTH
    parallel: bool = False

    def __post_init__(self) -> None:
        if self.chain_length < 1:
            raise ValueError(f"chain_length must be >= 1, got {self.chain_length}")


@dataclass(frozen=True)
class SelectionConfig:
    """
    Top-level configuration object for a selection run.
    """
    catalog: Tuple[Component, ...]
    requirements: Requirements = field(default_factory=Requirements)
    settings: SearchSettings = field(default_factory=SearchSettings)

    # Metadata / description
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.catalog:
            raise ValueError("catalog must contain at least one component")
        # accept any sequence, store as tuple
        object.__setattr__(self, "catalog", tuple(self.catalog))


def default_config() -> SelectionConfig:
    """Compiled-in catalog and requirements."""
    return SelectionConfig(
        catalog=DEFAULT_CATALOG,
        requirements=Requirements(),
        settings=SearchSettings(),
        description="default five-part catalog, dual-output chain",
    )
