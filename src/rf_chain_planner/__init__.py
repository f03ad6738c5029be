# src/rf_chain_planner/__init__.py
"""
RF Signal-Chain Component Selector.

Brute-force search for the cheapest ordered chain of catalog components that
meets a gain floor, a leakage ceiling and per-amplifier power handling, with
a power divider mandated for dual output:

    stage 1 -> stage 2 -> stage 3   (each drawn from the catalog, repeats allowed)
"""

from .components import (
    Amplifier,
    Component,
    ComponentKind,
    FixedAttenuator,
    PowerDivider,
    Switch,
    VariableAttenuator,
)

from .config_models import (
    Requirements,
    SearchSettings,
    SelectionConfig,
    default_config,
)

from .validator import (
    is_valid_configuration,
    evaluate_configuration,
)

from .optimizer import (
    ChainPlanner,
    Configuration,
    Found,
    NotFound,
    select_cheapest_configuration,
)

__all__ = [
    "Amplifier",
    "Component",
    "ComponentKind",
    "FixedAttenuator",
    "PowerDivider",
    "Switch",
    "VariableAttenuator",
    "Requirements",
    "SearchSettings",
    "SelectionConfig",
    "default_config",
    "is_valid_configuration",
    "evaluate_configuration",
    "ChainPlanner",
    "Configuration",
    "Found",
    "NotFound",
    "select_cheapest_configuration",
]
