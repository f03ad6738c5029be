# tests/conftest.py
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from rf_chain_planner.catalog import DEFAULT_CATALOG
from rf_chain_planner.components import (
    Amplifier,
    FixedAttenuator,
    PowerDivider,
    Switch,
    VariableAttenuator,
)
from rf_chain_planner.config_models import (
    Requirements,
    SearchSettings,
    SelectionConfig,
)


@pytest.fixture
def default_catalog():
    return DEFAULT_CATALOG


@pytest.fixture
def requirements() -> Requirements:
    """The compiled-in thresholds: 15 dB gain, 0.05 dB leakage."""
    return Requirements(required_gain_db=15.0, max_leakage_db=0.05, max_power_dbm=10.0)


@pytest.fixture
def feasible_catalog():
    """
    Same parts as the default catalog but with an amplifier whose p1dB (25)
    tolerates a single 20 dB stage. Index order matches the default catalog:

        0 amplifier, 1 switch, 2 variable attenuator,
        3 fixed attenuator, 4 power divider

    The cheapest chain containing a divider is amplifier + fixed attenuator
    + divider ($70, 15 dB). amplifier + switch + fixed attenuator ($65) is
    feasible too but has no divider.
    """
    return (
        Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0),
        Switch(gain_db=-1.0, cost_usd=10.0, leakage_db=0.01),
        VariableAttenuator(gain_db=-10.0, cost_usd=20.0),
        FixedAttenuator(gain_db=-5.0, cost_usd=5.0),
        PowerDivider(gain_db=-3.0, cost_usd=15.0),
    )


@pytest.fixture
def feasible_config(feasible_catalog, requirements) -> SelectionConfig:
    return SelectionConfig(
        catalog=feasible_catalog,
        requirements=requirements,
        settings=SearchSettings(chain_length=3, parallel=False),
        description="feasible test catalog",
    )
