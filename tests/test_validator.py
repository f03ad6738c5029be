# tests/test_validator.py
from __future__ import annotations

import numpy as np
import pytest

from rf_chain_planner.components import (
    Amplifier,
    FixedAttenuator,
    PowerDivider,
    Switch,
    VariableAttenuator,
)
from rf_chain_planner.validator import (
    RejectionReason,
    evaluate_configuration,
    gain_profile,
    is_valid_configuration,
)


def _check(chain, req):
    return evaluate_configuration(
        chain, req.required_gain_db, req.max_leakage_db, req.max_power_dbm
    )


def test_amplifier_divider_fixed_attenuator_rejected(default_catalog):
    """(0, 4, 3) on the default catalog: the 20 dB amplifier is over its 10 dBm p1dB."""
    chain = [default_catalog[i] for i in (0, 4, 3)]
    assert not is_valid_configuration(chain, 15.0, 0.05, 10.0)


def test_power_check_rejects_chain_meeting_gain_and_leakage(default_catalog, requirements):
    """
    (0, 4, 1): gain 20 dB >= 15 and leakage 0.01 <= 0.05, but cumulative gain at
    the amplifier (20) exceeds its p1dB (10).
    """
    chain = [default_catalog[i] for i in (0, 4, 1)]
    ev = _check(chain, requirements)
    assert not ev.feasible
    assert ev.reason is RejectionReason.POWER_HANDLING
    assert ev.failed_stage == 0
    assert ev.total_gain_db == pytest.approx(20.0)

    # Same chain with a tolerant amplifier passes every other clause.
    relaxed = [Amplifier(20.0, 50.0, 25.0), chain[1], chain[2]]
    ev_relaxed = _check(relaxed, requirements)
    assert ev_relaxed.feasible
    assert ev_relaxed.total_gain_db == pytest.approx(20.0)
    assert ev_relaxed.total_leakage_db == pytest.approx(0.01)


def test_power_check_is_order_dependent():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=18.0)
    pad = FixedAttenuator(gain_db=-5.0, cost_usd=5.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)

    # pad before the amplifier: 15 dB at the amplifier, within 18
    assert is_valid_configuration([pad, amp, div], 10.0, 0.05, 10.0)
    # amplifier first: 20 dB at the amplifier, over 18
    ev = evaluate_configuration([amp, pad, div], 10.0, 0.05, 10.0)
    assert not ev.feasible
    assert ev.reason is RejectionReason.POWER_HANDLING


def test_power_check_stops_before_later_stages():
    """Later attenuation cannot rescue an amplifier that already tripped."""
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=10.0)
    va = VariableAttenuator(gain_db=-10.0, cost_usd=20.0)
    ev = evaluate_configuration([amp, va, va], -100.0, 1.0, 10.0)
    assert ev.reason is RejectionReason.POWER_HANDLING
    assert ev.total_gain_db == pytest.approx(20.0)


def test_power_check_uses_strict_comparison():
    amp = Amplifier(gain_db=10.0, cost_usd=50.0, p1db_dbm=10.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)
    assert is_valid_configuration([amp, div, div], 10.0, 0.05, 10.0)


def test_second_amplifier_checked_against_running_total():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)
    ev = evaluate_configuration([amp, amp, div], 15.0, 0.05, 10.0)
    assert ev.reason is RejectionReason.POWER_HANDLING
    assert ev.failed_stage == 1
    assert ev.total_gain_db == pytest.approx(40.0)


def test_insufficient_gain_and_excess_leakage():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    sw = Switch(gain_db=-1.0, cost_usd=10.0, leakage_db=0.03)
    va = VariableAttenuator(gain_db=-10.0, cost_usd=20.0)

    ev = evaluate_configuration([amp, va, sw], 15.0, 0.05, 10.0)
    assert ev.reason is RejectionReason.INSUFFICIENT_GAIN
    assert ev.total_gain_db == pytest.approx(10.0)

    ev = evaluate_configuration([amp, sw, sw], 15.0, 0.05, 10.0)
    assert ev.reason is RejectionReason.EXCESS_LEAKAGE
    assert ev.total_leakage_db == pytest.approx(0.06)


def test_switch_and_divider_do_not_add_gain():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    sw = Switch(gain_db=-1.0, cost_usd=10.0, leakage_db=0.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)
    ev = evaluate_configuration([amp, sw, div], 20.0, 0.05, 10.0)
    assert ev.feasible
    assert ev.total_gain_db == pytest.approx(20.0)


def test_gain_boundary_is_inclusive():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    pad = FixedAttenuator(gain_db=-5.0, cost_usd=5.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)
    assert is_valid_configuration([amp, pad, div], 15.0, 0.0, 10.0)


def test_max_power_has_no_effect():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    div = PowerDivider(gain_db=-3.0, cost_usd=15.0)
    chain = [amp, div, div]
    verdicts = {
        is_valid_configuration(chain, 15.0, 0.05, max_power)
        for max_power in (-100.0, 0.0, 10.0, 1000.0)
    }
    assert verdicts == {True}


def test_chain_length_is_enforced_when_given(default_catalog):
    with pytest.raises(ValueError, match="chain of 3"):
        evaluate_configuration(default_catalog[:2], 15.0, 0.05, 10.0, chain_length=3)


def test_gain_profile_cumulative():
    amp = Amplifier(gain_db=20.0, cost_usd=50.0, p1db_dbm=25.0)
    sw = Switch(gain_db=-1.0, cost_usd=10.0, leakage_db=0.01)
    pad = FixedAttenuator(gain_db=-5.0, cost_usd=5.0)
    profile = gain_profile([pad, amp, sw])
    np.testing.assert_allclose(profile, [-5.0, 15.0, 15.0])
