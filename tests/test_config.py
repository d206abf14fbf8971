from __future__ import annotations

import pytest
from pydantic import ValidationError

from tour_pricing.config import PricingPolicy, Settings
from tour_pricing.occupancy.schemas import ChildPolicy


def test_defaults_match_policy_defaults():
    assert Settings(_env_file=None).pricing_policy() == PricingPolicy()


def test_pricing_policy_from_environment(monkeypatch):
    monkeypatch.setenv("FLIGHT_PRICE_PER_PERSON", "9900")
    monkeypatch.setenv("TRANSFER_TIERS", "[[2, 3000], [6, 6000]]")
    monkeypatch.setenv("INFANT_MAX_AGE", "2")
    monkeypatch.setenv("PROFIT_MARGIN_PERCENT", "7.5")

    policy = Settings(_env_file=None).pricing_policy()

    assert policy.flight_price_per_person == 9900
    assert policy.transfer_tiers == ((2, 3000), (6, 6000))
    assert policy.child_age_bands.policy_for(2) == ChildPolicy.FREE
    assert policy.profit_margin_percent == 7.5


def test_misordered_age_bands_are_rejected(monkeypatch):
    monkeypatch.setenv("INFANT_MAX_AGE", "12")

    with pytest.raises(ValidationError):
        Settings(_env_file=None).pricing_policy()
