import pytest
from pydantic import ValidationError

from ride_sim.config.models import (
    PricingPolicyPlatformFeeModel,
    ScenarioModel,
    TripOutcomeExponentialModel,
)
from ride_sim.policy.matching import LeastRecentlyDrivenMatchingPolicy
from ride_sim.policy.pricing import PlatformFeePricingPolicy
from ride_sim.runtime.policy_factory import make_matching_policy, make_pricing_policy

BASE = {
    "name": "cfg",
    "run_id": "c-1",
    "sim": {"epoch": [2025, 1, 1, 0, 0, 0], "seed": 7, "duration": 60},
}


def test_defaults():
    model = ScenarioModel.model_validate(BASE)
    assert model.data is None
    assert model.matching.tie_break == "lowest_id"
    assert model.pricing.platform_fee == 1.65
    assert model.pricing.driver_share == 0.80
    assert model.outcome.rating_weights is None


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({**BASE, "surge": True})


def test_data_paths_expand_user(monkeypatch):
    monkeypatch.setenv("HOME", "/home/sim")
    model = ScenarioModel.model_validate(
        {**BASE, "data": {"passengers": "~/p.csv", "drivers": "d.csv", "trips": "t.csv"}}
    )
    assert model.data.passengers == "/home/sim/p.csv"


@pytest.mark.parametrize("weights", [[], ""])
def test_empty_rating_weights_mean_uniform(weights):
    assert TripOutcomeExponentialModel(rating_weights=weights).rating_weights is None


@pytest.mark.parametrize(
    "weights", [[1, 1, 1], [0, 0, 0, 0, 0], [1, 1, 1, 1, float("nan")], [1, 1, 1, 1, -1]]
)
def test_bad_rating_weights(weights):
    with pytest.raises(ValidationError):
        TripOutcomeExponentialModel(rating_weights=weights)


def test_trip_bounds_must_be_ordered():
    with pytest.raises(ValidationError):
        TripOutcomeExponentialModel(min_trip_s=600, max_trip_s=60)


@pytest.mark.parametrize(
    "field, value", [("fare", -1), ("platform_fee", -0.5), ("driver_share", 1.2)]
)
def test_bad_pricing(field, value):
    with pytest.raises(ValidationError):
        PricingPolicyPlatformFeeModel(**{field: value})


def test_factories_build_configured_policies():
    model = ScenarioModel.model_validate(
        {
            **BASE,
            "matching": {"kind": "least_recently_driven", "tie_break": "collection_order"},
            "pricing": {"kind": "platform_fee", "fare": 12.0, "platform_fee": 2.0},
        }
    )
    matching = make_matching_policy(model.matching)
    assert isinstance(matching, LeastRecentlyDrivenMatchingPolicy)
    assert matching.tie_break == "collection_order"

    pricing = make_pricing_policy(model.pricing)
    assert isinstance(pricing, PlatformFeePricingPolicy)
    assert pricing.driver_payout(12.0) == pytest.approx(8.0)


def test_factories_reject_unknown_models():
    with pytest.raises(TypeError):
        make_matching_policy(object())
    with pytest.raises(TypeError):
        make_pricing_policy(object())
