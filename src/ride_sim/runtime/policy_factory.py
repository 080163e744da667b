from ride_sim.app.protocols import MatchingPolicy, PricingPolicy, TripOutcomePolicy
from ride_sim.config.models import (
    MatchingPolicyLeastRecentlyDrivenModel,
    PricingPolicyPlatformFeeModel,
    TripOutcomeExponentialModel,
)
from ride_sim.policy.matching import LeastRecentlyDrivenMatchingPolicy
from ride_sim.policy.outcome import ExpTripOutcomePolicy
from ride_sim.policy.pricing import PlatformFeePricingPolicy
from ride_sim.sim.rng import RNGRegistry


def make_matching_policy(cfg: MatchingPolicyLeastRecentlyDrivenModel) -> MatchingPolicy:
    if isinstance(cfg, MatchingPolicyLeastRecentlyDrivenModel):
        return LeastRecentlyDrivenMatchingPolicy(tie_break=cfg.tie_break)
    else:
        raise TypeError(cfg)


def make_pricing_policy(cfg: PricingPolicyPlatformFeeModel) -> PricingPolicy:
    if isinstance(cfg, PricingPolicyPlatformFeeModel):
        return PlatformFeePricingPolicy(
            fare=cfg.fare, platform_fee=cfg.platform_fee, driver_share=cfg.driver_share
        )
    else:
        raise TypeError(cfg)


def make_outcome_policy(
    cfg: TripOutcomeExponentialModel, *, rng_registry: RNGRegistry
) -> TripOutcomePolicy:
    if isinstance(cfg, TripOutcomeExponentialModel):
        return ExpTripOutcomePolicy(
            rng_registry=rng_registry,
            mean_trip_s=cfg.mean_trip_s,
            min_trip_s=cfg.min_trip_s,
            max_trip_s=cfg.max_trip_s,
            rating_weights=cfg.rating_weights,
        )
    else:
        raise TypeError(cfg)
