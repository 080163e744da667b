# ride_sim/policy/pricing.py

from ride_sim.app.protocols import PricingPolicy
from ride_sim.domain.entities.driver import Driver
from ride_sim.domain.entities.trip import Trip
from ride_sim.domain.fees import DRIVER_SHARE, PLATFORM_FEE, driver_payout


class PlatformFeePricingPolicy(PricingPolicy):
    """Flat fare per trip; the platform keeps a fixed fee and a cut of the rest."""

    def __init__(
        self,
        fare: float = 10.0,
        platform_fee: float = PLATFORM_FEE,
        driver_share: float = DRIVER_SHARE,
    ):
        self.base_fare = fare
        self.platform_fee = platform_fee
        self.driver_share = driver_share

    def fare(self, trip: Trip) -> float:
        return self.base_fare

    def driver_payout(self, cost: float) -> float:
        return driver_payout(cost, platform_fee=self.platform_fee, driver_share=self.driver_share)

    def driver_revenue(self, driver: Driver) -> float:
        return driver.total_revenue(platform_fee=self.platform_fee, driver_share=self.driver_share)
