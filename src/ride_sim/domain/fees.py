# ride_sim/domain/fees.py

PLATFORM_FEE = 1.65  # dollars, taken off every completed trip
DRIVER_SHARE = 0.80  # driver keeps 80% of what is left


def driver_payout(
    cost: float, *, platform_fee: float = PLATFORM_FEE, driver_share: float = DRIVER_SHARE
) -> float:
    return (cost - platform_fee) * driver_share
