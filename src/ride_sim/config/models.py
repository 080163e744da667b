import os
from math import isfinite
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from ride_sim.domain.fees import DRIVER_SHARE, PLATFORM_FEE


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int]
    seed: int
    duration: int = Field(gt=0)  # seconds


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


class DataModel(BaseModel):
    """CSV files the world is loaded from."""

    model_config = ConfigDict(extra="forbid")
    passengers: str
    drivers: str
    trips: str

    @field_validator("passengers", "drivers", "trips")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class DemandModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    requests_per_hour: float = Field(default=6.0, gt=0)


# ------------------ POLICIES -----------------------------


class TripOutcomeExponentialModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["exponential"] = "exponential"
    mean_trip_s: float = Field(default=900.0, gt=0)
    min_trip_s: float = Field(default=60.0, gt=0)
    max_trip_s: float = Field(default=7200.0, gt=0)
    rating_weights: list[float] | None = None  # weights for ratings 1..5

    @field_validator("rating_weights", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        # [] or "" means uniform
        if v is None or v == "":
            return None
        if isinstance(v, (list, tuple)) and len(v) == 0:
            return None
        return v

    @model_validator(mode="after")
    def _check(self):
        if self.min_trip_s > self.max_trip_s:
            raise ValueError("min_trip_s must be <= max_trip_s")
        w = self.rating_weights
        if w is None:
            return self
        if len(w) != 5:
            raise ValueError(f"rating_weights must have length 5, got {len(w)}")
        if any(not isfinite(float(x)) or x < 0 for x in w):
            raise ValueError("rating_weights must be finite and non-negative")
        if sum(float(x) for x in w) <= 0:
            raise ValueError("rating_weights must sum to a positive value")
        return self


class MatchingPolicyLeastRecentlyDrivenModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["least_recently_driven"] = "least_recently_driven"
    tie_break: Literal["lowest_id", "collection_order"] = "lowest_id"


class PricingPolicyPlatformFeeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["platform_fee"] = "platform_fee"
    fare: float = 10.0  # charged for every simulated trip
    platform_fee: float = PLATFORM_FEE
    driver_share: float = DRIVER_SHARE

    @field_validator("fare", "platform_fee")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator("driver_share")
    @classmethod
    def _fraction(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("driver_share must be within [0, 1]")
        return v


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str
    sim: SimModel
    log: LogModel = LogModel()
    data: DataModel | None = None
    demand: DemandModel = DemandModel()
    outcome: TripOutcomeExponentialModel = Field(default_factory=TripOutcomeExponentialModel)
    matching: MatchingPolicyLeastRecentlyDrivenModel = Field(
        default_factory=MatchingPolicyLeastRecentlyDrivenModel
    )
    pricing: PricingPolicyPlatformFeeModel = Field(default_factory=PricingPolicyPlatformFeeModel)
