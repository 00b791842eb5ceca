"""Scoring domain models."""

import math
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

DetailType = Literal["positive", "negative"]
ConfigKind = Literal["default", "beverage", "personalized"]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (``round`` is banker's)."""
    return math.floor(value + 0.5)


class Thresholds(BaseModel):
    """Low/medium/high cut points for a nutrient factor."""

    model_config = ConfigDict(frozen=True)

    low: float
    medium: float
    high: float

    @model_validator(mode="after")
    def _check_order(self) -> "Thresholds":
        if not self.low < self.medium < self.high:
            raise ValueError("thresholds must satisfy low < medium < high")
        return self


class ScoringWeights(BaseModel):
    """Maximum points each factor can contribute."""

    model_config = ConfigDict(frozen=True)

    sugar: int
    saturated_fat: int
    sodium: int
    calories: int
    fiber: int
    protein: int
    omega3: int = 0
    additives: int
    organic: int
    processing: int


class ScoringConfig(BaseModel):
    """Weights and thresholds used for a single scoring call."""

    model_config = ConfigDict(frozen=True)

    weights: ScoringWeights
    thresholds: dict[str, Thresholds]

    def threshold(self, factor: str) -> Thresholds | None:
        return self.thresholds.get(factor)


@dataclass(frozen=True)
class ScoreDetail:
    """One itemized contribution to the health score."""

    factor: str
    points: int
    description: str
    type: DetailType

    def __post_init__(self) -> None:
        if self.type == "positive" and self.points < 0:
            raise ValueError(f"positive detail {self.factor} has negative points")
        if self.type == "negative" and self.points > 0:
            raise ValueError(f"negative detail {self.factor} has positive points")


@dataclass(frozen=True)
class ScoreBreakdown:
    positive_points: int = 0
    negative_points: int = 0
    details: list[ScoreDetail] = field(default_factory=list)


@dataclass(frozen=True)
class HealthScore:
    """Final 0-100 score with its breakdown."""

    score: int
    breakdown: ScoreBreakdown
    is_personalized: bool
    config_kind: ConfigKind
