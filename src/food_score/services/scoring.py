"""Nutrient health scoring."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from food_score.domain.nutrients import NutrientProfile
from food_score.domain.profiles import GeneticProfile
from food_score.domain.scoring import (
    ConfigKind,
    HealthScore,
    ScoreBreakdown,
    ScoreDetail,
    ScoringConfig,
    round_half_up,
)
from food_score.services.profiles import ProfileRepository
from food_score.services.registry import AdditiveRegistry

POSITIVE_SCALE = 15
NEGATIVE_SCALE = 100
BASE_SCORE = 100

_EMPTY_CALORIE_SUGAR = 5.0
_EMPTY_CALORIE_CALORIES = 50.0
_EMPTY_CALORIE_FIBER = 0.5
_EMPTY_CALORIE_PROTEIN = 1.0

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Factor:
    name: str
    threshold_key: str
    unit: str = "g"


_SUGAR = _Factor("sugar", "sugar")
_SATURATED_FAT = _Factor("saturated fat", "saturated_fat")
_SODIUM = _Factor("sodium", "sodium")
_CALORIES = _Factor("calories", "calories", unit="kcal")
_FIBER = _Factor("fiber", "fiber")
_PROTEIN = _Factor("protein", "protein")
_OMEGA3 = _Factor("omega-3", "omega3")


@dataclass
class _Tally:
    details: list[ScoreDetail] = field(default_factory=list)
    positive: int = 0
    negative: int = 0

    def add(self, detail: ScoreDetail | None) -> None:
        if detail is None:
            return
        self.details.append(detail)
        if detail.type == "positive":
            self.positive += detail.points
        else:
            self.negative += abs(detail.points)


@dataclass
class HealthScorer:
    """Computes the 0-100 score and its itemized breakdown."""

    registry: AdditiveRegistry
    configs: dict[str, ScoringConfig]
    profiles: ProfileRepository
    beverage_keywords: list[str]
    organic_labels: list[str]
    nova_penalties: dict[int, float]
    nova_descriptions: dict[int, str]
    empty_calorie_caps: dict[str, int]
    _beverage_patterns: list[re.Pattern[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._beverage_patterns = [_keyword_pattern(keyword) for keyword in self.beverage_keywords]

    def score(  # noqa: PLR0913
        self,
        nutrients: NutrientProfile,
        additives: Sequence[str] = (),
        nova_group: int | None = None,
        labels: Sequence[str] = (),
        categories: Sequence[str] = (),
        user_id: str | None = None,
    ) -> HealthScore:
        profile = self.profiles.get_profile(user_id) if user_id else None
        return self.score_with_profile(
            nutrients, additives, nova_group, labels, categories, profile
        )

    def score_with_profile(  # noqa: PLR0913
        self,
        nutrients: NutrientProfile,
        additives: Sequence[str],
        nova_group: int | None,
        labels: Sequence[str],
        categories: Sequence[str],
        profile: GeneticProfile | None,
    ) -> HealthScore:
        beverage = self.is_beverage(categories)
        config, kind = self.select_config(categories, profile)
        weights = config.weights
        tally = _Tally()

        tally.add(_negative(_SUGAR, nutrients.sugars, config))
        tally.add(_negative(_SATURATED_FAT, nutrients.saturated_fat, config))
        tally.add(_negative(_SODIUM, nutrients.sodium_g, config))
        tally.add(_negative(_CALORIES, nutrients.calories, config))
        tally.add(_positive(_FIBER, nutrients.fiber, config))
        tally.add(_positive(_PROTEIN, nutrients.proteins, config))
        omega3_active = weights.omega3 > 0 and config.threshold("omega3") is not None
        if omega3_active:
            tally.add(_positive(_OMEGA3, nutrients.omega3, config))
        tally.add(self._additive_detail(additives, weights.additives))
        tally.add(self._nova_detail(nova_group, weights.processing))
        tally.add(self._organic_detail(labels, weights.organic))
        tally.add(_empty_calorie_detail(nutrients, beverage))

        empty_calorie_cap = self.empty_calorie_caps["beverage" if beverage else "default"]
        max_positive = weights.fiber + weights.protein + weights.organic
        if omega3_active:
            max_positive += weights.omega3
        max_negative = (
            weights.sugar
            + weights.saturated_fat
            + weights.sodium
            + weights.calories
            + weights.processing
            + weights.additives
            + empty_calorie_cap
        )

        raw = BASE_SCORE
        if max_positive:
            raw += POSITIVE_SCALE * tally.positive / max_positive
        if max_negative:
            raw -= NEGATIVE_SCALE * tally.negative / max_negative
        score = max(0, min(100, round_half_up(raw)))
        _logger.debug("Scored product with %s config: %s", kind, score)
        return HealthScore(
            score=score,
            breakdown=ScoreBreakdown(
                positive_points=tally.positive,
                negative_points=tally.negative,
                details=tally.details,
            ),
            is_personalized=kind == "personalized",
            config_kind=kind,
        )

    def select_config(
        self, categories: Sequence[str], profile: GeneticProfile | None
    ) -> tuple[ScoringConfig, ConfigKind]:
        """Personalized config first, then beverage, then default."""
        if profile is not None and profile.scoring_config is not None:
            return profile.scoring_config, "personalized"
        if self.is_beverage(categories):
            return self.configs["beverage"], "beverage"
        return self.configs["default"], "default"

    def is_beverage(self, categories: Sequence[str]) -> bool:
        return any(
            pattern.search(category)
            for category in categories
            for pattern in self._beverage_patterns
        )

    def _additive_detail(self, additives: Sequence[str], weight: int) -> ScoreDetail:
        analysis = self.registry.analyze(list(additives))
        avoid = len(analysis.avoid)
        moderate = len(analysis.moderate)
        unknown = len(analysis.unknown)
        if not (avoid or moderate or unknown):
            return ScoreDetail("additives", 0, "No concerning additives found", "negative")
        penalty = min(
            weight,
            round_half_up(weight * avoid / 3 + weight * moderate / 10 + weight * unknown / 15),
        )
        if avoid:
            description = f"Contains {avoid} additive(s) to avoid"
        elif moderate:
            description = f"Contains {moderate} additive(s) with moderate risk"
        else:
            description = f"Contains {unknown} unknown additive(s)"
        return ScoreDetail("additives", -penalty, description, "negative")

    def _nova_detail(self, nova_group: int | None, weight: int) -> ScoreDetail | None:
        if nova_group not in self.nova_penalties:
            return None
        penalty = round_half_up(weight * self.nova_penalties[nova_group])
        description = f"NOVA {nova_group}: {self.nova_descriptions[nova_group]}"
        return ScoreDetail("processing", -penalty, description, "negative")

    def _organic_detail(self, labels: Sequence[str], weight: int) -> ScoreDetail | None:
        lowered = [label.lower() for label in labels]
        if any(organic in label for label in lowered for organic in self.organic_labels):
            return ScoreDetail("organic", weight, "Organic certification bonus", "positive")
        return None


def _negative(
    factor: _Factor, value: float | None, config: ScoringConfig
) -> ScoreDetail | None:
    thresholds = config.threshold(factor.threshold_key)
    if value is None or thresholds is None:
        return None
    weight = getattr(config.weights, factor.threshold_key)
    shown = f"{value:.1f}{factor.unit}/100g"
    if value <= thresholds.low:
        return ScoreDetail(factor.name, 0, f"Low {factor.name}: {shown} (excellent)", "negative")
    if value <= thresholds.medium:
        points = round_half_up(weight / 2 * _fraction(value, thresholds.low, thresholds.medium))
        return ScoreDetail(factor.name, -points, f"Moderate {factor.name}: {shown}", "negative")
    if value <= thresholds.high:
        points = round_half_up(
            weight / 2 + weight / 2 * _fraction(value, thresholds.medium, thresholds.high)
        )
        return ScoreDetail(
            factor.name, -points, f"High {factor.name}: {shown} (caution)", "negative"
        )
    return ScoreDetail(
        factor.name, -weight, f"Very high {factor.name}: {shown} (excessive)", "negative"
    )


def _positive(
    factor: _Factor, value: float | None, config: ScoringConfig
) -> ScoreDetail | None:
    thresholds = config.threshold(factor.threshold_key)
    if value is None or thresholds is None:
        return None
    weight = getattr(config.weights, factor.threshold_key)
    shown = f"{value:.1f}{factor.unit}/100g"
    if value >= thresholds.high:
        return ScoreDetail(factor.name, weight, f"Excellent {factor.name}: {shown}", "positive")
    if value >= thresholds.medium:
        points = round_half_up(
            weight / 2 + weight / 2 * _fraction(value, thresholds.medium, thresholds.high)
        )
        return ScoreDetail(factor.name, points, f"Good {factor.name}: {shown}", "positive")
    if value >= thresholds.low:
        points = round_half_up(weight / 2 * _fraction(value, thresholds.low, thresholds.medium))
        return ScoreDetail(factor.name, points, f"Moderate {factor.name}: {shown}", "positive")
    return ScoreDetail(factor.name, 0, f"Low {factor.name}: {shown}", "positive")


def _empty_calorie_detail(nutrients: NutrientProfile, beverage: bool) -> ScoreDetail | None:
    """Flat penalty for sugar or energy with negligible fiber and protein."""
    sugar = nutrients.sugars
    calories = nutrients.calories
    if nutrients.fiber is None or nutrients.proteins is None:
        return None
    has_energy = (sugar is not None and sugar > _EMPTY_CALORIE_SUGAR) or (
        calories is not None and calories > _EMPTY_CALORIE_CALORIES
    )
    if not has_energy:
        return None
    if nutrients.fiber >= _EMPTY_CALORIE_FIBER or nutrients.proteins >= _EMPTY_CALORIE_PROTEIN:
        return None
    sugar = sugar or 0.0
    if beverage:
        penalty = 30 if sugar > 8 else 20
    else:
        penalty = 20 if sugar > 15 else 15
    return ScoreDetail(
        "empty calories",
        -penalty,
        "Empty calories: energy with almost no fiber or protein",
        "negative",
    )


def _fraction(value: float, lower: float, upper: float) -> float:
    return (value - lower) / (upper - lower)


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}(?:s|es)?\b", re.IGNORECASE)

