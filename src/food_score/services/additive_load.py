"""Cumulative additive load."""

from dataclasses import dataclass

from food_score.domain.additives import AdditiveLoad, LoadBreakdown, ProcessingLevel
from food_score.domain.scoring import round_half_up
from food_score.services.registry import AdditiveRegistry

SAFE_WEIGHT = 1
MODERATE_WEIGHT = 3
AVOID_WEIGHT = 5
UNKNOWN_WEIGHT = 2

# Upper bound (inclusive) of each band; anything above the last is ultra.
_LEVEL_BOUNDS: tuple[tuple[int, ProcessingLevel], ...] = (
    (5, "minimal"),
    (15, "low"),
    (30, "moderate"),
    (50, "high"),
)
_NORMALIZATION_CEILING = 60

_LEVEL_INFO: dict[ProcessingLevel, tuple[str, str]] = {
    "minimal": ("Minimally Processed", "Few or no additives, closest to whole foods"),
    "low": ("Low Processing", "Some safe additives, minimal concerns"),
    "moderate": ("Moderately Processed", "Several additives, some may warrant attention"),
    "high": ("Highly Processed", "Many additives including concerning ones"),
    "ultra": ("Ultra-Processed", "Extensive use of additives, significant concerns"),
}


@dataclass(frozen=True)
class LevelInfo:
    label: str
    description: str


@dataclass
class AdditiveLoadCalculator:
    """Weights additive counts by risk tier and bands the total."""

    registry: AdditiveRegistry

    def load(self, codes: list[str]) -> AdditiveLoad:
        analysis = self.registry.analyze(codes)
        breakdown = LoadBreakdown(
            safe_count=len(analysis.safe),
            moderate_count=len(analysis.moderate),
            avoid_count=len(analysis.avoid),
            unknown_count=len(analysis.unknown),
        )
        weighted = (
            breakdown.safe_count * SAFE_WEIGHT
            + breakdown.moderate_count * MODERATE_WEIGHT
            + breakdown.avoid_count * AVOID_WEIGHT
            + breakdown.unknown_count * UNKNOWN_WEIGHT
        )
        return AdditiveLoad(
            total_count=len(codes),
            weighted_score=weighted,
            processing_level=processing_level(weighted),
            breakdown=breakdown,
        )


def processing_level(weighted_score: int) -> ProcessingLevel:
    for bound, level in _LEVEL_BOUNDS:
        if weighted_score <= bound:
            return level
    return "ultra"


def normalized_score(load: AdditiveLoad) -> int:
    """Scale the weighted score onto 0-100."""
    ratio = min(load.weighted_score / _NORMALIZATION_CEILING * 100, 100)
    return round_half_up(ratio)


def level_info(level: ProcessingLevel) -> LevelInfo:
    label, description = _LEVEL_INFO[level]
    return LevelInfo(label=label, description=description)


def summary(load: AdditiveLoad) -> str:
    """Human-readable one-line summary of the load."""
    if load.total_count == 0:
        return (
            "No additives detected - this appears to be a whole food or "
            "minimally processed product."
        )
    breakdown = load.breakdown
    parts = []
    if breakdown.avoid_count:
        parts.append(_plural(breakdown.avoid_count, "additive to avoid", "additives to avoid"))
    if breakdown.moderate_count:
        parts.append(
            _plural(breakdown.moderate_count, "moderate-risk additive", "moderate-risk additives")
        )
    if breakdown.safe_count:
        parts.append(_plural(breakdown.safe_count, "safe additive", "safe additives"))
    if breakdown.unknown_count:
        parts.append(
            _plural(breakdown.unknown_count, "unknown additive", "unknown additives")
        )
    return f"{level_info(load.processing_level).label}: {', '.join(parts)}."


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"
