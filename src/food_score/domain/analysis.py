"""Product-level analysis models."""

from dataclasses import dataclass, field

from food_score.domain.additives import AdditiveLoad, FunctionGroup, ResolvedAdditive
from food_score.domain.interactions import InteractionSummary, InteractionWarning
from food_score.domain.nutrients import NutrientAnalysis, NutrientProfile
from food_score.domain.profiles import PersonalizedAnalysis
from food_score.domain.regulatory import RegulatoryRow
from food_score.domain.scoring import HealthScore


@dataclass(frozen=True)
class ProductInput:
    """Already-normalized product data supplied by the caller."""

    nutrients: NutrientProfile
    additives: list[str] = field(default_factory=list)
    nova_group: int | None = None
    labels: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    ingredients_text: str | None = None


@dataclass(frozen=True)
class ProductAnalysis:
    """Combined output for one product."""

    health_score: HealthScore
    nutrients: list[NutrientAnalysis]
    additives: list[ResolvedAdditive]
    function_groups: list[FunctionGroup]
    additive_load: AdditiveLoad
    additive_load_normalized: int
    interactions: list[InteractionWarning]
    interaction_summary: InteractionSummary
    regulations: dict[str, list[RegulatoryRow]]
    personalized: PersonalizedAnalysis | None = None
