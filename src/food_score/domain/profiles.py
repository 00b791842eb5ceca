"""Personal health profile domain models."""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict

from food_score.domain.additives import AdditiveRisk
from food_score.domain.interactions import Severity
from food_score.domain.scoring import ScoringConfig

ConditionFlag = Literal[
    "saturated_fat_sensitive",
    "salt_sensitive",
    "iron_overload_carrier",
    "lactose_intolerant",
    "cardiovascular_risk",
    "fast_caffeine_metabolizer",
    "favorable_carbs",
    "needs_omega3",
    "needs_folate",
    "endurance_type",
    "sulfite_sensitive",
    "pku_carrier",
    "bone_health_concern",
    "ibs_sufferer",
    "migraine_prone",
    "gout_risk",
    "aspirin_sensitive",
    "histamine_intolerant",
    "glutamate_sensitive",
    "child_with_adhd",
]
ExplanationSeverity = Literal["good", "moderate", "high", "critical"]
SummaryStatus = Literal["good", "caution", "bad", "unknown"]
OverallFit = Literal["excellent", "good", "caution", "poor"]
LactoseStatus = Literal["likely", "unlikely", "unknown"]


class RiskOverride(BaseModel):
    """Profile-specific replacement of an additive's risk tier."""

    model_config = ConfigDict(frozen=True)

    risk: AdditiveRisk
    reason: str


class GeneticProfile(BaseModel):
    """Health-condition flags and personal thresholds for one user."""

    model_config = ConfigDict(frozen=True)

    saturated_fat_sensitive: bool = False
    salt_sensitive: bool = False
    iron_overload_carrier: bool = False
    lactose_intolerant: bool = False
    cardiovascular_risk: bool = False
    fast_caffeine_metabolizer: bool = False
    favorable_carbs: bool = False
    needs_omega3: bool = False
    needs_folate: bool = False
    endurance_type: bool = False
    sulfite_sensitive: bool = False
    pku_carrier: bool = False
    bone_health_concern: bool = False
    ibs_sufferer: bool = False
    migraine_prone: bool = False
    gout_risk: bool = False
    aspirin_sensitive: bool = False
    histamine_intolerant: bool = False
    glutamate_sensitive: bool = False
    child_with_adhd: bool = False

    saturated_fat_threshold: float = 5.0
    sugar_threshold: float = 22.5
    sodium_threshold: float = 1.2
    omega3_target: float = 0.5

    scoring_config: ScoringConfig | None = None
    additive_overrides: dict[str, RiskOverride] = {}

    def has(self, condition: str) -> bool:
        return bool(getattr(self, condition, False))


class PersonalizedRule(BaseModel):
    """Condition-triggered risk override for a set of additives."""

    model_config = ConfigDict(frozen=True)

    additives: tuple[str, ...]
    condition: ConditionFlag
    new_risk: AdditiveRisk
    severity: Severity
    warning_title: str
    warning_message: str
    genetic_basis: str


@dataclass(frozen=True)
class PersonalizedAdditiveWarning:
    additive: str
    rule: PersonalizedRule
    original_risk: AdditiveRisk


@dataclass(frozen=True)
class PersonalizedRisk:
    risk: AdditiveRisk
    is_personalized: bool
    reason: str | None = None


@dataclass(frozen=True)
class PersonalizedWarning:
    """Nutrient or ingredient warning tailored to a profile."""

    id: str
    severity: Severity
    title: str
    message: str
    genetic_basis: str
    nutrient_value: float | None = None
    threshold: float | None = None


@dataclass(frozen=True)
class PersonalizedBadge:
    id: str
    type: Literal["positive", "neutral"]
    title: str
    description: str
    genetic_basis: str


@dataclass(frozen=True)
class ContextualExplanation:
    """Standard versus personal threshold for one nutrient."""

    nutrient: str
    value: float
    unit: str
    standard_threshold: float
    personalized_threshold: float
    explanation: str
    severity: ExplanationSeverity
    is_personalized: bool = True


@dataclass(frozen=True)
class AdditiveOverride:
    code: str
    default_risk: AdditiveRisk
    personalized_risk: AdditiveRisk
    reason: str


@dataclass(frozen=True)
class ProfileSummaryItem:
    status: SummaryStatus
    label: str
    detail: str | None = None


@dataclass(frozen=True)
class ProfileSummary:
    items: list[ProfileSummaryItem]
    overall_fit: OverallFit


@dataclass(frozen=True)
class PersonalizedAnalysis:
    """Everything produced for a product when a profile is present."""

    warnings: list[PersonalizedWarning] = field(default_factory=list)
    additive_warnings: list[PersonalizedAdditiveWarning] = field(default_factory=list)
    badges: list[PersonalizedBadge] = field(default_factory=list)
    contextual_explanations: list[ContextualExplanation] = field(default_factory=list)
    additive_overrides: list[AdditiveOverride] = field(default_factory=list)
    profile_summary: ProfileSummary | None = None
