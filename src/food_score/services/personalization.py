"""Profile-aware warnings, badges and overrides."""

from collections.abc import Sequence
from dataclasses import dataclass

from food_score.domain.additives import normalize_code
from food_score.domain.interactions import SEVERITY_ORDER
from food_score.domain.nutrients import NutrientProfile
from food_score.domain.profiles import (
    AdditiveOverride,
    ContextualExplanation,
    ExplanationSeverity,
    GeneticProfile,
    LactoseStatus,
    OverallFit,
    PersonalizedAdditiveWarning,
    PersonalizedAnalysis,
    PersonalizedBadge,
    PersonalizedRisk,
    PersonalizedRule,
    PersonalizedWarning,
    ProfileSummary,
    ProfileSummaryItem,
    RiskOverride,
)
from food_score.services.registry import AdditiveRegistry

NITRITE_CODES = frozenset({"E249", "E250", "E251", "E252"})
IRON_KEYWORDS = ("iron", "ferrous", "ferric")
CAFFEINE_KEYWORDS = ("caffeine", "coffee", "guarana", "green tea extract")
LACTOSE_FREE_LABELS = ("lactose-free", "lactose free", "dairy-free", "dairy free", "vegan")
DAIRY_INGREDIENTS = ("milk", "cream", "butter", "cheese", "whey", "casein", "lactose")
DAIRY_LABELS = ("dairy", "milk", "cheese", "yogurt")
FOLATE_RICH_LABELS = ("legumes", "lentils", "spinach", "asparagus", "broccoli", "beans")

STANDARD_SATURATED_FAT = 5.0
STANDARD_SUGAR = 22.5
STANDARD_SODIUM = 1.2


@dataclass
class PersonalizationService:
    """Applies a personal profile on top of the standard analysis."""

    registry: AdditiveRegistry
    rules: list[PersonalizedRule]

    def apply_additive_rules(
        self, codes: Sequence[str], profile: GeneticProfile
    ) -> list[PersonalizedAdditiveWarning]:
        """Match condition rules against the additive list.

        Only the most severe warning per additive is kept, and the result is
        ordered most severe first.
        """
        present = {normalize_code(code) for code in codes}
        strongest: dict[str, PersonalizedAdditiveWarning] = {}
        for rule in self.rules:
            if not profile.has(rule.condition):
                continue
            for member in rule.additives:
                code = normalize_code(member)
                if code not in present:
                    continue
                current = strongest.get(code)
                if current is None or _rank(rule) < _rank(current.rule):
                    strongest[code] = PersonalizedAdditiveWarning(
                        additive=code,
                        rule=rule,
                        original_risk=self.registry.classify(code),
                    )
        return sorted(strongest.values(), key=lambda warning: _rank(warning.rule))

    def has_critical(self, codes: Sequence[str], profile: GeneticProfile) -> bool:
        """True when any additive triggers a critical rule for this profile."""
        return any(
            warning.rule.severity == "critical"
            for warning in self.apply_additive_rules(codes, profile)
        )

    def personalized_risk(self, code: str, profile: GeneticProfile) -> PersonalizedRisk:
        """Risk tier for one additive after profile overrides and rules."""
        normalized = normalize_code(code)
        override = _overrides(profile).get(normalized)
        if override is not None:
            return PersonalizedRisk(
                risk=override.risk, is_personalized=True, reason=override.reason
            )
        for rule in self.rules:
            if profile.has(rule.condition) and normalized in {
                normalize_code(member) for member in rule.additives
            }:
                return PersonalizedRisk(
                    risk=rule.new_risk, is_personalized=True, reason=rule.genetic_basis
                )
        return PersonalizedRisk(risk=self.registry.classify(normalized), is_personalized=False)

    def additive_overrides(
        self, codes: Sequence[str], profile: GeneticProfile
    ) -> list[AdditiveOverride]:
        overrides = _overrides(profile)
        result = []
        for code in codes:
            normalized = normalize_code(code)
            override = overrides.get(normalized)
            if override is None:
                continue
            result.append(
                AdditiveOverride(
                    code=normalized,
                    default_risk=self.registry.classify(normalized),
                    personalized_risk=override.risk,
                    reason=override.reason,
                )
            )
        return result

    def analyze(  # noqa: PLR0913
        self,
        nutrients: NutrientProfile,
        additives: Sequence[str],
        labels: Sequence[str],
        ingredients_text: str | None,
        profile: GeneticProfile,
    ) -> PersonalizedAnalysis:
        return PersonalizedAnalysis(
            warnings=nutrient_warnings(nutrients, additives, labels, ingredients_text, profile),
            additive_warnings=self.apply_additive_rules(additives, profile),
            badges=badges(nutrients, additives, labels, profile),
            contextual_explanations=contextual_explanations(nutrients, profile),
            additive_overrides=self.additive_overrides(additives, profile),
            profile_summary=profile_summary(
                nutrients, additives, labels, ingredients_text, profile
            ),
        )


def nutrient_warnings(  # noqa: PLR0913
    nutrients: NutrientProfile,
    additives: Sequence[str],
    labels: Sequence[str],
    ingredients_text: str | None,
    profile: GeneticProfile,
) -> list[PersonalizedWarning]:
    """Warnings driven by nutrients and ingredient text."""
    warnings: list[PersonalizedWarning] = []
    saturated_fat = nutrients.saturated_fat
    threshold = profile.saturated_fat_threshold
    if (
        profile.saturated_fat_sensitive
        and saturated_fat is not None
        and saturated_fat > threshold
    ):
        warnings.append(
            PersonalizedWarning(
                id="high-sat-fat",
                severity="critical" if saturated_fat > STANDARD_SATURATED_FAT else "warning",
                title="High Saturated Fat for You",
                message=f"{saturated_fat:.1f}g per 100g exceeds your {threshold:g}g threshold",
                genetic_basis="Saturated fat sensitivity",
                nutrient_value=saturated_fat,
                threshold=threshold,
            )
        )

    nitrites = _nitrites(additives)
    if profile.cardiovascular_risk and nitrites:
        warnings.append(
            PersonalizedWarning(
                id="contains-nitrites",
                severity="warning",
                title="Contains Nitrites/Nitrates",
                message=f"Contains {', '.join(nitrites)} - avoid for cardiovascular health",
                genetic_basis="Cardiovascular risk",
            )
        )

    ingredients = (ingredients_text or "").lower()
    if (
        profile.iron_overload_carrier
        and ingredients
        and (_mentions(ingredients, IRON_KEYWORDS) or "fortified with" in ingredients)
    ):
        warnings.append(
            PersonalizedWarning(
                id="iron-fortified",
                severity="caution",
                title="May Contain Added Iron",
                message="Check if iron-fortified - avoid supplemental iron",
                genetic_basis="Iron overload carrier",
            )
        )

    if profile.lactose_intolerant and lactose_status(labels, ingredients_text) == "likely":
        warnings.append(
            PersonalizedWarning(
                id="contains-lactose",
                severity="caution",
                title="Likely Contains Lactose",
                message="Dairy product without lactose-free indication",
                genetic_basis="Lactose intolerance",
            )
        )

    if profile.fast_caffeine_metabolizer and _mentions(ingredients, CAFFEINE_KEYWORDS):
        warnings.append(
            PersonalizedWarning(
                id="caffeine-note",
                severity="info",
                title="Contains Caffeine",
                message="You metabolize caffeine quickly (clears in 3-4 hrs)",
                genetic_basis="Fast caffeine metabolizer",
            )
        )
    return warnings


def lactose_status(labels: Sequence[str], ingredients_text: str | None) -> LactoseStatus:
    """Guess whether a product contains lactose from labels and ingredients."""
    lowered_labels = [label.lower() for label in labels]
    if any(_mentions(label, LACTOSE_FREE_LABELS) for label in lowered_labels):
        return "unlikely"
    if ingredients_text and _mentions(ingredients_text.lower(), DAIRY_INGREDIENTS):
        return "likely"
    if any(_mentions(label, DAIRY_LABELS) for label in lowered_labels):
        return "likely"
    return "unknown"


def badges(
    nutrients: NutrientProfile,
    additives: Sequence[str],
    labels: Sequence[str],
    profile: GeneticProfile,
) -> list[PersonalizedBadge]:
    result: list[PersonalizedBadge] = []
    saturated_fat = nutrients.saturated_fat or 0.0
    omega3 = nutrients.omega3
    fiber = nutrients.fiber or 0.0
    protein = nutrients.proteins or 0.0
    carbs = nutrients.carbohydrates or 0.0

    if (
        profile.cardiovascular_risk
        and saturated_fat < 2
        and not _nitrites(additives)
        and (omega3 is None or omega3 > 0.3)
    ):
        description = "Low saturated fat, no nitrites"
        if omega3:
            description += ", contains omega-3s"
        result.append(
            PersonalizedBadge(
                id="heart-healthy",
                type="positive",
                title="Heart Healthy for You",
                description=description,
                genetic_basis="Cardiovascular risk",
            )
        )

    if profile.needs_omega3 and omega3 is not None and omega3 >= profile.omega3_target:
        result.append(
            PersonalizedBadge(
                id="omega3-rich",
                type="positive",
                title="Omega-3 Rich",
                description=f"Contains {omega3:.1f}g omega-3 per 100g",
                genetic_basis="Increased omega-3 needs",
            )
        )

    folate_rich = any(_mentions(label.lower(), FOLATE_RICH_LABELS) for label in labels)
    if profile.needs_folate and (folate_rich or fiber > 5):
        result.append(
            PersonalizedBadge(
                id="folate-fiber",
                type="positive",
                title="Folate/Fiber Rich",
                description="Good source of fiber and likely folate",
                genetic_basis="Increased folate needs",
            )
        )

    if (
        profile.endurance_type
        and profile.favorable_carbs
        and carbs > 40
        and protein > 5
        and saturated_fat < 3
    ):
        result.append(
            PersonalizedBadge(
                id="endurance-fuel",
                type="positive",
                title="Endurance Fuel",
                description="Good carb/protein ratio with low saturated fat",
                genetic_basis="Endurance type with favorable carbohydrate metabolism",
            )
        )

    if profile.saturated_fat_sensitive and saturated_fat < 1:
        result.append(
            PersonalizedBadge(
                id="low-sat-fat",
                type="positive",
                title="Low Saturated Fat",
                description=f"Only {saturated_fat:.1f}g - excellent for your profile",
                genetic_basis="Saturated fat sensitivity",
            )
        )
    return result


def contextual_explanations(
    nutrients: NutrientProfile, profile: GeneticProfile
) -> list[ContextualExplanation]:
    """Compare nutrient values against standard and personal thresholds."""
    explanations: list[ContextualExplanation] = []

    saturated_fat = nutrients.saturated_fat
    if saturated_fat is not None and profile.saturated_fat_sensitive:
        personal = profile.saturated_fat_threshold
        if saturated_fat > personal:
            text = (
                "Exceeds your personal threshold. Saturated fat has a larger effect "
                "on your LDL cholesterol and weight."
            )
        else:
            text = (
                "Within your personalized limit. Your stricter threshold accounts "
                "for saturated fat sensitivity."
            )
        explanations.append(
            ContextualExplanation(
                nutrient="Saturated Fat",
                value=saturated_fat,
                unit="g/100g",
                standard_threshold=STANDARD_SATURATED_FAT,
                personalized_threshold=personal,
                explanation=text,
                severity=_ascending_severity(
                    saturated_fat, 1, personal, STANDARD_SATURATED_FAT
                ),
            )
        )

    sugar = nutrients.sugars
    if sugar is not None and profile.favorable_carbs:
        personal = profile.sugar_threshold
        explanations.append(
            ContextualExplanation(
                nutrient="Sugar",
                value=sugar,
                unit="g/100g",
                standard_threshold=STANDARD_SUGAR,
                personalized_threshold=personal,
                explanation=(
                    "You handle carbohydrates well, so a slightly more permissive "
                    "threshold applies."
                ),
                severity=_ascending_severity(sugar, 6, 15, personal),
            )
        )

    sodium = nutrients.sodium_g
    if sodium is not None and not profile.salt_sensitive:
        personal = profile.sodium_threshold
        explanations.append(
            ContextualExplanation(
                nutrient="Sodium",
                value=sodium,
                unit="g/100g",
                standard_threshold=STANDARD_SODIUM,
                personalized_threshold=personal,
                explanation="You are not salt-sensitive. Standard sodium guidelines apply.",
                severity=_ascending_severity(sodium, 0.4, 0.8, personal),
            )
        )

    omega3 = nutrients.omega3
    if omega3 is not None and profile.needs_omega3:
        if omega3 >= 1.5:
            severity: ExplanationSeverity = "good"
        elif omega3 >= 0.5:
            severity = "moderate"
        elif omega3 >= 0.1:
            severity = "high"
        else:
            severity = "critical"
        explanations.append(
            ContextualExplanation(
                nutrient="Omega-3",
                value=omega3,
                unit="g/100g",
                standard_threshold=0.0,
                personalized_threshold=profile.omega3_target,
                explanation="Omega-3s support your cardiovascular health and HDL levels.",
                severity=severity,
            )
        )
    return explanations


def profile_summary(  # noqa: PLR0913
    nutrients: NutrientProfile,
    additives: Sequence[str],
    labels: Sequence[str],
    ingredients_text: str | None,
    profile: GeneticProfile,
) -> ProfileSummary:
    """Short status list of the things the profile cares about."""
    items: list[ProfileSummaryItem] = []

    saturated_fat = nutrients.saturated_fat
    if profile.saturated_fat_sensitive:
        threshold = profile.saturated_fat_threshold
        if saturated_fat is None:
            items.append(ProfileSummaryItem("unknown", "Saturated fat data unavailable"))
        elif saturated_fat <= 1:
            items.append(ProfileSummaryItem("good", "Low saturated fat", f"{saturated_fat:.1f}g"))
        elif saturated_fat <= threshold:
            items.append(
                ProfileSummaryItem("caution", "Moderate saturated fat", f"{saturated_fat:.1f}g")
            )
        else:
            items.append(
                ProfileSummaryItem(
                    "bad",
                    "High saturated fat for you",
                    f"{saturated_fat:.1f}g > {threshold:g}g limit",
                )
            )

    omega3 = nutrients.omega3
    if profile.needs_omega3:
        if omega3 is None:
            items.append(ProfileSummaryItem("unknown", "No omega-3 data available"))
        elif omega3 >= 0.3:
            items.append(ProfileSummaryItem("good", "Contains omega-3s", f"{omega3:.1f}g"))
        else:
            items.append(ProfileSummaryItem("caution", "Low omega-3 content", f"{omega3:.1f}g"))

    if profile.cardiovascular_risk:
        if _nitrites(additives):
            items.append(
                ProfileSummaryItem(
                    "bad", "Contains nitrites", "Avoid for cardiovascular health"
                )
            )
        elif additives:
            items.append(ProfileSummaryItem("good", "No nitrites detected"))

    ingredients = (ingredients_text or "").lower()
    if profile.iron_overload_carrier and _mentions(ingredients, IRON_KEYWORDS):
        items.append(
            ProfileSummaryItem("caution", "May contain added iron", "Iron overload carrier")
        )

    if profile.lactose_intolerant:
        status = lactose_status(labels, ingredients_text)
        if status == "likely":
            items.append(ProfileSummaryItem("caution", "Likely contains lactose"))
        elif status == "unlikely":
            items.append(ProfileSummaryItem("good", "Lactose-free or dairy-free"))

    fiber = nutrients.fiber
    if profile.needs_folate and fiber is not None and fiber >= 5:
        items.append(ProfileSummaryItem("good", "High fiber (folate source)", f"{fiber:.1f}g"))

    return ProfileSummary(items=items, overall_fit=overall_fit(items))


def overall_fit(items: Sequence[ProfileSummaryItem]) -> OverallFit:
    good = sum(1 for item in items if item.status == "good")
    bad = sum(1 for item in items if item.status == "bad")
    caution = sum(1 for item in items if item.status == "caution")
    if bad >= 2:
        return "poor"
    if bad == 1 or caution >= 2:
        return "caution"
    if good >= 3:
        return "excellent"
    return "good"


def _ascending_severity(
    value: float, good: float, moderate: float, high: float
) -> ExplanationSeverity:
    if value <= good:
        return "good"
    if value <= moderate:
        return "moderate"
    if value <= high:
        return "high"
    return "critical"


def _overrides(profile: GeneticProfile) -> dict[str, RiskOverride]:
    return {normalize_code(code): override for code, override in profile.additive_overrides.items()}


def _nitrites(additives: Sequence[str]) -> list[str]:
    return [normalize_code(code) for code in additives if normalize_code(code) in NITRITE_CODES]


def _mentions(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _rank(rule: PersonalizedRule) -> int:
    return SEVERITY_ORDER[rule.severity]
