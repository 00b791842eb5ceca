"""Tests for whole-product analysis."""

import asyncio

from food_score.domain.analysis import ProductInput
from food_score.domain.nutrients import NutrientProfile
from tests.conftest import heart_profile

SUGARY_SNACK = NutrientProfile(
    sugars=25, saturated_fat=1, sodium=0.1, energy_kcal=90, fiber=0, proteins=0
)


def test_analyze_combines_every_component(container) -> None:
    product = ProductInput(nutrients=SUGARY_SNACK, additives=["E211", "E300"])

    analysis = asyncio.run(container.analyzer.analyze(product))

    assert analysis.health_score.score == 61
    assert [additive.code for additive in analysis.additives] == ["E211", "E300"]
    assert {additive.source for additive in analysis.additives} == {"local"}
    assert [group.function for group in analysis.function_groups] == [
        "preservative",
        "antioxidant",
    ]
    assert analysis.additive_load.weighted_score == 4
    assert analysis.additive_load.processing_level == "minimal"
    assert analysis.additive_load_normalized == 7
    assert [warning.rule.id for warning in analysis.interactions] == ["benzene-formation"]
    assert analysis.interaction_summary.warning_count == 1
    assert analysis.regulations == {}
    assert analysis.personalized is None
    assert [item.nutrient for item in analysis.nutrients][0] == "Calories"


def test_analyze_includes_regulations_with_data(container) -> None:
    product = ProductInput(nutrients=NutrientProfile(), additives=["e250", "E300"])

    analysis = asyncio.run(container.analyzer.analyze(product))

    assert list(analysis.regulations) == ["E250"]
    assert len(analysis.regulations["E250"]) == len(container.regulatory.jurisdictions)


def test_analyze_resolves_remote_additives(container) -> None:
    product = ProductInput(nutrients=NutrientProfile(), additives=["E171"])

    online = asyncio.run(container.analyzer.analyze(product))
    container.cache.clear()
    offline = asyncio.run(container.analyzer.analyze(product, allow_network=False))

    assert online.additives[0].source == "fresh_remote"
    assert online.additive_load.breakdown.unknown_count == 1
    assert offline.additives[0].source == "fallback"


def test_analyze_with_profile(container, profile_repository) -> None:
    profile_repository.save_profile("user-1", heart_profile())
    product = ProductInput(
        nutrients=NutrientProfile(saturated_fat=4),
        additives=["E250"],
        ingredients_text="pork, salt",
    )

    analysis = asyncio.run(container.analyzer.analyze(product, user_id="user-1"))

    assert analysis.personalized is not None
    assert [warning.id for warning in analysis.personalized.warnings] == [
        "high-sat-fat",
        "contains-nitrites",
    ]
    assert analysis.personalized.additive_warnings[0].additive == "E250"
    assert analysis.health_score.config_kind == "default"


def test_analyze_unknown_user_is_not_personalized(container) -> None:
    product = ProductInput(nutrients=SUGARY_SNACK)

    analysis = asyncio.run(container.analyzer.analyze(product, user_id="nobody"))

    assert analysis.personalized is None
