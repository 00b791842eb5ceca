"""Tests for per-nutrient ratings."""

from food_score.domain.nutrients import NutrientProfile
from food_score.services.nutrient_analysis import analyze_nutrients


def test_analyze_nutrients_rates_each_reported_value() -> None:
    nutrients = NutrientProfile(
        energy_kcal=250,
        fat=20,
        saturated_fat=1,
        carbohydrates=30,
        sugars=30,
        fiber=4,
        proteins=13,
        salt=0.2,
    )

    analyses = {item.nutrient: item for item in analyze_nutrients(nutrients)}

    assert list(analyses) == [
        "Calories",
        "Fat",
        "Saturated Fat",
        "Carbohydrates",
        "Sugars",
        "Fiber",
        "Protein",
        "Salt",
    ]
    assert analyses["Calories"].rating == "moderate"
    assert analyses["Calories"].message == "High calorie"
    assert analyses["Calories"].percent_dv == 13
    assert analyses["Calories"].unit == "kcal/100g"
    assert analyses["Fat"].rating == "poor"
    assert analyses["Fat"].percent_dv == 31
    assert analyses["Saturated Fat"].message == "Low in saturated fat"
    assert analyses["Carbohydrates"].message == "30.0g of carbohydrates per 100g"
    assert analyses["Sugars"].message == "Very high in sugars - limit intake"
    assert analyses["Sugars"].percent_dv == 60
    assert analyses["Fiber"].rating == "moderate"
    assert analyses["Fiber"].message == "Good source of fiber"
    assert analyses["Protein"].rating == "good"
    assert analyses["Protein"].message == "High protein"
    assert analyses["Salt"].rating == "good"
    assert analyses["Salt"].percent_dv == 3


def test_unreported_nutrients_are_skipped() -> None:
    assert analyze_nutrients(NutrientProfile()) == []


def test_salt_is_rated_only_when_reported() -> None:
    analyses = analyze_nutrients(NutrientProfile(sodium=0.4))

    assert analyses == []


def test_calories_derived_from_kilojoules() -> None:
    analyses = analyze_nutrients(NutrientProfile(energy_kj=125.52))

    assert analyses[0].nutrient == "Calories"
    assert analyses[0].message == "Very low calorie"
    assert analyses[0].rating == "good"
