"""Per-nutrient ratings against adult daily values."""

from food_score.domain.nutrients import NutrientAnalysis, NutrientProfile, NutrientRating
from food_score.domain.scoring import round_half_up

DAILY_VALUES = {
    "energy": 2000.0,
    "fat": 65.0,
    "saturated_fat": 20.0,
    "carbohydrates": 300.0,
    "sugars": 50.0,
    "fiber": 25.0,
    "protein": 50.0,
    "salt": 6.0,
}


def analyze_nutrients(nutrients: NutrientProfile) -> list[NutrientAnalysis]:
    """Rate every reported nutrient; unreported ones are skipped."""
    analyses: list[NutrientAnalysis] = []

    calories = nutrients.calories
    if calories is not None:
        analyses.append(
            _analysis(
                "Calories",
                calories,
                "kcal/100g",
                _upper_rating(calories, 100, 300),
                DAILY_VALUES["energy"],
                _calories_message(calories),
            )
        )
    if nutrients.fat is not None:
        analyses.append(
            _analysis(
                "Fat",
                nutrients.fat,
                "g/100g",
                _upper_rating(nutrients.fat, 3, 17.5),
                DAILY_VALUES["fat"],
                _banded(nutrients.fat, (3, "Low in fat"), (17.5, "Moderate fat content"))
                or "High in fat",
            )
        )
    if nutrients.saturated_fat is not None:
        analyses.append(
            _analysis(
                "Saturated Fat",
                nutrients.saturated_fat,
                "g/100g",
                _upper_rating(nutrients.saturated_fat, 1.5, 5),
                DAILY_VALUES["saturated_fat"],
                _banded(
                    nutrients.saturated_fat,
                    (1.5, "Low in saturated fat"),
                    (5, "Moderate saturated fat"),
                )
                or "High in saturated fat - limit intake",
            )
        )
    if nutrients.carbohydrates is not None:
        analyses.append(
            _analysis(
                "Carbohydrates",
                nutrients.carbohydrates,
                "g/100g",
                "moderate",
                DAILY_VALUES["carbohydrates"],
                f"{nutrients.carbohydrates:.1f}g of carbohydrates per 100g",
            )
        )
    if nutrients.sugars is not None:
        analyses.append(
            _analysis(
                "Sugars",
                nutrients.sugars,
                "g/100g",
                _upper_rating(nutrients.sugars, 5, 22.5),
                DAILY_VALUES["sugars"],
                _banded(
                    nutrients.sugars,
                    (5, "Low in sugars"),
                    (12.5, "Moderate sugar content"),
                    (22.5, "High in sugars"),
                )
                or "Very high in sugars - limit intake",
            )
        )
    if nutrients.fiber is not None:
        analyses.append(
            _analysis(
                "Fiber",
                nutrients.fiber,
                "g/100g",
                _lower_rating(nutrients.fiber, 6, 3),
                DAILY_VALUES["fiber"],
                _fiber_message(nutrients.fiber),
            )
        )
    if nutrients.proteins is not None:
        analyses.append(
            _analysis(
                "Protein",
                nutrients.proteins,
                "g/100g",
                _lower_rating(nutrients.proteins, 12, 6),
                DAILY_VALUES["protein"],
                _protein_message(nutrients.proteins),
            )
        )
    if nutrients.salt is not None:
        analyses.append(
            _analysis(
                "Salt",
                nutrients.salt,
                "g/100g",
                _upper_rating(nutrients.salt, 0.3, 1.5),
                DAILY_VALUES["salt"],
                _banded(nutrients.salt, (0.3, "Low in salt"), (1.5, "Moderate salt content"))
                or "High in salt - limit intake",
            )
        )
    return analyses


def _analysis(  # noqa: PLR0913
    nutrient: str,
    value: float,
    unit: str,
    rating: NutrientRating,
    daily_value: float,
    message: str,
) -> NutrientAnalysis:
    return NutrientAnalysis(
        nutrient=nutrient,
        value=value,
        unit=unit,
        rating=rating,
        percent_dv=round_half_up(value / daily_value * 100),
        message=message,
    )


def _upper_rating(value: float, good: float, moderate: float) -> NutrientRating:
    """Rating for nutrients where less is better."""
    if value <= good:
        return "good"
    if value <= moderate:
        return "moderate"
    return "poor"


def _lower_rating(value: float, good: float, moderate: float) -> NutrientRating:
    """Rating for nutrients where more is better."""
    if value >= good:
        return "good"
    if value >= moderate:
        return "moderate"
    return "poor"


def _banded(value: float, *bands: tuple[float, str]) -> str | None:
    for upper, message in bands:
        if value <= upper:
            return message
    return None


def _calories_message(value: float) -> str:
    return (
        _banded(
            value,
            (40, "Very low calorie"),
            (100, "Low calorie"),
            (200, "Moderate calorie"),
            (400, "High calorie"),
        )
        or "Very high calorie"
    )


def _fiber_message(value: float) -> str:
    if value >= 6:
        return "High in fiber - excellent!"
    if value >= 3:
        return "Good source of fiber"
    return "Low in fiber"


def _protein_message(value: float) -> str:
    if value >= 12:
        return "High protein"
    if value >= 6:
        return "Good protein source"
    return "Low protein"
