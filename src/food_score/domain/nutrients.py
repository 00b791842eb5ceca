"""Nutrient domain models."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

NutrientRating = Literal["good", "moderate", "poor"]

_KCAL_PER_KJ = 4.184
_SALT_TO_SODIUM = 2.5

# Field name -> nutriment key prefix (Open Food Facts naming).
_NUTRIMENT_KEYS = {
    "energy_kj": "energy",
    "energy_kcal": "energy-kcal",
    "fat": "fat",
    "saturated_fat": "saturated-fat",
    "carbohydrates": "carbohydrates",
    "sugars": "sugars",
    "fiber": "fiber",
    "proteins": "proteins",
    "salt": "salt",
    "sodium": "sodium",
    "omega3": "omega-3-fat",
}


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values for a fixed basis (per 100g unless stated otherwise).

    ``None`` means the value was not reported, which is different from zero.
    """

    energy_kj: float | None = None
    energy_kcal: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fiber: float | None = None
    proteins: float | None = None
    salt: float | None = None
    sodium: float | None = None
    omega3: float | None = None

    @classmethod
    def from_nutriments(
        cls, nutriments: Mapping[str, object], basis: str = "100g"
    ) -> "NutrientProfile":
        """Build a profile from a ``sugars_100g``-style nutriment mapping."""
        values: dict[str, float | None] = {}
        for field_name, prefix in _NUTRIMENT_KEYS.items():
            raw = nutriments.get(f"{prefix}_{basis}")
            values[field_name] = _to_float(raw)
        return cls(**values)

    @property
    def sodium_g(self) -> float | None:
        """Sodium in grams, derived from salt when not reported directly."""
        if self.sodium is not None:
            return self.sodium
        if self.salt is not None:
            return self.salt / _SALT_TO_SODIUM
        return None

    @property
    def calories(self) -> float | None:
        """Energy in kcal, derived from kJ when not reported directly."""
        if self.energy_kcal is not None:
            return self.energy_kcal
        if self.energy_kj is not None:
            return self.energy_kj / _KCAL_PER_KJ
        return None


@dataclass(frozen=True)
class NutrientAnalysis:
    """Rating of a single nutrient against adult daily values."""

    nutrient: str
    value: float
    unit: str
    rating: NutrientRating
    percent_dv: int
    message: str


def _to_float(raw: object) -> float | None:
    """Parse a reported value; non-numeric and non-finite values count as missing."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None
