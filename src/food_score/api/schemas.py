"""Request payloads for the HTTP API."""

from pydantic import BaseModel, Field, FiniteFloat

from food_score.domain.analysis import ProductInput
from food_score.domain.nutrients import NutrientProfile


class AnalysisRequest(BaseModel):
    """Product data in Open Food Facts shape."""

    nutriments: dict[str, FiniteFloat | str | None] = Field(default_factory=dict)
    basis: str = "100g"
    additives: list[str] = Field(default_factory=list)
    nova_group: int | None = None
    labels: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    ingredients_text: str | None = None
    user_id: str | None = None
    allow_network: bool = True

    def to_product_input(self) -> ProductInput:
        return ProductInput(
            nutrients=NutrientProfile.from_nutriments(self.nutriments, basis=self.basis),
            additives=list(self.additives),
            nova_group=self.nova_group,
            labels=list(self.labels),
            categories=list(self.categories),
            ingredients_text=self.ingredients_text,
        )
