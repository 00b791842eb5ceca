"""Loading of the bundled reference tables."""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, TypeAdapter

from food_score.domain.additives import (
    Additive,
    AdditiveExplanation,
    AdditiveFunction,
    FunctionInfo,
)
from food_score.domain.interactions import InteractionRule
from food_score.domain.profiles import PersonalizedRule
from food_score.domain.regulatory import JurisdictionInfo, RegulatoryRecord
from food_score.domain.scoring import ScoringConfig

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_logger = logging.getLogger(__name__)


class FunctionTable(BaseModel):
    categories: list[FunctionInfo]
    codes: dict[str, list[AdditiveFunction]]


class RegulatoryTable(BaseModel):
    jurisdictions: list[JurisdictionInfo]
    additives: dict[str, list[RegulatoryRecord]]


class ScoringTable(BaseModel):
    configs: dict[str, ScoringConfig]
    beverage_keywords: list[str]
    organic_labels: list[str]
    nova_penalties: dict[int, float]
    nova_descriptions: dict[int, str]
    empty_calorie_caps: dict[str, int]


@dataclass(frozen=True)
class ReferenceData:
    """All static tables, validated once at startup."""

    additives: list[Additive]
    functions: FunctionTable
    interactions: list[InteractionRule]
    regulatory: RegulatoryTable
    personalized_rules: list[PersonalizedRule]
    explanations: list[AdditiveExplanation]
    scoring: ScoringTable


def _read_json(name: str) -> object:
    payload = (_DATA_DIR / name).read_text(encoding="utf-8")
    return json.loads(payload)


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    """Load and validate every bundled table."""
    data = ReferenceData(
        additives=TypeAdapter(list[Additive]).validate_python(
            _read_json("additives.json")
        ),
        functions=FunctionTable.model_validate(_read_json("functions.json")),
        interactions=TypeAdapter(list[InteractionRule]).validate_python(
            _read_json("interactions.json")
        ),
        regulatory=RegulatoryTable.model_validate(_read_json("regulatory.json")),
        personalized_rules=TypeAdapter(list[PersonalizedRule]).validate_python(
            _read_json("personalized_rules.json")
        ),
        explanations=TypeAdapter(list[AdditiveExplanation]).validate_python(
            _read_json("explanations.json")
        ),
        scoring=ScoringTable.model_validate(_read_json("scoring.json")),
    )
    _logger.info(
        "Loaded reference data: additives=%s interactions=%s rules=%s",
        len(data.additives),
        len(data.interactions),
        len(data.personalized_rules),
    )
    return data
