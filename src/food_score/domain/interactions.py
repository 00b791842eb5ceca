"""Additive interaction domain models."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

InteractionType = Literal["formation", "amplification", "synergy"]
Severity = Literal["critical", "warning", "caution", "info"]

SEVERITY_ORDER: dict[str, int] = {
    "critical": 0,
    "warning": 1,
    "caution": 2,
    "info": 3,
}


class InteractionRule(BaseModel):
    """A known combination of additives with a combined concern."""

    model_config = ConfigDict(frozen=True)

    id: str
    additives: tuple[str, ...] = Field(min_length=2)
    type: InteractionType
    severity: Severity
    title: str
    description: str
    resulting_compound: str | None = None
    scientific_basis: str | None = None


@dataclass(frozen=True)
class InteractionWarning:
    """A fired interaction rule and the members actually present."""

    rule: InteractionRule
    detected_additives: tuple[str, ...]

    @property
    def severity(self) -> Severity:
        return self.rule.severity


@dataclass(frozen=True)
class InteractionSummary:
    warning_count: int
    caution_count: int
    info_count: int
    highest_severity: Severity | None
    summary: str
