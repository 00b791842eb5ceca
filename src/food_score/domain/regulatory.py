"""Regulatory domain models."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

Jurisdiction = Literal["usa", "eu", "canada", "uk", "australia", "california"]
RegulatoryStatus = Literal["approved", "restricted", "banned", "warning_required"]


class JurisdictionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Jurisdiction
    name: str


class RegulatoryRecord(BaseModel):
    """Legal status of one additive in one jurisdiction."""

    model_config = ConfigDict(frozen=True)

    jurisdiction: Jurisdiction
    status: RegulatoryStatus
    max_level: str | None = None
    notes: str | None = None
    warning_text: str | None = None


@dataclass(frozen=True)
class RegulatoryRow:
    """One row of a cross-jurisdiction comparison."""

    jurisdiction: Jurisdiction
    name: str
    status: RegulatoryStatus | Literal["unknown"]
    max_level: str | None = None
    notes: str | None = None
    warning_text: str | None = None
