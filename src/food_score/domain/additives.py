"""Additive domain models."""

import re
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict

AdditiveRisk = Literal["safe", "moderate", "avoid"]
AdditiveFunction = Literal[
    "preservative",
    "coloring",
    "sweetener",
    "flavor_enhancer",
    "emulsifier",
    "thickener",
    "stabilizer",
    "antioxidant",
    "acidity_regulator",
    "raising_agent",
    "glazing_agent",
    "anti_caking",
    "humectant",
    "foaming_agent",
    "other",
]
AdditiveSource = Literal["local", "cached_remote", "fresh_remote", "fallback"]
ProcessingLevel = Literal["minimal", "low", "moderate", "high", "ultra"]

_SEPARATORS = re.compile(r"[\s\-_.]+")
_LANGUAGE_PREFIX = re.compile(r"^[a-z]{2}:", re.IGNORECASE)


def normalize_code(code: str) -> str:
    """Normalize an additive code (``e-300``, ``en:e300`` -> ``E300``)."""
    cleaned = _LANGUAGE_PREFIX.sub("", code.strip())
    normalized = _SEPARATORS.sub("", cleaned).upper()
    if not normalized:
        raise ValueError(f"Invalid additive code: {code!r}")
    return normalized


class Additive(BaseModel):
    """Curated additive entry from the local registry."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    risk: AdditiveRisk
    description: str
    concerns: tuple[str, ...] = ()


class FunctionInfo(BaseModel):
    """Display metadata for an additive function."""

    model_config = ConfigDict(frozen=True)

    function: AdditiveFunction
    label: str
    description: str


class ExplanationSource(BaseModel):
    """Reference backing an additive explanation."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str | None = None


class AdditiveExplanation(BaseModel):
    """Long-form explanation of why an additive has its rating."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    common_name: str | None = None
    risk: AdditiveRisk
    function: str
    why_this_rating: str
    found_in: tuple[str, ...] = ()
    sources: tuple[ExplanationSource, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class ResolvedAdditive:
    """Uniform additive record regardless of where it was resolved from."""

    code: str
    name: str
    risk: AdditiveRisk
    description: str | None
    functions: tuple[AdditiveFunction, ...]
    source: AdditiveSource
    concerns: tuple[str, ...] = ()
    vegan: bool | None = None
    vegetarian: bool | None = None
    efsa_url: str | None = None


@dataclass(frozen=True)
class AdditiveAnalysis:
    """Additive codes bucketed by registry risk tier."""

    safe: list[Additive] = field(default_factory=list)
    moderate: list[Additive] = field(default_factory=list)
    avoid: list[Additive] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FunctionGroup:
    """Additives sharing the same primary function."""

    function: AdditiveFunction
    info: FunctionInfo
    codes: list[str]


@dataclass(frozen=True)
class LoadBreakdown:
    safe_count: int = 0
    moderate_count: int = 0
    avoid_count: int = 0
    unknown_count: int = 0


@dataclass(frozen=True)
class AdditiveLoad:
    """Cumulative additive load for a product."""

    total_count: int
    weighted_score: int
    processing_level: ProcessingLevel
    breakdown: LoadBreakdown
