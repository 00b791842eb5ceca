"""Remote additive taxonomy parsing and caching."""

import logging
import re
from dataclasses import dataclass
from typing import Literal

import httpx
from pydantic import BaseModel, ValidationError

from food_score.adapters.taxonomy_client import TaxonomyClient
from food_score.domain.additives import AdditiveFunction, AdditiveRisk, normalize_code
from food_score.services.cache import Cache

EfsaRisk = Literal["high", "moderate", "low", "none"]

CACHE_PREFIX = "taxonomy:"
_CODE_PATTERN = re.compile(r"e(\d+[a-z]?)", re.IGNORECASE)
_LANGUAGE_PREFIX = re.compile(r"^[a-z]{2}:")
_WORD_PATTERN = re.compile(r"[a-z]+")

_CLASS_MAP: dict[str, AdditiveFunction] = {
    "preservative": "preservative",
    "preservatives": "preservative",
    "colour": "coloring",
    "color": "coloring",
    "colours": "coloring",
    "colors": "coloring",
    "sweetener": "sweetener",
    "sweeteners": "sweetener",
    "flavour enhancer": "flavor_enhancer",
    "flavor enhancer": "flavor_enhancer",
    "flavour enhancers": "flavor_enhancer",
    "flavor enhancers": "flavor_enhancer",
    "emulsifier": "emulsifier",
    "emulsifiers": "emulsifier",
    "thickener": "thickener",
    "thickeners": "thickener",
    "stabiliser": "stabilizer",
    "stabilizer": "stabilizer",
    "stabilisers": "stabilizer",
    "stabilizers": "stabilizer",
    "antioxidant": "antioxidant",
    "antioxidants": "antioxidant",
    "acidity regulator": "acidity_regulator",
    "acidity regulators": "acidity_regulator",
    "raising agent": "raising_agent",
    "raising agents": "raising_agent",
    "glazing agent": "glazing_agent",
    "glazing agents": "glazing_agent",
    "anti caking agent": "anti_caking",
    "anti caking agents": "anti_caking",
    "humectant": "humectant",
    "humectants": "humectant",
    "foaming agent": "foaming_agent",
    "foaming agents": "foaming_agent",
}

_logger = logging.getLogger(__name__)


class TaxonomyEntry(BaseModel):
    """Additive data parsed from the remote taxonomy."""

    code: str
    name: str
    efsa_risk: EfsaRisk | None = None
    additive_classes: list[str] = []
    vegan: bool | None = None
    vegetarian: bool | None = None
    efsa_evaluation_url: str | None = None
    description: str | None = None


def parse_efsa_risk(raw: str | None) -> EfsaRisk | None:
    """Map free-text EFSA overexposure risk onto a fixed vocabulary."""
    if not raw:
        return None
    lowered = _strip_language(raw.lower()).replace("-", " ")
    words = set(_WORD_PATTERN.findall(lowered))
    if "high" in words:
        return "high"
    if "moderate" in words:
        return "moderate"
    if "low" in words or "no risk" in lowered:
        return "low"
    if "no" in words or "none" in words:
        return "none"
    return None


def map_efsa_risk(efsa_risk: str | None) -> AdditiveRisk:
    """Map EFSA risk onto the internal three-tier scale."""
    if efsa_risk == "high":
        return "avoid"
    if efsa_risk in {"low", "none"}:
        return "safe"
    return "moderate"


def map_additive_classes(classes: list[str]) -> tuple[AdditiveFunction, ...]:
    """Map taxonomy additive classes to functional categories."""
    mapped: list[AdditiveFunction] = []
    for raw in classes:
        normalized = _strip_language(raw.strip().lower()).replace("-", " ")
        function = _CLASS_MAP.get(normalized)
        if function and function not in mapped:
            mapped.append(function)
    return tuple(mapped) if mapped else ("other",)


def parse_taxonomy_entry(key: str, entry: dict[str, object]) -> TaxonomyEntry | None:
    """Parse one raw taxonomy item (``en:e300``) into an entry."""
    match = _CODE_PATTERN.search(key)
    if not match:
        return None
    code = f"E{match.group(1).upper()}"
    raw_classes = _localized(entry, "additives_classes")
    return TaxonomyEntry(
        code=code,
        name=_localized(entry, "name", fallback_language="fr") or code,
        efsa_risk=parse_efsa_risk(
            _localized(entry, "efsa_evaluation_overexposure_risk", "fr")
        ),
        additive_classes=[
            item.strip() for item in (raw_classes or "").split(",") if item.strip()
        ],
        vegan=_yes_no(_localized(entry, "vegan")),
        vegetarian=_yes_no(_localized(entry, "vegetarian")),
        efsa_evaluation_url=_localized(entry, "efsa_evaluation_url"),
        description=_localized(entry, "description"),
    )


def parse_taxonomy(payload: dict[str, object]) -> dict[str, TaxonomyEntry]:
    """Index a raw taxonomy document by normalized additive code."""
    parsed: dict[str, TaxonomyEntry] = {}
    for key, raw_entry in payload.items():
        if not isinstance(raw_entry, dict):
            continue
        entry = parse_taxonomy_entry(key, raw_entry)
        if entry:
            parsed[entry.code] = entry
    return parsed


@dataclass
class TaxonomyService:
    """Fetches the remote taxonomy and caches entries per additive code."""

    client: TaxonomyClient
    cache: Cache
    ttl_seconds: int = 7 * 24 * 60 * 60

    def cached_entry(self, code: str) -> TaxonomyEntry | None:
        """Return a previously fetched entry without touching the network."""
        cached = self.cache.get(cache_key(code))
        if isinstance(cached, TaxonomyEntry):
            return cached
        if isinstance(cached, dict):
            try:
                return TaxonomyEntry.model_validate(cached)
            except ValidationError:
                _logger.warning("Discarding malformed taxonomy cache entry: %s", code)
        return None

    async def fetch_entry(self, code: str) -> TaxonomyEntry | None:
        """Fetch the taxonomy once and return the entry for a code.

        Fetch failures are logged and reported as a miss.
        """
        normalized = normalize_code(code)
        try:
            payload = await self.client.fetch_taxonomy()
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Taxonomy fetch failed for %s: %s", normalized, exc)
            return None
        entries = parse_taxonomy(payload)
        self.cache.set_many(
            {
                cache_key(entry_code): entry.model_dump()
                for entry_code, entry in entries.items()
            },
            ttl_seconds=self.ttl_seconds,
        )
        _logger.info("Cached %s taxonomy entries", len(entries))
        return entries.get(normalized)


def cache_key(code: str) -> str:
    return f"{CACHE_PREFIX}{normalize_code(code)}"


def _strip_language(value: str) -> str:
    return _LANGUAGE_PREFIX.sub("", value)


def _localized(
    entry: dict[str, object], field_name: str, fallback_language: str | None = None
) -> str | None:
    values = entry.get(field_name)
    if not isinstance(values, dict):
        return None
    value = values.get("en")
    if value is None and fallback_language:
        value = values.get(fallback_language)
    return value if isinstance(value, str) else None


def _yes_no(raw: str | None) -> bool | None:
    if raw is None:
        return None
    lowered = _strip_language(raw.strip().lower())
    if lowered == "yes":
        return True
    if lowered == "no":
        return False
    return None
