"""Tiered additive resolution."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal

from food_score.domain.additives import (
    Additive,
    AdditiveSource,
    ResolvedAdditive,
    normalize_code,
)
from food_score.services.functions import FunctionClassifier
from food_score.services.registry import AdditiveRegistry
from food_score.services.taxonomy import (
    TaxonomyEntry,
    TaxonomyService,
    map_additive_classes,
    map_efsa_risk,
)

_logger = logging.getLogger(__name__)


@dataclass
class AdditiveResolver:
    """Resolves additive codes through local, cached, remote and fallback tiers.

    The local registry always wins. ``allow_network=False`` skips the remote
    fetch and is what non-async callers get through ``resolve_offline``.
    """

    registry: AdditiveRegistry
    functions: FunctionClassifier
    taxonomy: TaxonomyService

    async def resolve(self, code: str, *, allow_network: bool = True) -> ResolvedAdditive:
        normalized = normalize_code(code)
        resolved = self._resolve_without_fetch(normalized)
        if resolved is not None:
            return resolved
        if allow_network:
            entry = await self.taxonomy.fetch_entry(normalized)
            if entry is not None:
                return _from_taxonomy(entry, "fresh_remote")
        _logger.debug("Falling back for additive %s", normalized)
        return _fallback(normalized)

    def resolve_offline(self, code: str) -> ResolvedAdditive:
        """Resolve without the network tier."""
        normalized = normalize_code(code)
        return self._resolve_without_fetch(normalized) or _fallback(normalized)

    async def resolve_many(
        self, codes: list[str], *, allow_network: bool = True
    ) -> list[ResolvedAdditive]:
        return list(
            await asyncio.gather(
                *(self.resolve(code, allow_network=allow_network) for code in codes)
            )
        )

    def source_of(self, code: str) -> Literal["local", "cached_remote", "unknown"]:
        """Report where a code would resolve from without fetching anything."""
        if self.registry.contains(code):
            return "local"
        if self.taxonomy.cached_entry(code) is not None:
            return "cached_remote"
        return "unknown"

    def _resolve_without_fetch(self, normalized: str) -> ResolvedAdditive | None:
        additive = self.registry.get(normalized)
        if additive is not None:
            return self._from_registry(additive)
        entry = self.taxonomy.cached_entry(normalized)
        if entry is not None:
            return _from_taxonomy(entry, "cached_remote")
        return None

    def _from_registry(self, additive: Additive) -> ResolvedAdditive:
        return ResolvedAdditive(
            code=normalize_code(additive.code),
            name=additive.name,
            risk=additive.risk,
            description=additive.description,
            functions=self.functions.functions_of(additive.code),
            source="local",
            concerns=additive.concerns,
        )


def _from_taxonomy(entry: TaxonomyEntry, source: AdditiveSource) -> ResolvedAdditive:
    return ResolvedAdditive(
        code=entry.code,
        name=entry.name,
        risk=map_efsa_risk(entry.efsa_risk),
        description=entry.description,
        functions=map_additive_classes(entry.additive_classes),
        source=source,
        vegan=entry.vegan,
        vegetarian=entry.vegetarian,
        efsa_url=entry.efsa_evaluation_url,
    )


def _fallback(code: str) -> ResolvedAdditive:
    return ResolvedAdditive(
        code=code,
        name=f"Additive {code}",
        risk="moderate",
        description="Unknown additive - no data available",
        functions=("other",),
        source="fallback",
    )
