"""Tests for tiered additive resolution."""

import asyncio

from food_score.services.taxonomy import cache_key


def test_local_registry_wins(container) -> None:
    additive = asyncio.run(container.resolver.resolve("e-211"))

    assert additive.code == "E211"
    assert additive.name == "Sodium Benzoate"
    assert additive.risk == "moderate"
    assert additive.source == "local"
    assert additive.functions == ("preservative",)
    assert container.taxonomy_client.calls == 0


def test_local_registry_wins_over_cached_taxonomy(container) -> None:
    container.cache.set(
        cache_key("E211"),
        {"code": "E211", "name": "Remote benzoate", "efsa_risk": "high"},
        ttl_seconds=60,
    )

    additive = asyncio.run(container.resolver.resolve("E211"))

    assert additive.source == "local"
    assert additive.name == "Sodium Benzoate"
    assert additive.risk == "moderate"
    assert container.resolver.source_of("E211") == "local"


def test_resolve_offline_uses_registry(container) -> None:
    additive = container.resolver.resolve_offline("E101")

    assert additive.source == "local"
    assert additive.name == "Riboflavin"
    assert additive.functions == ("coloring",)


def test_fresh_remote_then_cached_remote(container) -> None:
    fresh = asyncio.run(container.resolver.resolve("E171"))

    assert fresh.source == "fresh_remote"
    assert fresh.name == "Titanium dioxide"
    assert fresh.risk == "avoid"
    assert fresh.functions == ("coloring",)
    assert fresh.vegan is True

    cached = asyncio.run(container.resolver.resolve("E171"))

    assert cached.source == "cached_remote"
    assert cached.name == "Titanium dioxide"
    assert container.taxonomy_client.calls == 1


def test_remote_sibling_entries_are_cached(container) -> None:
    asyncio.run(container.resolver.resolve("E171"))

    dextrin = container.resolver.resolve_offline("E1400")

    assert dextrin.source == "cached_remote"
    assert dextrin.risk == "safe"
    assert dextrin.functions == ("stabilizer", "thickener")


def test_fallback_when_remote_has_no_entry(container) -> None:
    additive = asyncio.run(container.resolver.resolve("E9999"))

    assert additive.source == "fallback"
    assert additive.name == "Additive E9999"
    assert additive.risk == "moderate"
    assert additive.description == "Unknown additive - no data available"
    assert additive.functions == ("other",)


def test_fallback_when_remote_fails(container) -> None:
    container.taxonomy_client.error = ValueError("bad payload")

    additive = asyncio.run(container.resolver.resolve("E171"))

    assert additive.source == "fallback"


def test_offline_resolution_skips_network(container) -> None:
    additive = asyncio.run(container.resolver.resolve("E171", allow_network=False))

    assert additive.source == "fallback"
    assert container.taxonomy_client.calls == 0
    assert container.resolver.resolve_offline("E171").source == "fallback"


def test_resolve_many_preserves_order(container) -> None:
    resolved = asyncio.run(container.resolver.resolve_many(["E300", "E171", "E9999"]))

    assert [item.code for item in resolved] == ["E300", "E171", "E9999"]
    assert resolved[0].source == "local"
    assert resolved[2].source == "fallback"


def test_source_of(container) -> None:
    resolver = container.resolver

    assert resolver.source_of("E300") == "local"
    assert resolver.source_of("E171") == "unknown"

    container.cache.set(
        cache_key("E171"), {"code": "E171", "name": "Titanium dioxide"}, ttl_seconds=60
    )

    assert resolver.source_of("E171") == "cached_remote"
