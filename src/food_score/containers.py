"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_score.adapters.supabase_cache import SupabaseCache
from food_score.adapters.supabase_profile_repository import SupabaseProfileRepository
from food_score.adapters.taxonomy_client import HttpxTaxonomyClient, TaxonomyClient
from food_score.config import Settings
from food_score.services.additive_load import AdditiveLoadCalculator
from food_score.services.analysis import ProductAnalyzer
from food_score.services.cache import Cache, InMemoryCache, TieredCache
from food_score.services.explanations import ExplanationCatalog
from food_score.services.functions import FunctionClassifier
from food_score.services.interactions import InteractionDetector
from food_score.services.personalization import PersonalizationService
from food_score.services.profiles import InMemoryProfileRepository, ProfileRepository
from food_score.services.reference_data import ReferenceData, load_reference_data
from food_score.services.registry import AdditiveRegistry
from food_score.services.regulatory import RegulatoryComparator
from food_score.services.resolver import AdditiveResolver
from food_score.services.scoring import HealthScorer
from food_score.services.taxonomy import TaxonomyService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: Cache
    taxonomy_client: TaxonomyClient
    profiles: ProfileRepository
    registry: AdditiveRegistry
    functions: FunctionClassifier
    taxonomy: TaxonomyService
    resolver: AdditiveResolver
    load_calculator: AdditiveLoadCalculator
    interactions: InteractionDetector
    regulatory: RegulatoryComparator
    scorer: HealthScorer
    personalization: PersonalizationService
    explanations: ExplanationCatalog
    analyzer: ProductAnalyzer
    close_resources: Callable[[], Awaitable[None]]


def build_services(  # noqa: PLR0913
    settings: Settings,
    reference: ReferenceData,
    cache: Cache,
    taxonomy_client: TaxonomyClient,
    profiles: ProfileRepository,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire services on top of already-built adapters."""
    registry = AdditiveRegistry(reference.additives)
    functions = FunctionClassifier(
        codes=reference.functions.codes,
        categories=reference.functions.categories,
    )
    taxonomy = TaxonomyService(
        client=taxonomy_client,
        cache=cache,
        ttl_seconds=settings.taxonomy_cache_ttl_seconds,
    )
    resolver = AdditiveResolver(registry=registry, functions=functions, taxonomy=taxonomy)
    load_calculator = AdditiveLoadCalculator(registry)
    interactions = InteractionDetector(reference.interactions)
    regulatory = RegulatoryComparator(
        jurisdictions=reference.regulatory.jurisdictions,
        records=reference.regulatory.additives,
    )
    scoring = reference.scoring
    scorer = HealthScorer(
        registry=registry,
        configs=scoring.configs,
        profiles=profiles,
        beverage_keywords=scoring.beverage_keywords,
        organic_labels=scoring.organic_labels,
        nova_penalties=scoring.nova_penalties,
        nova_descriptions=scoring.nova_descriptions,
        empty_calorie_caps=scoring.empty_calorie_caps,
    )
    personalization = PersonalizationService(
        registry=registry, rules=reference.personalized_rules
    )
    analyzer = ProductAnalyzer(
        resolver=resolver,
        functions=functions,
        load_calculator=load_calculator,
        interactions=interactions,
        regulatory=regulatory,
        scorer=scorer,
        personalization=personalization,
        profiles=profiles,
    )
    return AppContainer(
        settings=settings,
        cache=cache,
        taxonomy_client=taxonomy_client,
        profiles=profiles,
        registry=registry,
        functions=functions,
        taxonomy=taxonomy,
        resolver=resolver,
        load_calculator=load_calculator,
        interactions=interactions,
        regulatory=regulatory,
        scorer=scorer,
        personalization=personalization,
        explanations=ExplanationCatalog(reference.explanations),
        analyzer=analyzer,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Supabase backs the durable cache tier and profiles when configured;
    otherwise everything stays in memory.
    """
    resolved_settings = settings or Settings()
    memory_cache = InMemoryCache()
    cache: Cache = memory_cache
    profiles: ProfileRepository = InMemoryProfileRepository()
    if resolved_settings.supabase_configured:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        cache = TieredCache(
            memory=memory_cache,
            durable=SupabaseCache(supabase_client),
            backfill_ttl_seconds=resolved_settings.memory_backfill_ttl_seconds,
        )
        profiles = SupabaseProfileRepository(supabase_client)
    else:
        _logger.info("Supabase not configured; using in-memory cache and profiles")
    taxonomy_client = HttpxTaxonomyClient.create(
        url=resolved_settings.taxonomy_url,
        timeout_seconds=resolved_settings.taxonomy_timeout_seconds,
    )

    async def close_resources() -> None:
        await taxonomy_client.close()

    return build_services(
        settings=resolved_settings,
        reference=load_reference_data(),
        cache=cache,
        taxonomy_client=taxonomy_client,
        profiles=profiles,
        close_resources=close_resources,
    )
