"""Shared test fixtures."""

from dataclasses import dataclass, field

import httpx
import pytest

from food_score.adapters.taxonomy_client import DEFAULT_TAXONOMY_URL, TaxonomyClient
from food_score.config import Settings
from food_score.containers import AppContainer, build_services
from food_score.domain.profiles import GeneticProfile, RiskOverride
from food_score.domain.scoring import ScoringConfig
from food_score.services.cache import Cache, CacheError, InMemoryCache
from food_score.services.profiles import InMemoryProfileRepository
from food_score.services.reference_data import ReferenceData, load_reference_data

TAXONOMY_PAYLOAD: dict[str, object] = {
    "en:e171": {
        "name": {"en": "Titanium dioxide", "fr": "Dioxyde de titane"},
        "efsa_evaluation_overexposure_risk": {"en": "en:high"},
        "additives_classes": {"en": "en:colour"},
        "vegan": {"en": "yes"},
        "vegetarian": {"en": "yes"},
        "efsa_evaluation_url": {"en": "https://www.efsa.europa.eu/en/efsajournal/pub/6585"},
    },
    "en:e1400": {
        "name": {"en": "Dextrin"},
        "efsa_evaluation_overexposure_risk": {"en": "en:no"},
        "additives_classes": {"en": "en:stabiliser, en:thickener"},
    },
    "en:e1520": {
        "name": {"fr": "Propylène glycol"},
        "additives_classes": {"en": "en:humectant"},
    },
    "en:antioxidant": {"name": {"en": "Antioxidant"}},
}


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@dataclass
class FakeTaxonomyClient(TaxonomyClient):
    """Fake taxonomy client returning a fixed document."""

    payload: dict[str, object] = field(default_factory=lambda: dict(TAXONOMY_PAYLOAD))
    error: Exception | None = None
    calls: int = 0

    async def fetch_taxonomy(self) -> dict[str, object]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload

    async def close(self) -> None:
        return None


@dataclass
class UnavailableCache(Cache):
    """Durable cache whose backend is unreachable."""

    def get(self, key: str) -> object | None:
        raise CacheError(f"read {key}")

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        raise CacheError(f"write {key}")

    def set_many(self, items: dict[str, object], ttl_seconds: int) -> None:
        raise CacheError("write batch")

    def is_valid(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        raise CacheError("clear")


def failing_taxonomy_client() -> FakeTaxonomyClient:
    request = httpx.Request("GET", DEFAULT_TAXONOMY_URL)
    return FakeTaxonomyClient(
        error=httpx.ConnectError("connection refused", request=request)
    )


def heart_profile() -> GeneticProfile:
    """Profile with cardiovascular, lactose and fat sensitivities."""
    return GeneticProfile(
        saturated_fat_sensitive=True,
        saturated_fat_threshold=3.5,
        iron_overload_carrier=True,
        lactose_intolerant=True,
        cardiovascular_risk=True,
        fast_caffeine_metabolizer=True,
        favorable_carbs=True,
        needs_omega3=True,
        needs_folate=True,
        endurance_type=True,
        sugar_threshold=25.0,
        sodium_threshold=1.5,
        additive_overrides={
            "E250": RiskOverride(risk="avoid", reason="Nitrites form harmful compounds"),
            "E951": RiskOverride(risk="moderate", reason="Lower concern for this profile"),
        },
    )


def strict_scoring_config(reference: ReferenceData) -> ScoringConfig:
    """Default config with a heavier saturated fat weight and omega-3 enabled."""
    default = reference.scoring.configs["default"]
    return ScoringConfig.model_validate(
        {
            "weights": {**default.weights.model_dump(), "saturated_fat": 20, "omega3": 5},
            "thresholds": {
                **{key: value.model_dump() for key, value in default.thresholds.items()},
                "saturated_fat": {"low": 1.0, "medium": 2.0, "high": 3.5},
                "omega3": {"low": 0.1, "medium": 0.5, "high": 1.5},
            },
        }
    )


def make_container(
    settings: Settings,
    reference: ReferenceData,
    taxonomy_client: FakeTaxonomyClient,
    profiles: InMemoryProfileRepository,
    cache: Cache,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return build_services(
        settings=settings,
        reference=reference,
        cache=cache,
        taxonomy_client=taxonomy_client,
        profiles=profiles,
        close_resources=close_resources,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token")


@pytest.fixture
def reference() -> ReferenceData:
    return load_reference_data()


@pytest.fixture
def taxonomy_client() -> FakeTaxonomyClient:
    return FakeTaxonomyClient()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    reference: ReferenceData,
    taxonomy_client: FakeTaxonomyClient,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    return make_container(settings, reference, taxonomy_client, profile_repository, InMemoryCache())
