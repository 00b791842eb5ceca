"""Open Food Facts additive taxonomy client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_TAXONOMY_URL = "https://static.openfoodfacts.org/data/taxonomies/additives.json"


class TaxonomyClient(Protocol):
    """Interface for fetching the remote additive taxonomy."""

    async def fetch_taxonomy(self) -> dict[str, object]:
        """Return the raw taxonomy document keyed by taxonomy id."""


@dataclass
class HttpxTaxonomyClient(TaxonomyClient):
    """HTTPX-backed taxonomy client."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls, url: str = DEFAULT_TAXONOMY_URL, timeout_seconds: float = 15.0
    ) -> "HttpxTaxonomyClient":
        """Create a taxonomy client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_taxonomy(self) -> dict[str, object]:
        """Download the full additive taxonomy."""
        response = await self.http_client.get(
            self.url,
            headers={"Accept": "application/json"},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Taxonomy payload is not a JSON object")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
