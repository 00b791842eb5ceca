"""Supabase-backed durable cache."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from food_score.services.cache import Cache, CacheError

_TABLE = "additive_cache"


@dataclass
class SupabaseCache(Cache):
    """Key-value cache stored in a Supabase table.

    Rows hold ``key``, a JSON ``value`` and an ``expires_at`` timestamp.
    """

    client: Client
    table: str = _TABLE

    def get(self, key: str) -> object | None:
        """Return the stored value unless it has expired."""
        response = _execute(
            self.client.table(self.table).select("value, expires_at").eq("key", key).limit(1)
        )
        if not response.data:
            return None
        row = response.data[0]
        expires_at = _parse_timestamp(row.get("expires_at"))
        if expires_at is None or datetime.now(tz=UTC) >= expires_at:
            return None
        return row.get("value")

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self.set_many({key: value}, ttl_seconds=ttl_seconds)

    def set_many(self, items: dict[str, object], ttl_seconds: int) -> None:
        """Upsert several rows in one request."""
        if not items:
            return
        now = datetime.now(tz=UTC)
        expires_at = (now + timedelta(seconds=ttl_seconds)).isoformat()
        rows = [
            {
                "key": key,
                "value": value,
                "expires_at": expires_at,
                "updated_at": now.isoformat(),
            }
            for key, value in items.items()
        ]
        _execute(self.client.table(self.table).upsert(rows, on_conflict="key"))

    def is_valid(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        """Delete every row in the cache table."""
        _execute(self.client.table(self.table).delete().neq("key", ""))


def _execute(query):  # type: ignore[no-untyped-def]
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        raise CacheError(f"Supabase cache request failed: {exc}") from exc


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
