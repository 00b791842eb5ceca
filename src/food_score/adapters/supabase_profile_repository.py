"""Supabase repository for personal health profiles."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError
from supabase import Client

from food_score.domain.profiles import GeneticProfile
from food_score.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles keyed by opaque user id."""

    client: Client

    def get_profile(self, user_id: str) -> GeneticProfile | None:
        """Return the stored profile for a user, if present."""
        response = (
            self.client.table("health_profiles")
            .select("profile")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        raw = response.data[0].get("profile")
        if not raw:
            return None
        try:
            return GeneticProfile.model_validate(raw)
        except ValidationError:
            _logger.warning("Ignoring malformed profile for user %s", user_id)
            return None
