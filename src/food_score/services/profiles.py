"""Personal profile lookup."""

from dataclasses import dataclass, field
from typing import Protocol

from food_score.domain.profiles import GeneticProfile


class ProfileRepository(Protocol):
    """Storage interface for personal health profiles."""

    def get_profile(self, user_id: str) -> GeneticProfile | None:
        """Return the profile for an opaque user id, if one exists."""


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """Profiles held in process memory."""

    profiles: dict[str, GeneticProfile] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> GeneticProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: str, profile: GeneticProfile) -> None:
        self.profiles[user_id] = profile
