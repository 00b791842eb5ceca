"""Static "why this rating?" explanations."""

from dataclasses import dataclass

from food_score.domain.additives import AdditiveExplanation, AdditiveRisk, normalize_code


@dataclass(frozen=True)
class ExplanationCounts:
    safe: int
    moderate: int
    avoid: int

    @property
    def total(self) -> int:
        return self.safe + self.moderate + self.avoid


@dataclass
class ExplanationCatalog:
    """Lookup and search over additive explanations."""

    _explanations: dict[str, AdditiveExplanation]

    def __init__(self, explanations: list[AdditiveExplanation]) -> None:
        self._explanations = {normalize_code(item.code): item for item in explanations}

    def get(self, code: str) -> AdditiveExplanation | None:
        return self._explanations.get(normalize_code(code))

    def has(self, code: str) -> bool:
        return self.get(code) is not None

    def by_risk(self, risk: AdditiveRisk) -> list[AdditiveExplanation]:
        return [item for item in self._explanations.values() if item.risk == risk]

    def counts(self) -> ExplanationCounts:
        return ExplanationCounts(
            safe=len(self.by_risk("safe")),
            moderate=len(self.by_risk("moderate")),
            avoid=len(self.by_risk("avoid")),
        )

    def search(self, query: str) -> list[AdditiveExplanation]:
        """Case-insensitive match on code, names, function and rationale."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            item
            for item in self._explanations.values()
            if any(
                needle in (text or "").lower()
                for text in (
                    item.code,
                    item.name,
                    item.common_name,
                    item.function,
                    item.why_this_rating,
                )
            )
        ]
