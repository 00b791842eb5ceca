"""Curated additive registry."""

from dataclasses import dataclass

from food_score.domain.additives import (
    Additive,
    AdditiveAnalysis,
    AdditiveRisk,
    normalize_code,
)


@dataclass
class AdditiveRegistry:
    """Static lookup of additive code to its curated record."""

    _additives: dict[str, Additive]

    def __init__(self, additives: list[Additive]) -> None:
        self._additives = {normalize_code(item.code): item for item in additives}

    def get(self, code: str) -> Additive | None:
        """Return the curated record for a code, if any."""
        return self._additives.get(normalize_code(code))

    def contains(self, code: str) -> bool:
        return self.get(code) is not None

    def classify(self, code: str) -> AdditiveRisk:
        """Return the risk tier, treating unknown codes as moderate."""
        additive = self.get(code)
        return additive.risk if additive else "moderate"

    def by_risk(self, risk: AdditiveRisk) -> list[Additive]:
        return [item for item in self._additives.values() if item.risk == risk]

    def analyze(self, codes: list[str]) -> AdditiveAnalysis:
        """Bucket codes by risk; unregistered codes go to ``unknown``."""
        analysis = AdditiveAnalysis()
        for code in codes:
            additive = self.get(code)
            if additive is None:
                analysis.unknown.append(normalize_code(code))
            elif additive.risk == "safe":
                analysis.safe.append(additive)
            elif additive.risk == "moderate":
                analysis.moderate.append(additive)
            else:
                analysis.avoid.append(additive)
        return analysis

    def __len__(self) -> int:
        return len(self._additives)
