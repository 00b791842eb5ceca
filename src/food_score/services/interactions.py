"""Additive interaction detection."""

from dataclasses import dataclass

from food_score.domain.additives import normalize_code
from food_score.domain.interactions import (
    SEVERITY_ORDER,
    InteractionRule,
    InteractionSummary,
    InteractionWarning,
)

NO_INTERACTIONS = "No known additive interactions detected."
_MIN_PRESENT = 2


@dataclass
class InteractionDetector:
    """Matches additive lists against known interaction rules."""

    rules: list[InteractionRule]

    def detect(self, codes: list[str]) -> list[InteractionWarning]:
        """Return fired rules, most severe first.

        A rule fires when at least two of its members are present. Each warning
        carries only the members that were found.
        """
        present = {normalize_code(code) for code in codes}
        warnings = []
        for rule in self.rules:
            detected = tuple(
                member for member in rule.additives if normalize_code(member) in present
            )
            if len(detected) >= min(_MIN_PRESENT, len(rule.additives)):
                warnings.append(InteractionWarning(rule=rule, detected_additives=detected))
        return sorted(warnings, key=lambda warning: SEVERITY_ORDER[warning.severity])

    def has_serious(self, codes: list[str]) -> bool:
        return any(
            warning.severity in {"critical", "warning"} for warning in self.detect(codes)
        )


def summarize(warnings: list[InteractionWarning]) -> InteractionSummary:
    """Count warnings per severity band and describe them in one sentence."""
    if not warnings:
        return InteractionSummary(
            warning_count=0,
            caution_count=0,
            info_count=0,
            highest_severity=None,
            summary=NO_INTERACTIONS,
        )
    warning_count = sum(1 for w in warnings if w.severity in {"critical", "warning"})
    caution_count = sum(1 for w in warnings if w.severity == "caution")
    info_count = sum(1 for w in warnings if w.severity == "info")
    highest = min(warnings, key=lambda w: SEVERITY_ORDER[w.severity]).severity

    if warning_count:
        noun = "interaction" if warning_count == 1 else "interactions"
        text = f"{warning_count} significant additive {noun} detected."
    else:
        minor = caution_count + info_count
        noun = "interaction" if minor == 1 else "interactions"
        text = f"{minor} minor {noun} noted."
    return InteractionSummary(
        warning_count=warning_count,
        caution_count=caution_count,
        info_count=info_count,
        highest_severity=highest,
        summary=text,
    )
