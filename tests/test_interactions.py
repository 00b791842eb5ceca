"""Tests for additive interaction detection."""

from food_score.domain.interactions import InteractionRule
from food_score.services.interactions import (
    NO_INTERACTIONS,
    InteractionDetector,
    summarize,
)


def test_benzoate_with_vitamin_c_forms_benzene(container) -> None:
    warnings = container.interactions.detect(["e211", "E300"])

    assert [warning.rule.id for warning in warnings] == ["benzene-formation"]
    warning = warnings[0]
    assert warning.severity == "warning"
    assert warning.rule.resulting_compound == "Benzene"
    assert warning.detected_additives == ("E211", "E300")


def test_group_rule_fires_with_two_members(container) -> None:
    warnings = container.interactions.detect(["E102", "E110"])

    assert [warning.rule.id for warning in warnings] == ["southampton-six-multi"]
    assert warnings[0].detected_additives == ("E102", "E110")


def test_single_member_does_not_fire(container) -> None:
    assert container.interactions.detect(["E102"]) == []
    assert container.interactions.detect([]) == []


def test_warnings_sorted_by_severity(container) -> None:
    warnings = container.interactions.detect(["E102", "E211", "E300"])

    assert [warning.rule.id for warning in warnings] == [
        "benzene-formation",
        "southampton-benzoate",
    ]


def test_has_serious(container) -> None:
    assert container.interactions.has_serious(["E211", "E300"])
    assert not container.interactions.has_serious(["E250", "E621"])


def test_summary_without_warnings() -> None:
    result = summarize([])

    assert result.summary == NO_INTERACTIONS
    assert result.highest_severity is None
    assert result.warning_count == 0


def test_summary_counts_significant_interactions(container) -> None:
    result = summarize(container.interactions.detect(["E102", "E211", "E300"]))

    assert result.warning_count == 1
    assert result.caution_count == 1
    assert result.highest_severity == "warning"
    assert result.summary == "1 significant additive interaction detected."


def test_summary_counts_minor_interactions(container) -> None:
    result = summarize(container.interactions.detect(["E250", "E621"]))

    assert result.warning_count == 0
    assert result.caution_count == 1
    assert result.highest_severity == "caution"
    assert result.summary == "1 minor interaction noted."


def test_info_rules_count_as_minor() -> None:
    detector = InteractionDetector(
        [
            InteractionRule(
                id="info-pair",
                additives=("E330", "E300"),
                type="synergy",
                severity="info",
                title="Acid pairing",
                description="Common pairing",
            ),
            InteractionRule(
                id="caution-pair",
                additives=("E330", "E322"),
                type="amplification",
                severity="caution",
                title="Caution pairing",
                description="Minor pairing",
            ),
        ]
    )

    result = summarize(detector.detect(["E300", "E322", "E330"]))

    assert result.info_count == 1
    assert result.caution_count == 1
    assert result.highest_severity == "caution"
    assert result.summary == "2 minor interactions noted."
