"""Cross-jurisdiction regulatory lookups."""

from dataclasses import dataclass

from food_score.domain.additives import normalize_code
from food_score.domain.regulatory import (
    Jurisdiction,
    JurisdictionInfo,
    RegulatoryRecord,
    RegulatoryRow,
    RegulatoryStatus,
)


@dataclass
class RegulatoryComparator:
    """Answers legality questions from per-jurisdiction status records.

    Banned and restricted lists are derived from the records on every call.
    """

    _jurisdictions: list[JurisdictionInfo]
    _records: dict[str, list[RegulatoryRecord]]

    def __init__(
        self,
        jurisdictions: list[JurisdictionInfo],
        records: dict[str, list[RegulatoryRecord]],
    ) -> None:
        self._jurisdictions = list(jurisdictions)
        self._records = {normalize_code(code): rows for code, rows in records.items()}

    @property
    def jurisdictions(self) -> list[JurisdictionInfo]:
        return list(self._jurisdictions)

    def records(self, code: str) -> list[RegulatoryRecord]:
        return self._records.get(normalize_code(code), [])

    def has_data(self, code: str) -> bool:
        return normalize_code(code) in self._records

    def status_in(self, code: str, jurisdiction: Jurisdiction) -> RegulatoryRecord | None:
        for record in self.records(code):
            if record.jurisdiction == jurisdiction:
                return record
        return None

    def banned_jurisdictions(self, code: str) -> list[Jurisdiction]:
        return self._jurisdictions_with(code, "banned")

    def restricted_jurisdictions(self, code: str) -> list[Jurisdiction]:
        return self._jurisdictions_with(code, "restricted")

    def is_banned_anywhere(self, code: str) -> bool:
        return bool(self.banned_jurisdictions(code))

    def requires_warning_anywhere(self, code: str) -> bool:
        return bool(self._jurisdictions_with(code, "warning_required"))

    def warning_text(self, code: str, jurisdiction: Jurisdiction) -> str | None:
        record = self.status_in(code, jurisdiction)
        return record.warning_text if record else None

    def banned_in(self, jurisdiction: Jurisdiction) -> list[str]:
        """Return every code banned in a jurisdiction."""
        return [
            code
            for code in self._records
            if jurisdiction in self.banned_jurisdictions(code)
        ]

    def compare(self, code: str) -> list[RegulatoryRow]:
        """One row per jurisdiction in display order; ``unknown`` where missing."""
        rows = []
        for info in self._jurisdictions:
            record = self.status_in(code, info.id)
            if record is None:
                rows.append(RegulatoryRow(jurisdiction=info.id, name=info.name, status="unknown"))
                continue
            rows.append(
                RegulatoryRow(
                    jurisdiction=info.id,
                    name=info.name,
                    status=record.status,
                    max_level=record.max_level,
                    notes=record.notes,
                    warning_text=record.warning_text,
                )
            )
        return rows

    def _jurisdictions_with(self, code: str, status: RegulatoryStatus) -> list[Jurisdiction]:
        order = [info.id for info in self._jurisdictions]
        found = {record.jurisdiction for record in self.records(code) if record.status == status}
        return [jurisdiction for jurisdiction in order if jurisdiction in found]
