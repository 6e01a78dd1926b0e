# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Absence (home visit) log data access.
"""

from typing import Optional

from rota_service.models.domain import AbsenceInterval


class AbsenceRepository:
    """In-memory absence log, unordered, many entries per member."""

    def __init__(self) -> None:
        self._store: dict[str, AbsenceInterval] = {}

    # ── Read ──

    def get_all(self, member_id: Optional[str] = None) -> list[AbsenceInterval]:
        absences = list(self._store.values())
        if member_id:
            absences = [a for a in absences if a.member_id == member_id]
        return absences

    # ── Write ──

    def save(self, absence: AbsenceInterval) -> None:
        self._store[absence.id] = absence

    def delete(self, absence_id: str) -> Optional[AbsenceInterval]:
        return self._store.pop(absence_id, None)

    def delete_for_member(self, member_id: str) -> int:
        doomed = [k for k, a in self._store.items() if a.member_id == member_id]
        for key in doomed:
            del self._store[key]
        return len(doomed)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
