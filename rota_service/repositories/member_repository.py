# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Member roster data access.
Insertion order is roster order, which the scheduler uses to break ties.
NO business rules here — pure CRUD.
"""

from typing import Optional

from rota_service.models.domain import Member


class MemberRepository:
    """In-memory member storage, ordered by insertion."""

    def __init__(self) -> None:
        self._store: dict[str, Member] = {}

    # ── Read ──

    def get_all(self) -> list[Member]:
        return list(self._store.values())

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return self._store.get(member_id)

    def exists(self, member_id: str) -> bool:
        return member_id in self._store

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, member: Member) -> None:
        # Re-saving an existing id keeps its roster position.
        self._store[member.id] = member

    def delete(self, member_id: str) -> Optional[Member]:
        return self._store.pop(member_id, None)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
