# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster management — members and their absences.
Coordinates repository writes with metrics, history, and validation.
"""

from datetime import date
from typing import Optional

from rota_service.core.logging import get_logger
from rota_service.metrics.prometheus import ACTIVE_MEMBERS
from rota_service.models.domain import AbsenceInterval, Member
from rota_service.repositories.absence_repository import AbsenceRepository
from rota_service.repositories.history_repository import HistoryRepository
from rota_service.repositories.member_repository import MemberRepository

logger = get_logger(__name__)


class RosterService:
    """Business logic for the member roster and the absence log."""

    def __init__(
        self,
        member_repo: MemberRepository,
        absence_repo: AbsenceRepository,
        history_repo: HistoryRepository,
    ) -> None:
        self._members = member_repo
        self._absences = absence_repo
        self._history = history_repo

    # ── Members ──

    def create_member(
        self,
        name: str,
        start_date: date,
        busy_days: Optional[list[str]] = None,
        member_id: Optional[str] = None,
    ) -> Member:
        """Add a member to the end of the roster. Raises ValueError on duplicate id."""
        fields = {"name": name, "start_date": start_date, "busy_days": busy_days or []}
        if member_id:
            if self._members.exists(member_id):
                raise ValueError(f"Member '{member_id}' already exists")
            fields["id"] = member_id
        member = Member(**fields)
        self._members.save(member)

        ACTIVE_MEMBERS.set(self._members.count())
        self._history.record_event(
            "member_created", {"member_id": member.id, "name": member.name}
        )
        logger.info("Member created: name=%s", member.name, extra={"member_id": member.id})
        return member

    def update_member(
        self,
        member_id: str,
        name: Optional[str] = None,
        start_date: Optional[date] = None,
        busy_days: Optional[list[str]] = None,
    ) -> Member:
        """Partially update a member. Raises KeyError."""
        member = self.get_member(member_id)
        changes: dict = {}
        if name is not None and name != member.name:
            changes["name"] = name
        if start_date is not None and start_date != member.start_date:
            changes["start_date"] = start_date
        if busy_days is not None and list(busy_days) != member.busy_days:
            changes["busy_days"] = list(dict.fromkeys(busy_days))

        if changes:
            member = member.model_copy(update=changes)
            self._members.save(member)
            self._history.record_event(
                "member_updated",
                {"member_id": member_id, "fields": sorted(changes.keys())},
            )
            logger.info("Member updated: id=%s, fields=%s", member_id, sorted(changes))
        return member

    def delete_member(self, member_id: str) -> dict[str, str]:
        """Remove a member and their absences. Raises KeyError."""
        if self._members.delete(member_id) is None:
            raise KeyError(f"No member found with id '{member_id}'")
        dropped = self._absences.delete_for_member(member_id)

        ACTIVE_MEMBERS.set(self._members.count())
        self._history.record_event(
            "member_deleted", {"member_id": member_id, "absences_removed": dropped}
        )
        logger.info(
            "Member deleted: absences_removed=%d", dropped, extra={"member_id": member_id}
        )
        return {"status": "deleted", "member_id": member_id}

    def list_members(self) -> list[Member]:
        return self._members.get_all()

    def get_member(self, member_id: str) -> Member:
        member = self._members.get_by_id(member_id)
        if member is None:
            raise KeyError(f"No member found with id '{member_id}'")
        return member

    # ── Absences ──

    def log_absence(
        self,
        member_id: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> AbsenceInterval:
        """Record an absence. Raises KeyError for unknown member, ValueError for bad range."""
        if not self._members.exists(member_id):
            raise KeyError(f"No member found with id '{member_id}'")
        absence = AbsenceInterval(
            member_id=member_id, start_date=start_date, end_date=end_date, reason=reason
        )
        if absence.end_date < absence.start_date:
            raise ValueError("Absence end_date must not be before start_date")
        self._absences.save(absence)

        self._history.record_event(
            "absence_logged",
            {
                "absence_id": absence.id,
                "member_id": member_id,
                "start_date": absence.start_date.isoformat(),
                "end_date": absence.end_date.isoformat(),
            },
        )
        logger.info(
            "Absence logged: member=%s, %s..%s",
            member_id, absence.start_date, absence.end_date,
        )
        return absence

    def list_absences(self, member_id: Optional[str] = None) -> list[AbsenceInterval]:
        return sorted(self._absences.get_all(member_id), key=lambda a: a.start_date)

    def delete_absence(self, absence_id: str) -> dict[str, str]:
        absence = self._absences.delete(absence_id)
        if absence is None:
            raise KeyError(f"No absence found with id '{absence_id}'")
        self._history.record_event(
            "absence_deleted", {"absence_id": absence_id, "member_id": absence.member_id}
        )
        return {"status": "deleted", "absence_id": absence_id}

    # ── Seed ──

    def seed_defaults(self) -> None:
        """Create a default roster so the service is usable immediately."""
        default_members = [
            {"id": "1", "name": "Ali", "start_date": "2023-10-01", "busy_days": ["Mon", "Wed"]},
            {"id": "2", "name": "Reza", "start_date": "2023-10-01", "busy_days": ["Tue", "Thu"]},
            {"id": "3", "name": "Sara", "start_date": "2023-10-01", "busy_days": ["Fri"]},
            {"id": "4", "name": "Nima", "start_date": "2023-10-01", "busy_days": ["Mon", "Tue"]},
        ]
        for md in default_members:
            self._members.save(Member(**md))
        self._history.record_event(
            "roster_seeded", {"members_count": len(default_members), "source": "seed"}
        )
        logger.info("Seeded %d default members", len(default_members))
        ACTIVE_MEMBERS.set(self._members.count())
