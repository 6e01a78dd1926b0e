# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from rota_service.repositories.absence_repository import AbsenceRepository
from rota_service.repositories.history_repository import HistoryRepository
from rota_service.repositories.member_repository import MemberRepository
from rota_service.repositories.notification_repository import NotificationRepository
from rota_service.repositories.schedule_repository import ScheduleRepository
from rota_service.services.enhancement_client import EnhancementClient
from rota_service.services.notification_client import NotificationClient
from rota_service.services.reminder_service import ReminderService
from rota_service.services.roster_service import RosterService
from rota_service.services.schedule_service import ScheduleService

# ── Singleton repository instances (in-memory stores) ──
_member_repo = MemberRepository()
_absence_repo = AbsenceRepository()
_schedule_repo = ScheduleRepository()
_history_repo = HistoryRepository()
_notification_repo = NotificationRepository()
_notification_client = NotificationClient()
_enhancement_client = EnhancementClient()

# ── Service instances (with injected dependencies) ──
_roster_service = RosterService(
    member_repo=_member_repo,
    absence_repo=_absence_repo,
    history_repo=_history_repo,
)
_schedule_service = ScheduleService(
    member_repo=_member_repo,
    absence_repo=_absence_repo,
    schedule_repo=_schedule_repo,
    history_repo=_history_repo,
    enhancement_client=_enhancement_client,
)
_reminder_service = ReminderService(
    schedule_repo=_schedule_repo,
    member_repo=_member_repo,
    notification_repo=_notification_repo,
    notification_client=_notification_client,
)


# ── FastAPI dependency functions ──
def get_roster_service() -> RosterService:
    return _roster_service


def get_schedule_service() -> ScheduleService:
    return _schedule_service


def get_reminder_service() -> ReminderService:
    return _reminder_service


def get_member_repo() -> MemberRepository:
    return _member_repo


def get_absence_repo() -> AbsenceRepository:
    return _absence_repo


def get_schedule_repo() -> ScheduleRepository:
    return _schedule_repo


def get_history_repo() -> HistoryRepository:
    return _history_repo


def get_notification_repo() -> NotificationRepository:
    return _notification_repo


def get_enhancement_client() -> EnhancementClient:
    return _enhancement_client


def get_notification_client() -> NotificationClient:
    return _notification_client
