# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Enhancement client — calls the external schedule enhancement transform.

The transform is untrusted. This client only moves bytes: it returns the
decoded JSON payload or raises EnhancementError. Validation of what comes
back lives in reconcile.py.
"""

from typing import Any

import httpx

from rota_service.core.config import settings
from rota_service.core.logging import get_logger
from rota_service.models.domain import DaySchedule, Member

logger = get_logger(__name__)


class EnhancementError(Exception):
    """The transform was unreachable or answered with something unusable."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class EnhancementClient:
    """HTTP client for the schedule enhancement transform."""

    @property
    def enabled(self) -> bool:
        return bool(settings.ENHANCER_URL)

    def enhance(self, baseline: list[DaySchedule], members: list[Member]) -> Any:
        """POST the baseline plus a restricted member view; return decoded JSON."""
        payload = {
            "schedule": [d.model_dump(mode="json", by_alias=True) for d in baseline],
            # id, name and busy days only: no counters, nothing personal
            "members": [
                {"id": m.id, "name": m.name, "busyDays": list(m.busy_days)}
                for m in members
            ],
        }
        headers = {}
        if settings.ENHANCER_API_KEY:
            headers["Authorization"] = f"Bearer {settings.ENHANCER_API_KEY}"

        try:
            with httpx.Client(timeout=settings.ENHANCER_TIMEOUT) as client:
                resp = client.post(settings.ENHANCER_URL, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise EnhancementError("unreachable", f"Enhancer unreachable: {exc}") from exc

        if resp.status_code >= 300:
            raise EnhancementError(
                "bad_status",
                f"Enhancer returned {resp.status_code}: {resp.text[:200]}",
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise EnhancementError("invalid_json", f"Enhancer sent invalid JSON: {exc}") from exc

        logger.info("Enhancer responded: status=%d, days=%d", resp.status_code, len(baseline))
        return data
