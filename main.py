# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Household Rota Service
======================
Assigns recurring household duties (proxy lunch, proxy dinner, buying
drinks, weekend meal prep) across a small roster over a rolling horizon,
honouring weekly busy days and logged absences.

Optional: passes the baseline through an external enhancement transform,
re-validating its output and falling back to the baseline on any failure.

Port: 8005
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rota_service.controllers import (
    member_controller,
    reminder_controller,
    schedule_controller,
    system_controller,
)
from rota_service.core.config import settings
from rota_service.core.dependencies import get_member_repo, get_roster_service
from rota_service.core.logging import get_logger
from rota_service.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Seed a default roster on an empty store; log shutdown."""
    if settings.SEED_DEFAULT_ROSTER and get_member_repo().count() == 0:
        get_roster_service().seed_defaults()
    logger.info(
        "%s v%s started on port %d",
        settings.SERVICE_NAME, settings.SERVICE_VERSION, settings.SERVICE_PORT,
    )
    yield
    logger.info("%s shutting down", settings.SERVICE_NAME)


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Household Rota Service",
    description="Load-balanced duty rota with busy days, absences and reminders.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(member_controller.router)
app.include_router(schedule_controller.router)
app.include_router(reminder_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
