# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "rota_requests_total",
    "Total HTTP requests to the rota service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "rota_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "rota_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SCHEDULES_GENERATED = Counter(
    "rota_schedules_generated_total",
    "Schedules generated and stored",
    ["source"],
)
UNASSIGNED_TASKS = Counter(
    "rota_unassigned_tasks_total",
    "Tasks generated without an assignee",
    ["task_type"],
)
ENHANCEMENT_FALLBACKS = Counter(
    "rota_enhancement_fallbacks_total",
    "Enhancement attempts discarded in favour of the baseline",
    ["reason"],
)
BUSY_DAY_VIOLATIONS = Counter(
    "rota_busy_day_violations_total",
    "Proxy tasks placed on an assignee's busy day by the enhancement transform",
)
REMINDERS_SENT = Counter(
    "rota_reminders_sent_total",
    "Reminder notifications created",
)
NOTIFICATIONS_SENT = Counter(
    "rota_notifications_sent_total",
    "Reminder e-mails handed to the notification service",
    ["channel", "outcome"],
)
ACTIVE_MEMBERS = Gauge(
    "rota_members",
    "Number of members on the roster",
)
SCHEDULE_DAYS = Gauge(
    "rota_schedule_days",
    "Number of days in the current schedule",
)
