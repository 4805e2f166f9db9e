# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "intake_requests_total",
    "Total HTTP requests to the intake service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "intake_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "intake_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SUBMISSIONS_CREATED = Counter(
    "intake_submissions_created_total",
    "Total submissions persisted",
    ["kind"],
)
STATUS_UPDATES = Counter(
    "intake_status_updates_total",
    "Total admin status updates applied",
    ["kind", "status"],
)
RECORDS_DELETED = Counter(
    "intake_records_deleted_total",
    "Total records deleted by an admin",
    ["kind"],
)
NOTIFICATIONS_SENT = Counter(
    "intake_notifications_total",
    "Notification attempts by template and outcome",
    ["kind", "outcome"],
)
NOTIFICATION_LATENCY = Histogram(
    "intake_notification_duration_seconds",
    "Time spent delivering one notification",
    ["kind"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
