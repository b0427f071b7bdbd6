# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (control panel, used by middleware) ──
REQUEST_COUNT = Counter(
    "geyser_panel_requests_total",
    "Total HTTP requests to the control panel",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "geyser_panel_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "geyser_panel_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Controller box calls (updated by clients and services only) ──
CONTROLLER_CALLS = Counter(
    "geyser_controller_calls_total",
    "Calls made to the geyser controller API",
    ["operation", "outcome"],
)
COMMANDS_SENT = Counter(
    "geyser_commands_sent_total",
    "Manual and mode commands dispatched",
    ["kind", "command"],
)
STATUS_POLLS = Counter(
    "geyser_status_polls_total",
    "Status poll attempts",
    ["outcome"],
)
SCHEDULES_LOADED = Gauge(
    "geyser_schedules_loaded",
    "Number of schedules in the local collection",
)
NOTIFICATIONS_SHOWN = Counter(
    "geyser_notifications_shown_total",
    "Toasts raised to the user",
    ["level"],
)
