# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Geyser Remote: local control panel for the geyser controller box.

Schedules are synced from the controller's /schedule resource, sensor and
relay status is polled from /status, and the manual/mode buttons fire
commands at /manual and /mode.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geyser_remote.controllers import device_controller, schedule_controller, system_controller
from geyser_remote.core import dependencies
from geyser_remote.core.config import settings
from geyser_remote.core.logging import get_logger
from geyser_remote.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Wire clients, load schedules, start the status poll; stop it on shutdown."""
    if not dependencies.services_ready():
        dependencies.init_services()
    service = dependencies.get_schedule_service()
    logger.info("Geyser remote starting: controller=%s", service.base_url)
    if settings.FETCH_ON_STARTUP:
        await service.attach()
    poller = dependencies.get_status_poller()
    if settings.STATUS_POLL_ENABLED:
        poller.start()
    yield
    await dependencies.close_services()
    logger.info("Geyser remote shutting down: poller stopped, HTTP client closed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Geyser Remote",
    description="Status, manual commands and heating schedules for the geyser controller.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


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
app.include_router(schedule_controller.router)
app.include_router(device_controller.router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level=settings.LOG_LEVEL.lower())


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    run()
