"""FastAPI entry point for the notification logs dashboard backend."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

from interfaces import notification_router  # noqa: E402  # logging must be configured first
from interfaces import deps  # noqa: E402

app = FastAPI(title="Notification Logs Dashboard")

app.include_router(notification_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=deps.settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Data-Source"],
)


@app.get("/health", tags=["health"])
def health_check() -> dict:
    """Expose a minimal health endpoint to help dev tooling."""
    return {
        "status": "ok",
        "configVersion": deps.settings.version,
        "dataSource": "live" if deps.report_service else "mock",
    }


if __name__ == "__main__":  # pragma: no cover - manual dev entry
    import uvicorn

    uvicorn.run(app, host=deps.settings.host, port=deps.settings.port)
