from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI
from pydantic_settings import BaseSettings

from sitetwin.routers.api import router as api_router
from sitetwin.schemas import AppHealthOK
from sitetwin.core.config_loader import ConfigLoader
from sitetwin.core.flows.registry import FlowRegistry
from sitetwin.core.service_manager import ServiceManager

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "Site Twin API"
    debug: bool = True
    # Override values from config/site_config.json, e.g. OFFLINE=true TICK_INTERVAL=5
    config_path: Optional[Path] = None
    offline: Optional[bool] = None
    tick_interval: Optional[float] = None
    llm_model: str = "gpt-4o-mini"


def build_services(settings: Settings) -> ServiceManager:
    return ServiceManager(
        ConfigLoader(settings.config_path),
        flows=FlowRegistry(model=settings.llm_model),
        tick_interval=settings.tick_interval,
        offline=settings.offline,
    )


def create_app(settings: Optional[Settings] = None, services: Optional[ServiceManager] = None) -> FastAPI:
    settings = settings or Settings()
    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting background services (%s)", "offline" if services.sensor_manager.offline else "online"
        )
        await services.start_services()
        try:
            yield
        finally:
            logger.info("Stopping background services")
            services.stop_services()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.services = services

    @app.get("/", tags=["meta"])
    async def read_root() -> dict[str, str]:
        return {"message": settings.app_name}

    @app.get("/health", tags=["meta"], response_model=AppHealthOK)
    async def healthcheck() -> AppHealthOK:
        return AppHealthOK(status="ok", app=settings.app_name)

    # mount API router under /api
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
