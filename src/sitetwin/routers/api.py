from fastapi import APIRouter

from sitetwin.routers import alerts, assets, flows, sensor, simulation, sustainability

router = APIRouter()

# include sub-routers
router.include_router(sensor.router)
router.include_router(simulation.router)
router.include_router(alerts.router)
router.include_router(assets.router)
router.include_router(flows.router)
router.include_router(sustainability.router)
