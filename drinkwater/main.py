import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drinkwater.core.config import settings
from drinkwater.db.mongo import close_client
from drinkwater.routes.hydration import router as hydration_router
from drinkwater.routes.notifications import router as notifications_router
from drinkwater.routes.profile import router as profile_router
from drinkwater.routes.stats import router as stats_router
from drinkwater.routes.weather import router as weather_router
from drinkwater.scheduler import create_scheduler, run_startup_catch_up

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Application lifespan  (startup / shutdown)
# ─────────────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ──────────────────────────────────────────────────────────────
    logger.info("Starting day boundary scheduler…")
    _scheduler = create_scheduler()
    _scheduler.start()

    # Finalise days that ended while the service was down
    try:
        finalised = await run_startup_catch_up()
        logger.info("Startup catch-up: %d user-days finalised.", finalised)
    except Exception as exc:
        logger.warning("Startup catch-up failed (non-fatal): %s", exc)

    yield   # application runs here

    # ── Shutdown ─────────────────────────────────────────────────────────────
    logger.info("Shutting down day boundary scheduler…")
    _scheduler.shutdown(wait=False)
    close_client()


app = FastAPI(
    title="DrinkWater Hydration API",
    description="Personalised daily water-intake targets and tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(profile_router, prefix="/profile")
app.include_router(hydration_router)
app.include_router(stats_router)
app.include_router(weather_router)
app.include_router(notifications_router, prefix="/notifications")


@app.get("/")
def root():
    """API information."""
    return {
        "app": "DrinkWater Hydration API",
        "version": "1.0.0",
        "status": "active",
        "endpoints": {
            "/hydration/target": "GET - Daily target with breakdown",
            "/hydration/log": "POST - Log an intake entry",
            "/stats/weekly": "GET - Last seven days",
        },
    }


@app.get("/health")
def health_check():
    """Lightweight ping used by the mobile app to auto-detect the backend URL."""
    return {"status": "ok"}
