import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from importer_intel import __version__
from importer_intel.api.router import api_router
from importer_intel.config import settings
from importer_intel.dependencies import get_session
from importer_intel.middleware.logging import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)

logger = logging.getLogger("intel.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Sentry if DSN is configured
    if settings.sentry_dsn:
        try:
            import sentry_sdk
            sentry_sdk.init(
                dsn=settings.sentry_dsn,
                traces_sample_rate=0.1,
                environment=settings.environment,
            )
            logger.info("Sentry initialized (env=%s)", settings.environment)
        except Exception as e:
            logger.warning("Failed to initialize Sentry: %s", e)

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY is not set; searches will fail until it is configured")

    # Subscriptions and notifications are read once, then written through
    await get_session().alerts.load()

    logger.info("Starting Importer Intel backend (env=%s)", settings.environment)
    yield
    logger.info("Shutting down Importer Intel backend")


app = FastAPI(
    title="Importer Intel - USA Importer Trade Intelligence",
    description="Claude-powered importer search, enrichment, charts and alerts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.public_base_url.rstrip("/")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix="/api")
