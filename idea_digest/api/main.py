"""FastAPI host for the digest scheduler.

The scheduler lives as long as the app: it is started from the lifespan and
given ``SHUTDOWN_GRACE_SECONDS`` to finish in-flight deliveries on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from idea_digest import __version__
from idea_digest.adapters.firestore_client import FirestoreClient
from idea_digest.adapters.slack_client import SlackClient
from idea_digest.api.dependencies import build_scheduler
from idea_digest.api.digests import router as digests_router
from idea_digest.config.logging import configure_logging, get_logger
from idea_digest.config.settings import Settings

SHUTDOWN_GRACE_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Builds the digest scheduler on startup, starts it when enabled and
    stops it on shutdown, letting in-flight deliveries finish.
    """
    settings = Settings()  # type: ignore[call-arg]
    configure_logging(json_logs=settings.LOG_JSON)
    logger = get_logger("api")

    firestore = FirestoreClient(project_id=settings.GCP_PROJECT_ID)
    slack = SlackClient(
        token=settings.SLACK_BOT_TOKEN,
        max_retries=settings.SLACK_RATE_LIMIT_RETRIES,
    )
    scheduler = build_scheduler(settings, firestore, slack)

    app.state.settings = settings
    app.state.scheduler = scheduler

    if settings.DIGEST_SCHEDULER_ENABLED:
        scheduler.start()
    logger.info(
        "app_started",
        project_id=settings.GCP_PROJECT_ID,
        is_local=settings.is_local,
        scheduler_enabled=settings.DIGEST_SCHEDULER_ENABLED,
    )

    try:
        yield
    finally:
        logger.info("app_stopping")
        await scheduler.stop(timeout=SHUTDOWN_GRACE_SECONDS)


app = FastAPI(
    title="Idea Digest",
    description="Weekly and monthly idea digests for team channels",
    version=__version__,
    lifespan=lifespan,
)
app.include_router(digests_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check for the hosting platform."""
    return {"status": "healthy"}
