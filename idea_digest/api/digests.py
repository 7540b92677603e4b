"""Internal digest endpoints.

Manual trigger and status for the digest scheduler. /internal/* paths are
expected to be protected by the platform (IAM / ingress rules).
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request

from idea_digest.models.digest import CycleReport
from idea_digest.models.team_preference import DigestFrequency
from idea_digest.services.cycle_scheduler import CycleScheduler, utc_now

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/internal/digests", tags=["digests"])


def get_scheduler(request: Request) -> CycleScheduler:
    """Scheduler created by the application lifespan."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=503,
            detail={"status": "error", "error": "scheduler not initialized"},
        )
    return scheduler


def report_to_dict(report: CycleReport) -> dict[str, Any]:
    """Serialize a cycle report for responses."""
    return {
        "tick_at": report.tick_at.isoformat(),
        "cadences": [c.value for c in report.cadences],
        "summary": report.summary(),
        "outcomes": [
            {
                "team_id": o.group_id,
                "cadence": o.cadence.value,
                "status": o.status.value,
                "reason": o.reason,
            }
            for o in report.outcomes
        ],
    }


@router.post("/run")
async def run_digests(
    request: Request,
    run_at: datetime | None = None,
    frequency: DigestFrequency | None = None,
) -> dict[str, Any]:
    """Run a digest cycle now.

    Without ``frequency`` the cadences due at ``run_at`` are run, exactly as
    a scheduler tick would. With ``frequency`` that cadence is forced, which
    back-fills a digest missed while the service was down.

    Returns:
        Cycle report.
    """
    scheduler = get_scheduler(request)
    now = run_at or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    try:
        if frequency is None:
            report = await scheduler.run_tick(now)
        else:
            report = await scheduler.run_cadence(frequency, now)
    except Exception as e:
        logger.error("manual_digest_run_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail={"status": "error", "error": str(e)},
        ) from e

    return {
        "status": "success",
        "result": report_to_dict(report),
    }


@router.get("/status")
async def digest_status(request: Request) -> dict[str, Any]:
    """Scheduler state and the last cycle report."""
    scheduler = get_scheduler(request)
    last_report = scheduler.last_report
    return {
        "state": scheduler.state.value,
        "running": scheduler.is_running,
        "last_tick_at": (
            scheduler.last_tick_at.isoformat() if scheduler.last_tick_at else None
        ),
        "last_report": report_to_dict(last_report) if last_report else None,
    }
