"""Digest cycle scheduler.

Long-running loop that wakes once per tick, runs the weekly and/or monthly
digest when due, and isolates failures per team so one bad channel never
costs the other teams their digest or the next tick its schedule.

A tick missed while the process is down is not caught up; the host can
back-fill through ``run_cadence``.
"""

import asyncio
import contextlib
import time
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

import structlog

from idea_digest.config.digest import DEFAULT_DIGEST_CONFIG, DigestConfig
from idea_digest.errors import CollaboratorError, ConfigurationError
from idea_digest.models.digest import (
    CycleOutcome,
    CycleReport,
    FatalFailure,
    GroupResult,
    NotificationWindow,
    Ok,
    OutcomeStatus,
    TransientFailure,
)
from idea_digest.models.team_preference import DigestFrequency, TeamPreference
from idea_digest.services.delivery_dispatcher import DeliveryDispatcher
from idea_digest.services.digest_compiler import DigestCompiler
from idea_digest.services.interfaces import RecipientDirectory
from idea_digest.services.window import compute_window, due_cadences

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default scheduler clock."""
    return datetime.now(UTC)


class SchedulerState(str, Enum):
    """Scheduler lifecycle state."""

    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class CycleScheduler:
    """Runs digest cycles on a fixed tick.

    Collaborators are injected so the loop can be driven by fakes and a
    fixed clock in tests.
    """

    def __init__(
        self,
        directory: RecipientDirectory,
        compiler: DigestCompiler,
        dispatcher: DeliveryDispatcher,
        config: DigestConfig = DEFAULT_DIGEST_CONFIG,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize CycleScheduler.

        Args:
            directory: Recipient directory (team preferences).
            compiler: Digest compiler.
            dispatcher: Delivery dispatcher.
            config: Digest engine configuration.
            clock: Returns the current time; called once per tick.
        """
        self.directory = directory
        self.compiler = compiler
        self.dispatcher = dispatcher
        self.config = config
        self._clock = clock

        self.state = SchedulerState.IDLE
        self.last_tick_at: datetime | None = None
        self.last_report: CycleReport | None = None

        self._stop_event = asyncio.Event()
        self._cycle_lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None

    @property
    def stop_requested(self) -> bool:
        """True once ``stop()`` has been called."""
        return self._stop_event.is_set()

    @property
    def is_running(self) -> bool:
        """True while the background loop task is alive."""
        return self._task is not None and not self._task.done()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[None]:
        """Start the tick loop as a background task.

        Must be called from a running event loop. Calling it again while the
        loop is alive returns the existing task.
        """
        if self._task is not None and not self._task.done():
            return self._task
        self._stop_event.clear()
        self.state = SchedulerState.IDLE
        self._task = asyncio.create_task(self.run(), name="digest-cycle-scheduler")
        return self._task

    async def stop(self, timeout: float | None = None) -> None:
        """Request termination and wait for in-flight team processing.

        Args:
            timeout: Seconds to wait before cancelling the loop outright.
        """
        self._stop_event.set()
        if self._task is None:
            self.state = SchedulerState.TERMINATED
            return
        if self._task.done():
            logger.info(
                "digest_scheduler_already_stopped",
                crashed=not self._task.cancelled()
                and self._task.exception() is not None,
            )
            return

        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout)
        except TimeoutError:
            logger.warning("digest_scheduler_stop_timeout", timeout_s=timeout)
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task

    async def run(self) -> None:
        """Tick loop. Returns after ``stop()``; re-raises scheduler-fatal errors."""
        logger.info(
            "digest_scheduler_started",
            tick_interval_s=self.config.tick_interval.total_seconds(),
        )
        try:
            while not self.stop_requested:
                now = self._clock()
                await self.run_tick(now)
                if self.stop_requested:
                    break
                await self._sleep_until_next_tick()
        except Exception:
            logger.exception("digest_scheduler_crashed")
            raise
        finally:
            self.state = SchedulerState.TERMINATED
            logger.info("digest_scheduler_stopped")

    async def _sleep_until_next_tick(self) -> None:
        """Sleep one tick interval, waking early on stop."""
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(
                self._stop_event.wait(),
                timeout=self.config.tick_interval.total_seconds(),
            )

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    async def run_tick(self, now: datetime) -> CycleReport:
        """Run every cadence due at ``now``.

        Args:
            now: Tick timestamp, shared by all due-date and window decisions.

        Returns:
            Report of the tick.
        """
        report = CycleReport(tick_at=now)
        cadences = due_cadences(now)
        logger.info(
            "digest_tick",
            tick_at=now.isoformat(),
            due=[c.value for c in cadences],
        )

        async with self._cycle_lock:
            self.state = SchedulerState.RUNNING
            try:
                for cadence in cadences:
                    if self.stop_requested:
                        break
                    report.cadences.append(cadence)
                    await self._run_cadence(cadence, now, report)
            finally:
                self.state = SchedulerState.IDLE

        self._finish(report)
        return report

    async def run_cadence(self, cadence: DigestFrequency, now: datetime) -> CycleReport:
        """Run one cadence regardless of whether it is due.

        Used to back-fill a tick missed while the service was down.
        """
        report = CycleReport(tick_at=now, cadences=[cadence])
        async with self._cycle_lock:
            self.state = SchedulerState.RUNNING
            try:
                await self._run_cadence(cadence, now, report)
            finally:
                self.state = SchedulerState.IDLE

        self._finish(report)
        return report

    def _finish(self, report: CycleReport) -> None:
        self.last_tick_at = report.tick_at
        self.last_report = report
        logger.info(
            "digest_tick_completed",
            tick_at=report.tick_at.isoformat(),
            cadences=[c.value for c in report.cadences],
            **report.summary(),
        )

    async def _run_cadence(
        self,
        cadence: DigestFrequency,
        now: datetime,
        report: CycleReport,
    ) -> None:
        """One cadence cycle. Failures end here and never reach the other cadence."""
        window = compute_window(cadence, now, self.config)
        log = logger.bind(
            cadence=cadence.value,
            from_date=window.from_date.isoformat(),
            to_date=window.to_date.isoformat(),
        )

        try:
            snapshot = await self.directory.list_groups(cadence)
        except (CollaboratorError, OSError) as e:
            log.error("digest_directory_failed", error=str(e))
            return
        except Exception:
            log.exception("digest_directory_crashed")
            return

        groups = [g for g in snapshot if g.frequency == cadence]
        log.info("digest_cycle_started", group_count=len(groups))
        started = time.monotonic()

        semaphore = asyncio.Semaphore(self.config.max_concurrent_deliveries)
        abandoned: list[FatalFailure] = []

        async def guarded(group: TeamPreference) -> GroupResult | None:
            async with semaphore:
                if self.stop_requested:
                    return None
                if abandoned:
                    return FatalFailure(
                        group_id=group.team_id,
                        reason=f"abandoned: {abandoned[0].reason}",
                    )
                result = await self._process_group(group, cadence, window)
                if isinstance(result, FatalFailure):
                    abandoned.append(result)
                return result

        results = await asyncio.gather(*(guarded(g) for g in groups))

        for result in results:
            if result is None:
                report.interrupted += 1
            elif isinstance(result, Ok):
                report.outcomes.append(result.outcome)
            else:
                report.outcomes.append(
                    CycleOutcome(
                        group_id=result.group_id,
                        cadence=cadence,
                        status=OutcomeStatus.FAILED,
                        reason=result.reason,
                    )
                )

        if abandoned:
            log.error("digest_cycle_abandoned", reason=abandoned[0].reason)
        log.info(
            "digest_cycle_completed",
            group_count=len(groups),
            interrupted=sum(1 for r in results if r is None),
            duration_s=round(time.monotonic() - started, 3),
        )

    async def _process_group(
        self,
        group: TeamPreference,
        cadence: DigestFrequency,
        window: NotificationWindow,
    ) -> GroupResult:
        """Compile and dispatch for one team, converting failures into results."""
        log = logger.bind(
            cadence=cadence.value,
            team_id=group.team_id,
            from_date=window.from_date.isoformat(),
            to_date=window.to_date.isoformat(),
        )

        try:
            payload = await self.compiler.compile(group, window, cadence)
            delivery = await self.dispatcher.dispatch(payload)
        except ConfigurationError as e:
            log.warning("digest_group_misconfigured", error=str(e))
            return TransientFailure(
                group_id=group.team_id, reason=f"invalid_configuration: {e}"
            )
        except (CollaboratorError, OSError) as e:
            log.warning(
                "digest_group_failed", error=str(e), error_type=type(e).__name__
            )
            return TransientFailure(group_id=group.team_id, reason=str(e))
        except Exception as e:
            log.exception("digest_group_crashed", error_type=type(e).__name__)
            return TransientFailure(
                group_id=group.team_id, reason=f"{type(e).__name__}: {e}"
            )

        if delivery.status == OutcomeStatus.FAILED:
            reason = delivery.error or "Unknown error"
            if delivery.fatal:
                log.error("digest_delivery_fatal", error=reason)
                return FatalFailure(group_id=group.team_id, reason=reason)
            log.warning("digest_delivery_failed", error=reason)
            return TransientFailure(group_id=group.team_id, reason=reason)

        if delivery.status == OutcomeStatus.DELIVERED:
            log.info(
                "digest_delivered",
                idea_count=len(payload.items),
                message_ts=delivery.message_ts,
            )

        return Ok(
            CycleOutcome(group_id=group.team_id, cadence=cadence, status=delivery.status)
        )
