from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.config.settings import Settings
from src.infrastructure.scheduler.reminder_tasks import (
    check_due_separations,
    check_pending_pregnancy_checks,
    check_upcoming_deliveries,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderJob:
    name: str
    sweep: Callable[..., Awaitable[int]]
    hour: int
    # None runs every day
    weekday: int | None = None

    def next_run(self, now: datetime) -> datetime:
        """First run strictly after ``now`` (UTC)."""
        candidate = now.replace(hour=self.hour, minute=0, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(days=1)
        if self.weekday is not None:
            candidate += timedelta(days=(self.weekday - candidate.weekday()) % 7)
        return candidate


def build_jobs(settings: Settings) -> list[ReminderJob]:
    return [
        ReminderJob(
            "pregnancy-check-reminders",
            check_pending_pregnancy_checks,
            hour=settings.pregnancy_check_reminder_hour,
        ),
        ReminderJob(
            "separation-reminders",
            check_due_separations,
            hour=settings.separation_reminder_hour,
        ),
        ReminderJob(
            "delivery-milestone-reminders",
            check_upcoming_deliveries,
            hour=settings.milestone_reminder_hour,
            weekday=settings.milestone_reminder_weekday,
        ),
    ]


class ReminderScheduler:
    """Runs each reminder sweep as its own asyncio task, sleeping until the next UTC slot."""

    def __init__(self, session_factory, push_sender, settings: Settings) -> None:
        self._session_factory = session_factory
        self._push_sender = push_sender
        self.jobs = build_jobs(settings)
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._run_forever(job), name=job.name) for job in self.jobs
        ]
        logger.info("Reminder scheduler started with %d jobs", len(self._tasks))

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Reminder scheduler stopped")

    async def run_job(self, job: ReminderJob) -> None:
        try:
            await job.sweep(self._session_factory, push_sender=self._push_sender)
        except Exception as exc:
            logger.error("Reminder job %s failed: %s", job.name, exc, exc_info=True)

    async def _run_forever(self, job: ReminderJob) -> None:
        while True:
            now = datetime.now(timezone.utc)
            next_run = job.next_run(now)
            logger.debug("Reminder job %s scheduled for %s", job.name, next_run.isoformat())
            await asyncio.sleep((next_run - now).total_seconds())
            await self.run_job(job)
