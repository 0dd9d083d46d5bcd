from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.config.settings import Settings
from src.infrastructure.scheduler.runner import ReminderJob, ReminderScheduler, build_jobs


async def noop_sweep(session_factory, **kwargs) -> int:
    return 0


def at(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_daily_job_runs_later_the_same_day():
    job = ReminderJob("daily", noop_sweep, hour=10)
    assert job.next_run(at(2024, 10, 14, 6, 30)) == at(2024, 10, 14, 10)


def test_daily_job_rolls_over_after_its_hour():
    job = ReminderJob("daily", noop_sweep, hour=10)
    assert job.next_run(at(2024, 10, 14, 10)) == at(2024, 10, 15, 10)
    assert job.next_run(at(2024, 12, 31, 23, 59)) == at(2025, 1, 1, 10)


def test_weekly_job_waits_for_its_weekday():
    # 2024-10-16 is a Wednesday
    job = ReminderJob("weekly", noop_sweep, hour=8, weekday=0)
    assert job.next_run(at(2024, 10, 16, 12)) == at(2024, 10, 21, 8)
    # Monday before the slot
    assert job.next_run(at(2024, 10, 21, 7)) == at(2024, 10, 21, 8)
    # Monday after the slot
    assert job.next_run(at(2024, 10, 21, 9)) == at(2024, 10, 28, 8)


def test_build_jobs_follows_settings():
    settings = Settings.model_validate(
        {
            "database_url": "sqlite+aiosqlite:///unused.db",
            "jwt_secret_key": "test-secret",
            "pregnancy_check_reminder_hour": 6,
            "separation_reminder_hour": 7,
            "milestone_reminder_weekday": 4,
            "milestone_reminder_hour": 5,
        }
    )
    jobs = {job.name: job for job in build_jobs(settings)}
    assert jobs["pregnancy-check-reminders"].hour == 6
    assert jobs["pregnancy-check-reminders"].weekday is None
    assert jobs["separation-reminders"].hour == 7
    assert jobs["delivery-milestone-reminders"].weekday == 4
    assert jobs["delivery-milestone-reminders"].hour == 5


@pytest.mark.asyncio
async def test_failing_sweep_does_not_escape_run_job():
    calls = []

    async def broken_sweep(session_factory, **kwargs) -> int:
        calls.append(kwargs)
        raise RuntimeError("database down")

    settings = Settings.model_validate(
        {"database_url": "sqlite+aiosqlite:///unused.db", "jwt_secret_key": "test-secret"}
    )
    scheduler = ReminderScheduler(session_factory=None, push_sender="push", settings=settings)
    await scheduler.run_job(ReminderJob("broken", broken_sweep, hour=1))
    assert calls == [{"push_sender": "push"}]


@pytest.mark.asyncio
async def test_scheduler_start_and_stop():
    settings = Settings.model_validate(
        {"database_url": "sqlite+aiosqlite:///unused.db", "jwt_secret_key": "test-secret"}
    )
    scheduler = ReminderScheduler(session_factory=None, push_sender=None, settings=settings)
    scheduler.start()
    assert scheduler.running
    await scheduler.stop()
    assert not scheduler.running
