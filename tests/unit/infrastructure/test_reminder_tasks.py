from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date, timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy import select

from src.application.notifications.types import NotificationType
from src.domain.value_objects.role import Role
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.cattle import CattleORM
from src.infrastructure.db.orm.device_token import DeviceTokenORM
from src.infrastructure.db.orm.notification import NotificationORM
from src.infrastructure.db.orm.organization import OrganizationORM
from src.infrastructure.db.orm.pregnancy_record import PregnancyRecordORM
from src.infrastructure.db.orm.semination_record import SeminationRecordORM
from src.infrastructure.db.orm.user import UserORM
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.scheduler import reminder_tasks
from src.infrastructure.scheduler.reminder_tasks import (
    check_due_separations,
    check_pending_pregnancy_checks,
    check_upcoming_deliveries,
)

TODAY = date(2024, 10, 20)


class RecordingPushSender:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[dict] = []

    async def send_to_tokens(self, tokens, title, body, data=None):
        self.calls.append({"tokens": list(tokens), "title": title, "body": body})
        if self.fail:
            raise RuntimeError("push backend unavailable")
        return []


@pytest.fixture()
async def session_factory(tmp_path) -> AsyncIterator:
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'reminders.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture()
async def farm(session_factory) -> dict[str, UUID]:
    org_id = uuid4()
    herder_id = uuid4()
    async with session_factory() as session:
        session.add(OrganizationORM(id=org_id, name="Green Valley"))
        await session.flush()
        session.add(
            UserORM(
                id=herder_id,
                organization_id=org_id,
                username="herder",
                email="herder@example.com",
                hashed_password="x",
                role=Role.USER,
                is_active=True,
            )
        )
        session.add(
            DeviceTokenORM(
                id=uuid4(),
                organization_id=org_id,
                user_id=herder_id,
                platform="android",
                token="device-token-0001",
                disabled=False,
            )
        )
        await session.commit()
    return {"org_id": org_id, "herder_id": herder_id}


async def add_cow(session_factory, farm, *, tag: str, status: str = "ACTIVE") -> UUID:
    cow_id = uuid4()
    async with session_factory() as session:
        session.add(
            CattleORM(
                id=cow_id,
                organization_id=farm["org_id"],
                tag_number=tag,
                name=f"Cow {tag}",
                breed="Holstein",
                gender="FEMALE",
                date_of_birth=date(2020, 1, 1),
                status=status,
                assigned_user_id=farm["herder_id"],
                version=1,
            )
        )
        await session.commit()
    return cow_id


async def add_semination(session_factory, farm, cow_id: UUID, seminated_on: date) -> UUID:
    record_id = uuid4()
    async with session_factory() as session:
        session.add(
            SeminationRecordORM(
                id=record_id,
                organization_id=farm["org_id"],
                cattle_id=cow_id,
                semination_date=seminated_on,
                check_date=seminated_on + timedelta(days=15),
                created_by_id=farm["herder_id"],
            )
        )
        await session.commit()
    return record_id


async def add_pregnancy(
    session_factory,
    farm,
    cow_id: UUID,
    *,
    status: str,
    expected: date,
    delivered_on: date | None = None,
) -> UUID:
    seminated_on = expected - timedelta(days=275)
    semination_id = await add_semination(session_factory, farm, cow_id, seminated_on)
    record_id = uuid4()
    async with session_factory() as session:
        session.add(
            PregnancyRecordORM(
                id=record_id,
                organization_id=farm["org_id"],
                cattle_id=cow_id,
                semination_record_id=semination_id,
                expected_delivery_date=expected,
                actual_delivery_date=delivered_on,
                status=status,
                created_by_id=farm["herder_id"],
            )
        )
        await session.commit()
    return record_id


async def stored_notifications(session_factory) -> list[NotificationORM]:
    async with session_factory() as session:
        result = await session.execute(select(NotificationORM))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_pregnancy_check_sweep_reminds_once_per_day(session_factory, farm):
    cow_id = await add_cow(session_factory, farm, tag="C-1")
    await add_semination(session_factory, farm, cow_id, TODAY - timedelta(days=16))
    push = RecordingPushSender()

    assert await check_pending_pregnancy_checks(session_factory, today=TODAY, push_sender=push) == 1
    assert await check_pending_pregnancy_checks(session_factory, today=TODAY, push_sender=push) == 0
    next_day = TODAY + timedelta(days=1)
    assert (
        await check_pending_pregnancy_checks(session_factory, today=next_day, push_sender=push)
        == 1
    )

    notifications = await stored_notifications(session_factory)
    assert len(notifications) == 2
    assert {n.type for n in notifications} == {NotificationType.PREGNANCY_CHECK_DUE}
    assert all(n.user_id == farm["herder_id"] for n in notifications)
    assert len(push.calls) == 2
    assert push.calls[0]["tokens"] == ["device-token-0001"]


@pytest.mark.asyncio
async def test_pregnancy_check_sweep_skips_future_and_deceased(session_factory, farm):
    future_cow = await add_cow(session_factory, farm, tag="C-2")
    await add_semination(session_factory, farm, future_cow, TODAY - timedelta(days=3))
    dead_cow = await add_cow(session_factory, farm, tag="C-3", status="DECEASED")
    await add_semination(session_factory, farm, dead_cow, TODAY - timedelta(days=30))

    assert await check_pending_pregnancy_checks(session_factory, today=TODAY) == 0
    assert await stored_notifications(session_factory) == []


@pytest.mark.asyncio
async def test_push_failure_keeps_stored_notification(session_factory, farm):
    cow_id = await add_cow(session_factory, farm, tag="C-4")
    await add_semination(session_factory, farm, cow_id, TODAY - timedelta(days=15))
    push = RecordingPushSender(fail=True)

    sent = await check_pending_pregnancy_checks(session_factory, today=TODAY, push_sender=push)

    assert sent == 1
    assert len(push.calls) == 1
    [stored] = await stored_notifications(session_factory)
    assert stored.cattle_id == cow_id
    async with session_factory() as session:
        record = (
            await session.execute(
                select(SeminationRecordORM).where(SeminationRecordORM.cattle_id == cow_id)
            )
        ).scalar_one()
    assert record.last_reminded_on == TODAY


@pytest.mark.asyncio
async def test_separation_sweep_waits_fifteen_days(session_factory, farm):
    ready_cow = await add_cow(session_factory, farm, tag="C-5")
    await add_pregnancy(
        session_factory,
        farm,
        ready_cow,
        status="DELIVERED",
        expected=TODAY - timedelta(days=16),
        delivered_on=TODAY - timedelta(days=15),
    )
    young_cow = await add_cow(session_factory, farm, tag="C-6")
    await add_pregnancy(
        session_factory,
        farm,
        young_cow,
        status="DELIVERED",
        expected=TODAY - timedelta(days=10),
        delivered_on=TODAY - timedelta(days=10),
    )
    done_cow = await add_cow(session_factory, farm, tag="C-7")
    await add_pregnancy(
        session_factory,
        farm,
        done_cow,
        status="SEPARATED",
        expected=TODAY - timedelta(days=60),
        delivered_on=TODAY - timedelta(days=60),
    )

    assert await check_due_separations(session_factory, today=TODAY) == 1
    [stored] = await stored_notifications(session_factory)
    assert stored.type == NotificationType.SEPARATION_REMINDER
    assert stored.cattle_id == ready_cow


@pytest.mark.asyncio
async def test_milestone_sweep_covers_coming_week(session_factory, farm):
    soon_cow = await add_cow(session_factory, farm, tag="C-8")
    await add_pregnancy(
        session_factory, farm, soon_cow, status="IN_PROGRESS", expected=TODAY + timedelta(days=5)
    )
    later_cow = await add_cow(session_factory, farm, tag="C-9")
    await add_pregnancy(
        session_factory, farm, later_cow, status="IN_PROGRESS", expected=TODAY + timedelta(days=30)
    )

    assert await check_upcoming_deliveries(session_factory, today=TODAY) == 1
    [stored] = await stored_notifications(session_factory)
    assert stored.type == NotificationType.MILESTONE_REMINDER
    assert stored.cattle_id == soon_cow
    assert "5 day(s)" in stored.message


@pytest.mark.asyncio
async def test_failing_item_does_not_stop_the_sweep(session_factory, farm, monkeypatch):
    broken_cow = await add_cow(session_factory, farm, tag="C-10")
    broken_record = await add_semination(
        session_factory, farm, broken_cow, TODAY - timedelta(days=30)
    )
    healthy_cow = await add_cow(session_factory, farm, tag="C-11")
    healthy_record = await add_semination(
        session_factory, farm, healthy_cow, TODAY - timedelta(days=20)
    )
    original_build = reminder_tasks.build_notification

    def build_or_fail(ntype, **params):
        if params.get("cattle_tag") == "C-10":
            raise RuntimeError("template rendering failed")
        return original_build(ntype, **params)

    monkeypatch.setattr(reminder_tasks, "build_notification", build_or_fail)
    push = RecordingPushSender()

    sent = await check_pending_pregnancy_checks(session_factory, today=TODAY, push_sender=push)

    assert sent == 1
    [stored] = await stored_notifications(session_factory)
    assert stored.cattle_id == healthy_cow
    assert len(push.calls) == 1
    async with session_factory() as session:
        stamps = dict(
            (
                await session.execute(
                    select(SeminationRecordORM.id, SeminationRecordORM.last_reminded_on)
                )
            ).all()
        )
    assert stamps[healthy_record] == TODAY
    assert stamps[broken_record] is None
