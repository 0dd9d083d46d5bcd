from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.application.access import Actor
from src.application.errors import (
    InvalidState,
    NotFound,
    PermissionDenied,
    TooEarly,
    ValidationError,
)
from src.application.events.models import LifecycleNotificationEvent
from src.application.use_cases.breeding import (
    check_pregnancy,
    mark_separation,
    record_delivery,
    record_semination,
)
from src.domain.models.cattle import Cattle
from src.domain.models.pregnancy_record import PregnancyRecord, PregnancyStatus
from src.domain.models.semination_record import SeminationRecord
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.role import Role


class StubCattleRepo:
    def __init__(self, *cattle: Cattle) -> None:
        self.rows = {c.id: c for c in cattle}
        self.added: list[Cattle] = []
        self.status_updates: list[tuple] = []
        self.locked: list = []

    async def get(self, organization_id, cattle_id, *, for_update=False):
        if for_update:
            self.locked.append(cattle_id)
        cow = self.rows.get(cattle_id)
        return cow if cow and cow.organization_id == organization_id else None

    async def add(self, cattle: Cattle) -> Cattle:
        self.added.append(cattle)
        self.rows[cattle.id] = cattle
        return cattle

    async def update_status(self, cattle_id, status):
        self.status_updates.append((cattle_id, status))


class StubSeminationRepo:
    def __init__(self, *records: SeminationRecord, outcome_applies: bool = True) -> None:
        self.rows = {r.id: r for r in records}
        self.outcome_applies = outcome_applies
        self.added: list[SeminationRecord] = []
        self.outcomes: list[SeminationRecord] = []

    async def get(self, organization_id, record_id, *, for_update=False):
        return self.rows.get(record_id)

    async def has_unresolved(self, organization_id, cattle_id):
        return any(r.cattle_id == cattle_id and r.is_pregnant is None for r in self.rows.values())

    async def add(self, record):
        self.added.append(record)
        self.rows[record.id] = record
        return record

    async def record_outcome(self, record):
        if self.outcome_applies:
            self.outcomes.append(record)
        return self.outcome_applies


class StubPregnancyRepo:
    def __init__(self, *records: PregnancyRecord, transition_applies: bool = True) -> None:
        self.rows = {r.id: r for r in records}
        self.transition_applies = transition_applies
        self.added: list[PregnancyRecord] = []
        self.transitions: list[tuple] = []

    async def get(self, organization_id, record_id, *, for_update=False):
        return self.rows.get(record_id)

    async def has_in_progress(self, organization_id, cattle_id):
        return any(
            r.cattle_id == cattle_id and r.status == PregnancyStatus.IN_PROGRESS.value
            for r in self.rows.values()
        )

    async def add(self, record):
        self.added.append(record)
        return record

    async def transition(self, record, expected_status):
        if not self.transition_applies:
            return False
        self.transitions.append((record, expected_status))
        return True


def make_uow(cattle_repo, semination_repo=None, pregnancy_repo=None):
    commits: list[bool] = []
    events: list = []

    async def commit():
        commits.append(True)

    async def rollback():
        return None

    def add_event(event):
        events.append(event)

    def drain_events():
        nonlocal events
        evts, events = events, []
        return evts

    return SimpleNamespace(
        cattle=cattle_repo,
        semination_records=semination_repo or StubSeminationRepo(),
        pregnancy_records=pregnancy_repo or StubPregnancyRepo(),
        commit=commit,
        rollback=rollback,
        add_event=add_event,
        drain_events=drain_events,
        commits=commits,
        events=events,
    )


@pytest.fixture()
def org_id():
    return uuid4()


@pytest.fixture()
def herder(org_id) -> Actor:
    return Actor(user_id=uuid4(), organization_id=org_id, role=Role.USER)


@pytest.fixture()
def cow(org_id, herder) -> Cattle:
    return Cattle.create(
        organization_id=org_id,
        tag_number="C-001",
        name="Daisy",
        breed="Jersey",
        gender="FEMALE",
        date_of_birth=date(2021, 4, 2),
        assigned_user_id=herder.user_id,
    )


@pytest.mark.asyncio
async def test_record_semination_by_assigned_user(herder, cow):
    uow = make_uow(StubCattleRepo(cow))
    record = await record_semination.execute(
        uow,
        herder,
        record_semination.RecordSeminationInput(cattle_id=cow.id, semination_date=date(2024, 1, 1)),
    )
    assert record.check_date == date(2024, 1, 16)
    assert uow.semination_records.added == [record]
    assert uow.commits == [True]


@pytest.mark.asyncio
async def test_record_semination_denies_unassigned_user(org_id, cow):
    stranger = Actor(user_id=uuid4(), organization_id=org_id, role=Role.USER)
    uow = make_uow(StubCattleRepo(cow))
    with pytest.raises(PermissionDenied):
        await record_semination.execute(
            uow,
            stranger,
            record_semination.RecordSeminationInput(
                cattle_id=cow.id, semination_date=date(2024, 1, 1)
            ),
        )
    assert uow.semination_records.added == []
    assert uow.commits == []


@pytest.mark.asyncio
async def test_record_semination_hides_other_organization(cow):
    outsider = Actor(user_id=uuid4(), organization_id=uuid4(), role=Role.ADMIN)
    uow = make_uow(StubCattleRepo(cow))
    with pytest.raises(NotFound):
        await record_semination.execute(
            uow,
            outsider,
            record_semination.RecordSeminationInput(
                cattle_id=cow.id, semination_date=date(2024, 1, 1)
            ),
        )


@pytest.mark.asyncio
async def test_record_semination_rejects_open_thread(org_id, herder, cow):
    pending = SeminationRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_date=date(2024, 1, 1),
        created_by_id=herder.user_id,
    )
    uow = make_uow(StubCattleRepo(cow), StubSeminationRepo(pending))
    with pytest.raises(InvalidState):
        await record_semination.execute(
            uow,
            herder,
            record_semination.RecordSeminationInput(
                cattle_id=cow.id, semination_date=date(2024, 2, 1)
            ),
        )
    assert uow.commits == []


@pytest.mark.asyncio
async def test_positive_check_writes_pregnancy_and_queues_notification(org_id, herder, cow):
    record = SeminationRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_date=date(2024, 1, 1),
        created_by_id=herder.user_id,
    )
    uow = make_uow(StubCattleRepo(cow), StubSeminationRepo(record))
    result = await check_pregnancy.execute(
        uow,
        herder,
        check_pregnancy.CheckPregnancyInput(semination_record_id=record.id, is_pregnant=True),
        now=datetime(2024, 1, 16, 8, tzinfo=timezone.utc),
    )

    assert result.semination_record.is_pregnant is True
    assert result.pregnancy_record.expected_delivery_date == date(2024, 10, 1)
    assert uow.pregnancy_records.added == [result.pregnancy_record]
    assert uow.cattle.status_updates == [(cow.id, CattleStatus.PREGNANT.value)]
    [event] = uow.drain_events()
    assert isinstance(event, LifecycleNotificationEvent)
    assert event.notification.user_id == herder.user_id
    assert uow.commits == [True]


@pytest.mark.asyncio
async def test_check_lost_race_writes_nothing_else(org_id, herder, cow):
    record = SeminationRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_date=date(2024, 1, 1),
        created_by_id=herder.user_id,
    )
    uow = make_uow(StubCattleRepo(cow), StubSeminationRepo(record, outcome_applies=False))
    with pytest.raises(InvalidState):
        await check_pregnancy.execute(
            uow,
            herder,
            check_pregnancy.CheckPregnancyInput(semination_record_id=record.id, is_pregnant=True),
        )
    assert uow.pregnancy_records.added == []
    assert uow.cattle.status_updates == []
    assert uow.commits == []


@pytest.mark.asyncio
async def test_check_unknown_record(herder, cow):
    uow = make_uow(StubCattleRepo(cow))
    with pytest.raises(NotFound):
        await check_pregnancy.execute(
            uow,
            herder,
            check_pregnancy.CheckPregnancyInput(semination_record_id=uuid4(), is_pregnant=False),
        )


@pytest.mark.asyncio
async def test_record_delivery_adds_calf_before_transition(org_id, herder, cow):
    pregnant_cow = replace(cow, status=CattleStatus.PREGNANT.value)
    pregnancy = PregnancyRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_record_id=uuid4(),
        semination_date=date(2024, 1, 1),
        created_by_id=herder.user_id,
    )
    uow = make_uow(StubCattleRepo(pregnant_cow), pregnancy_repo=StubPregnancyRepo(pregnancy))
    result = await record_delivery.execute(
        uow,
        herder,
        record_delivery.RecordDeliveryInput(
            pregnancy_record_id=pregnancy.id,
            actual_delivery_date=date(2024, 10, 3),
            calf_tag_number="C-100",
            calf_name="Sprout",
            calf_gender="MALE",
            calf_breed="Jersey",
        ),
    )

    assert uow.cattle.added == [result.calf]
    assert result.calf.parent_id == cow.id
    [(written, expected)] = uow.pregnancy_records.transitions
    assert expected == PregnancyStatus.IN_PROGRESS.value
    assert written.calf_id == result.calf.id
    assert result.pregnancy_record.status == PregnancyStatus.DELIVERED.value
    assert uow.cattle.status_updates == [(cow.id, CattleStatus.ACTIVE.value)]


@pytest.mark.asyncio
async def test_mark_separation_too_early_leaves_record_untouched(org_id, herder, cow):
    pregnancy = replace(
        PregnancyRecord.create(
            organization_id=org_id,
            cattle_id=cow.id,
            semination_record_id=uuid4(),
            semination_date=date(2024, 1, 1),
            created_by_id=herder.user_id,
        ),
        status=PregnancyStatus.DELIVERED.value,
        actual_delivery_date=date(2024, 10, 3),
    )
    uow = make_uow(StubCattleRepo(cow), pregnancy_repo=StubPregnancyRepo(pregnancy))
    with pytest.raises(TooEarly) as excinfo:
        await mark_separation.execute(
            uow,
            herder,
            mark_separation.MarkSeparationInput(pregnancy_record_id=pregnancy.id),
            today=date(2024, 10, 10),
        )
    assert excinfo.value.eligible_date == date(2024, 10, 18)
    assert uow.pregnancy_records.transitions == []
    assert uow.commits == []


@pytest.mark.asyncio
async def test_record_semination_locks_dam_before_thread_check(herder, cow):
    uow = make_uow(StubCattleRepo(cow))
    payload = record_semination.RecordSeminationInput(
        cattle_id=cow.id, semination_date=date(2024, 1, 1)
    )
    await record_semination.execute(uow, herder, payload)
    assert uow.cattle.locked == [cow.id]

    # The second request sees the first one's record once it holds the lock
    with pytest.raises(InvalidState):
        await record_semination.execute(uow, herder, payload)
    assert len(uow.semination_records.added) == 1
    assert uow.commits == [True]


def in_progress_pregnancy(org_id, herder, cow, semination: SeminationRecord) -> PregnancyRecord:
    return PregnancyRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_record_id=semination.id,
        semination_date=semination.semination_date,
        created_by_id=herder.user_id,
    )


def checked_semination(org_id, herder, cow) -> SeminationRecord:
    return replace(
        SeminationRecord.create(
            organization_id=org_id,
            cattle_id=cow.id,
            semination_date=date(2024, 1, 1),
            created_by_id=herder.user_id,
        ),
        is_pregnant=True,
    )


def delivery_input(pregnancy: PregnancyRecord, on: date) -> record_delivery.RecordDeliveryInput:
    return record_delivery.RecordDeliveryInput(
        pregnancy_record_id=pregnancy.id,
        actual_delivery_date=on,
        calf_tag_number="C-100",
        calf_name="Sprout",
        calf_gender="FEMALE",
        calf_breed="Jersey",
    )


def assert_nothing_written(uow) -> None:
    assert uow.cattle.added == []
    assert uow.cattle.status_updates == []
    assert uow.pregnancy_records.transitions == []
    assert uow.drain_events() == []
    assert uow.commits == []


@pytest.mark.asyncio
async def test_record_delivery_on_delivered_record_writes_nothing(org_id, herder, cow):
    semination = checked_semination(org_id, herder, cow)
    pregnancy = replace(
        in_progress_pregnancy(org_id, herder, cow, semination),
        status=PregnancyStatus.DELIVERED.value,
        actual_delivery_date=date(2024, 10, 1),
    )
    uow = make_uow(
        StubCattleRepo(cow), StubSeminationRepo(semination), StubPregnancyRepo(pregnancy)
    )
    with pytest.raises(InvalidState):
        await record_delivery.execute(
            uow, herder, delivery_input(pregnancy, date(2024, 10, 3)), today=date(2024, 10, 5)
        )
    assert_nothing_written(uow)


@pytest.mark.asyncio
async def test_record_delivery_lost_race_stops_before_status_changes(org_id, herder, cow):
    pregnant_cow = replace(cow, status=CattleStatus.PREGNANT.value)
    semination = checked_semination(org_id, herder, cow)
    pregnancy = in_progress_pregnancy(org_id, herder, cow, semination)
    uow = make_uow(
        StubCattleRepo(pregnant_cow),
        StubSeminationRepo(semination),
        StubPregnancyRepo(pregnancy, transition_applies=False),
    )
    with pytest.raises(InvalidState):
        await record_delivery.execute(
            uow, herder, delivery_input(pregnancy, date(2024, 10, 3)), today=date(2024, 10, 5)
        )
    # The calf insert is discarded with the uncommitted transaction
    assert len(uow.cattle.added) == 1
    assert uow.cattle.status_updates == []
    assert uow.pregnancy_records.transitions == []
    assert uow.drain_events() == []
    assert uow.commits == []


@pytest.mark.asyncio
async def test_record_delivery_for_deceased_dam_is_rejected(org_id, herder, cow):
    dead_cow = replace(cow, status=CattleStatus.DECEASED.value)
    semination = checked_semination(org_id, herder, cow)
    pregnancy = in_progress_pregnancy(org_id, herder, cow, semination)
    uow = make_uow(
        StubCattleRepo(dead_cow), StubSeminationRepo(semination), StubPregnancyRepo(pregnancy)
    )
    with pytest.raises(InvalidState):
        await record_delivery.execute(
            uow, herder, delivery_input(pregnancy, date(2024, 10, 3)), today=date(2024, 10, 5)
        )
    assert_nothing_written(uow)


@pytest.mark.asyncio
@pytest.mark.parametrize("delivered_on", [date(2023, 12, 31), date(2024, 10, 6)])
async def test_record_delivery_rejects_impossible_dates(org_id, herder, cow, delivered_on):
    semination = checked_semination(org_id, herder, cow)
    pregnancy = in_progress_pregnancy(org_id, herder, cow, semination)
    uow = make_uow(
        StubCattleRepo(cow), StubSeminationRepo(semination), StubPregnancyRepo(pregnancy)
    )
    with pytest.raises(ValidationError):
        await record_delivery.execute(
            uow, herder, delivery_input(pregnancy, delivered_on), today=date(2024, 10, 5)
        )
    assert_nothing_written(uow)


@pytest.mark.asyncio
async def test_check_pregnancy_for_deceased_cow_is_rejected(org_id, herder, cow):
    dead_cow = replace(cow, status=CattleStatus.DECEASED.value)
    record = SeminationRecord.create(
        organization_id=org_id,
        cattle_id=cow.id,
        semination_date=date(2024, 1, 1),
        created_by_id=herder.user_id,
    )
    uow = make_uow(StubCattleRepo(dead_cow), StubSeminationRepo(record))
    with pytest.raises(InvalidState):
        await check_pregnancy.execute(
            uow,
            herder,
            check_pregnancy.CheckPregnancyInput(semination_record_id=record.id, is_pregnant=True),
        )
    assert uow.semination_records.outcomes == []
    assert uow.pregnancy_records.added == []
    assert_nothing_written(uow)
