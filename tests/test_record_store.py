from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from repositories import TransactionRepository, UserRepository
from services.errors import StoreError
from services.record_store import SqlRecordStore
from services.validator import NormalizedCommand


def command(text="Lunch", amount="-12.50", type_="expense", category="Food", on=date(2024, 1, 5)):
    return NormalizedCommand(text=text, amount=Decimal(amount), type=type_, category=category, date=on)


@pytest.fixture
def user_id(db) -> int:
    return UserRepository.add(email="owner@example.com", password_hash="x").id


@pytest.fixture
def other_user_id(db) -> int:
    return UserRepository.add(email="other@example.com", password_hash="x").id


def test_subscribe_pushes_current_snapshot_immediately(user_id):
    store = SqlRecordStore()
    store.create(user_id, command())
    received = []

    store.subscribe(user_id, received.append)

    assert len(received) == 1
    assert [r.text for r in received[0]] == ["Lunch"]


def test_create_assigns_id_and_pushes_full_snapshot(user_id):
    store = SqlRecordStore()
    received = []
    store.subscribe(user_id, received.append)

    first_id = store.create(user_id, command())
    second_id = store.create(user_id, command(text="Salary", amount="2500", type_="income", category="Salary"))

    assert first_id != second_id
    latest = received[-1]
    assert [r.id for r in latest] == [first_id, second_id]
    assert latest[0].amount == Decimal("-12.50")
    assert latest[1].amount == Decimal("2500.00")
    assert latest[1].type == "income"


def test_amounts_are_persisted_as_cents(user_id):
    store = SqlRecordStore()
    record_id = store.create(user_id, command(amount="-0.10"))

    row = TransactionRepository.get_by_id(int(record_id))

    assert row.amount_cents == -10


def test_update_replaces_every_field(user_id):
    store = SqlRecordStore()
    received = []
    record_id = store.create(user_id, command())
    store.subscribe(user_id, received.append)

    store.update(user_id, record_id, command(text="Bonus", amount="300", type_="income",
                                             category="Investment", on=date(2024, 2, 1)))

    [record] = received[-1]
    assert record.id == record_id
    assert (record.text, record.amount, record.type, record.category, record.date) == (
        "Bonus", Decimal("300.00"), "income", "Investment", date(2024, 2, 1)
    )


def test_delete_removes_record_from_next_snapshot(user_id):
    store = SqlRecordStore()
    received = []
    keep = store.create(user_id, command(text="Keep"))
    drop = store.create(user_id, command(text="Drop"))
    store.subscribe(user_id, received.append)

    store.delete(user_id, drop)

    assert [r.id for r in received[-1]] == [keep]


def test_snapshots_are_scoped_per_user(user_id, other_user_id):
    store = SqlRecordStore()
    mine, theirs = [], []
    store.subscribe(user_id, mine.append)
    store.subscribe(other_user_id, theirs.append)

    store.create(user_id, command())

    assert len(mine) == 2
    assert theirs == [[]]


def test_cannot_touch_another_users_record(user_id, other_user_id):
    store = SqlRecordStore()
    record_id = store.create(user_id, command())

    with pytest.raises(StoreError):
        store.update(other_user_id, record_id, command(text="Hijack"))
    with pytest.raises(StoreError):
        store.delete(other_user_id, record_id)

    assert [r.text for r in store.load_snapshot(user_id)] == ["Lunch"]


@pytest.mark.parametrize("record_id", ["999", "not-a-number"])
def test_unknown_ids_raise_store_error(user_id, record_id):
    store = SqlRecordStore()

    with pytest.raises(StoreError):
        store.update(user_id, record_id, command())
    with pytest.raises(StoreError):
        store.delete(user_id, record_id)


def test_unsubscribe_stops_notifications(user_id):
    store = SqlRecordStore()
    received = []
    unsubscribe = store.subscribe(user_id, received.append)

    unsubscribe()
    unsubscribe()
    store.create(user_id, command())

    assert len(received) == 1
    assert store.subscriber_count(user_id) == 0


def test_database_failure_becomes_store_error(user_id, monkeypatch):
    def _fail(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(TransactionRepository, "add", staticmethod(_fail))

    with pytest.raises(StoreError):
        SqlRecordStore().create(user_id, command())


def test_amount_too_large_for_the_column_becomes_store_error(user_id):
    store = SqlRecordStore()
    record_id = store.create(user_id, command())

    with pytest.raises(StoreError):
        store.create(user_id, command(amount="-100000000000000000"))
    with pytest.raises(StoreError):
        store.update(user_id, record_id, command(amount="-100000000000000000"))

    assert [r.amount for r in store.load_snapshot(user_id)] == [Decimal("-12.50")]
