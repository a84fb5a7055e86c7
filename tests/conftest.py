"""Pytest configuration for test isolation.

Every test gets its own SQLite file under ``tmp_path``: ``DATABASE_URL`` is
pointed there, settings are reloaded and the cached engine is dropped so no
state leaks between tests. Ledger fixtures build records directly and never
touch the database.
"""

from __future__ import annotations

import os
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from config import reload_settings
from db_engine import init_db, reset_engine
from services.ledger import LedgerRecord


@pytest.fixture(autouse=True)
def _isolate_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_file = tmp_path / "ledger.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{os.fspath(db_file)}")
    reset_engine()
    reload_settings()
    yield
    reset_engine()


@pytest.fixture
def db():
    """Create the schema in the per-test database."""
    init_db()


def make_record(record_id: str, amount: str, type_: str, category: str, on: date,
                text: str = "entry") -> LedgerRecord:
    return LedgerRecord(
        id=record_id,
        text=text,
        amount=Decimal(amount),
        type=type_,
        category=category,
        date=on,
    )


@pytest.fixture
def scenario_records() -> list[LedgerRecord]:
    """Two January records and one February record."""
    return [
        make_record("a", "-20", "expense", "Food", date(2024, 1, 5), text="Groceries"),
        make_record("b", "100", "income", "Salary", date(2024, 1, 10), text="Paycheck"),
        make_record("c", "-5", "expense", "Food", date(2024, 2, 1), text="Coffee"),
    ]
