"""Shared fixtures: isolated stores and a transaction factory.

Stores never touch the working directory; the SQLite and JSON backends live
under each test's ``tmp_path``.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest

from wallet.database import make_engine
from wallet.models import Category, PaymentMode, Transaction, TransactionType
from wallet.services.storage_service import (
    InMemoryTransactionStore,
    JsonFileTransactionStore,
    SQLiteTransactionStore,
    TransactionStore,
)

STORAGE_KEY = "fam_wallet_txns_v1"


@pytest.fixture
def memory_store() -> InMemoryTransactionStore:
    return InMemoryTransactionStore(STORAGE_KEY)


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Iterator[SQLiteTransactionStore]:
    engine = make_engine(f"sqlite:///{tmp_path / 'wallet.db'}")
    yield SQLiteTransactionStore(STORAGE_KEY, bind=engine)
    engine.dispose()


@pytest.fixture
def json_store(tmp_path: Path) -> JsonFileTransactionStore:
    return JsonFileTransactionStore(tmp_path / "store" / "transactions.json", key=STORAGE_KEY)


@pytest.fixture(params=["memory", "sqlite", "file"])
def any_store(request: pytest.FixtureRequest) -> TransactionStore:
    """Each storage backend in turn."""
    fixture_name = {"memory": "memory_store", "sqlite": "sqlite_store", "file": "json_store"}
    return request.getfixturevalue(fixture_name[request.param])


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Build a ``Transaction`` with sensible defaults; override any field."""

    def _make(**overrides: Any) -> Transaction:
        fields: dict[str, Any] = {
            "type": TransactionType.DEBIT,
            "amount": 100.0,
            "merchant": "Corner Shop",
            "category": Category.FOOD,
            "date": dt.date(2024, 1, 1),
            "mode": PaymentMode.CASH,
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _make
