from __future__ import annotations

import json

import pytest

from wallet.config import Settings
from wallet.errors import CorruptStorageError, StorageError
from wallet.services.classification_service import SuspicionClassifier
from wallet.services.storage_service import (
    InMemoryTransactionStore,
    JsonFileTransactionStore,
    SQLiteTransactionStore,
    create_store,
    deserialize_transactions,
    serialize_transactions,
)


def _dump(txns) -> list[dict]:
    return [t.model_dump() for t in txns]


def test_load_missing_key_is_empty(any_store) -> None:
    assert any_store.load() == []


def test_save_then_load_round_trips(any_store, make_txn) -> None:
    txns = [make_txn(merchant="ACME", amount=5000), make_txn(merchant="Café ☕", amount=12.5)]
    any_store.save(txns)
    assert _dump(any_store.load()) == _dump(txns)


def test_save_of_loaded_collection_is_idempotent(any_store, make_txn) -> None:
    any_store.save([make_txn(), make_txn(amount=42)])
    first = any_store.load()
    blob_before = any_store._read()

    any_store.save(any_store.load())

    assert _dump(any_store.load()) == _dump(first)
    assert any_store._read() == blob_before


def test_save_overwrites_previous_blob(any_store, make_txn) -> None:
    any_store.save([make_txn(), make_txn()])
    replacement = [make_txn(merchant="Only")]
    any_store.save(replacement)
    assert _dump(any_store.load()) == _dump(replacement)


def test_clear_removes_blob(any_store, make_txn) -> None:
    any_store.save([make_txn()])
    any_store.clear()
    assert any_store.load() == []
    # clearing an already empty store is fine
    any_store.clear()
    assert any_store.load() == []


def test_suspicious_flag_is_never_persisted(memory_store, make_txn) -> None:
    classified = SuspicionClassifier().classify([make_txn(amount=99999)])
    memory_store.save(classified)

    stored = json.loads(memory_store._read())
    assert "suspicious" not in stored[0]
    assert set(stored[0]) == {"id", "type", "amount", "merchant", "category", "date", "mode"}


def test_storage_layout_is_plain_json_array(memory_store, make_txn) -> None:
    txn = make_txn(merchant="ACME", amount=5000)
    memory_store.save([txn])

    assert json.loads(memory_store._read()) == [
        {
            "id": txn.id,
            "type": "debit",
            "amount": 5000.0,
            "merchant": "ACME",
            "category": "food",
            "date": "2024-01-01",
            "mode": "cash",
        }
    ]


def test_loads_blob_written_by_hand(memory_store) -> None:
    memory_store._write(json.dumps([
        {"id": "abc", "type": "credit", "amount": 5000, "merchant": "ACME",
         "category": "food", "date": "2024-01-01", "mode": "cash"},
    ]))
    [txn] = memory_store.load()
    assert txn.id == "abc"
    assert txn.amount == 5000
    assert txn.date.isoformat() == "2024-01-01"


@pytest.mark.parametrize(
    "blob",
    [
        "{not json",
        '{"id": "abc"}',
        '[{"id": "abc", "type": "credit"}]',
        '[{"id": "a", "type": "refund", "amount": 1, "merchant": "x", '
        '"category": "food", "date": "2024-01-01", "mode": "cash"}]',
        '[{"id": "a", "type": "credit", "amount": -5, "merchant": "x", '
        '"category": "food", "date": "2024-01-01", "mode": "cash"}]',
        '[{"id": "a", "type": "credit", "amount": 5, "merchant": "x", '
        '"category": "food", "date": "yesterday", "mode": "cash"}]',
        '[{"id": "a", "type": "credit", "amount": Infinity, "merchant": "x", '
        '"category": "food", "date": "2024-01-01", "mode": "cash"}]',
        '[{"id": "a", "type": "debit", "amount": NaN, "merchant": "x", '
        '"category": "food", "date": "2024-01-01", "mode": "cash"}]',
    ],
)
def test_corrupt_blob_raises_distinct_error(blob: str) -> None:
    with pytest.raises(CorruptStorageError) as excinfo:
        deserialize_transactions(blob, key="k")
    assert excinfo.value.key == "k"
    assert isinstance(excinfo.value, StorageError)


def test_duplicate_ids_are_corrupt(make_txn) -> None:
    txn = make_txn()
    blob = serialize_transactions([txn, txn])
    with pytest.raises(CorruptStorageError, match="duplicate"):
        deserialize_transactions(blob, key="k")


def test_corrupt_file_raises_on_load(json_store) -> None:
    json_store.path.parent.mkdir(parents=True, exist_ok=True)
    json_store.path.write_text("[{]", encoding="utf-8")
    with pytest.raises(CorruptStorageError):
        json_store.load()


def test_json_store_clear_deletes_file(json_store, make_txn) -> None:
    json_store.save([make_txn()])
    assert json_store.path.exists()
    json_store.clear()
    assert not json_store.path.exists()


def test_sqlite_stores_are_isolated_by_key(sqlite_store, make_txn) -> None:
    other = SQLiteTransactionStore("another_key", bind=sqlite_store.bind)
    sqlite_store.save([make_txn()])

    assert other.load() == []
    other.clear()
    assert len(sqlite_store.load()) == 1


def test_export_serialization_is_pretty_printed(make_txn) -> None:
    blob = serialize_transactions([make_txn()], indent=2)
    assert blob.startswith("[\n  {\n")


def test_create_store_selects_backend(tmp_path) -> None:
    memory = create_store(Settings(storage_backend="memory", storage_key="k"))
    file_store = create_store(Settings(storage_backend="file", json_path=tmp_path / "s.json"))
    sqlite = create_store(Settings(storage_backend="sqlite", database_path=tmp_path / "w.db"))

    assert isinstance(memory, InMemoryTransactionStore)
    assert memory.key == "k"
    assert isinstance(file_store, JsonFileTransactionStore)
    assert file_store.path == tmp_path / "s.json"
    assert isinstance(sqlite, SQLiteTransactionStore)
    sqlite.bind.dispose()
