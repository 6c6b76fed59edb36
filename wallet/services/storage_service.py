"""Persistence adapter: the whole transaction list as one blob under one key.

Every backend implements the same small port (``load``/``save``/``clear``);
business logic only sees ``TransactionStore``.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError
from sqlalchemy.engine import Engine

from wallet.config import Settings
from wallet.database import engine, get_session, init_db, make_engine
from wallet.errors import CorruptStorageError
from wallet.logging_setup import get_logger
from wallet.models import StorageEntry, Transaction

logger = get_logger(__name__)

# Only schema fields are persisted; derived flags such as ``suspicious`` are not.
STORED_FIELDS = frozenset(Transaction.model_fields)


def serialize_transactions(
    transactions: Iterable[Transaction], indent: Optional[int] = None
) -> str:
    """Serialize transactions to a JSON array of plain objects."""
    payload = [
        txn.model_dump(mode="json", include=set(STORED_FIELDS))
        for txn in transactions
    ]
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def deserialize_transactions(blob: str, key: str) -> list[Transaction]:
    """Parse a stored blob, raising ``CorruptStorageError`` on anything malformed."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise CorruptStorageError(key, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(data, list):
        raise CorruptStorageError(key, f"expected a JSON array, got {type(data).__name__}")

    transactions = []
    seen_ids = set()
    for index, item in enumerate(data):
        try:
            txn = Transaction.model_validate(item)
        except ValidationError as exc:
            raise CorruptStorageError(
                key, f"item {index} is not a valid transaction ({exc.error_count()} errors)"
            ) from exc
        if txn.id in seen_ids:
            raise CorruptStorageError(key, f"duplicate transaction id {txn.id!r}")
        seen_ids.add(txn.id)
        transactions.append(txn)
    return transactions


class TransactionStore(ABC):
    """Storage port holding the full transaction collection under one key."""

    def __init__(self, key: str):
        self.key = key

    def load(self) -> list[Transaction]:
        """Read and deserialize the stored collection; missing key means empty."""
        blob = self._read()
        if not blob:
            return []
        return deserialize_transactions(blob, self.key)

    def save(self, transactions: Iterable[Transaction]) -> None:
        """Serialize the full collection and overwrite the stored blob."""
        self._write(serialize_transactions(transactions))

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored blob entirely."""

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Return the raw blob, or None when the key is absent."""

    @abstractmethod
    def _write(self, blob: str) -> None:
        """Overwrite the raw blob."""


class InMemoryTransactionStore(TransactionStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, key: str = "fam_wallet_txns_v1"):
        super().__init__(key)
        self._data: dict[str, str] = {}

    def clear(self) -> None:
        self._data.pop(self.key, None)

    def _read(self) -> Optional[str]:
        return self._data.get(self.key)

    def _write(self, blob: str) -> None:
        self._data[self.key] = blob


class SQLiteTransactionStore(TransactionStore):
    """Store the blob as one row of the SQLite ``storage`` key/value table."""

    def __init__(self, key: str, bind: Engine = engine):
        super().__init__(key)
        self.bind = bind
        init_db(bind)

    def clear(self) -> None:
        with get_session(self.bind) as session:
            entry = session.get(StorageEntry, self.key)
            if entry is not None:
                session.delete(entry)
                session.commit()

    def _read(self) -> Optional[str]:
        with get_session(self.bind) as session:
            entry = session.get(StorageEntry, self.key)
            return entry.value if entry else None

    def _write(self, blob: str) -> None:
        with get_session(self.bind) as session:
            entry = session.get(StorageEntry, self.key)
            if entry is None:
                entry = StorageEntry(key=self.key, value=blob)
            else:
                entry.value = blob
            session.add(entry)
            session.commit()


class JsonFileTransactionStore(TransactionStore):
    """Store the blob as a JSON file on disk."""

    def __init__(self, path: Path, key: str = "fam_wallet_txns_v1"):
        super().__init__(key)
        self.path = Path(path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, blob: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so a crash never leaves a half-written file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        os.replace(tmp_path, self.path)


def create_store(config: Settings) -> TransactionStore:
    """Build the store selected by ``config.storage_backend``."""
    backend = config.storage_backend
    logger.debug("Using %s transaction store (key=%s)", backend, config.storage_key)

    if backend == "sqlite":
        return SQLiteTransactionStore(config.storage_key, bind=make_engine(config.database_url))
    if backend == "file":
        return JsonFileTransactionStore(config.json_path, key=config.storage_key)
    if backend == "memory":
        return InMemoryTransactionStore(config.storage_key)
    raise ValueError(f"Unknown storage backend: {backend!r}")
