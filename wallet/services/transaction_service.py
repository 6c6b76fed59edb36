"""Service for adding, deleting, resetting and exporting transactions."""

import datetime as dt
import math
from typing import Any, Optional, Union

from wallet.errors import InvalidAmountError
from wallet.logging_setup import get_logger
from wallet.models import Category, PaymentMode, Transaction, TransactionType
from wallet.services.storage_service import TransactionStore, serialize_transactions

logger = get_logger(__name__)

EXPORT_MEDIA_TYPE = "application/json"


def parse_amount(value: Any) -> float:
    """Coerce a form value to a strictly positive finite float."""
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(value)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidAmountError(value) from None
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError(value)
    return amount


class TransactionService:
    """Use-cases that mutate or read the stored collection.

    Every method re-reads the store; nothing is cached between calls.
    """

    def __init__(self, store: TransactionStore):
        self.store = store

    def add_transaction(
        self,
        type: Union[TransactionType, str],
        amount: Any,
        merchant: str,
        category: Union[Category, str],
        date: Optional[dt.date] = None,
        mode: Union[PaymentMode, str] = PaymentMode.CASH,
    ) -> Transaction:
        """
        Validate and append a new transaction.

        Raises:
            InvalidAmountError: amount is missing, non-numeric or not positive.
                Nothing is written in that case.
        """
        value = parse_amount(amount)
        transaction = Transaction(
            type=TransactionType(type),
            amount=value,
            merchant=(merchant or "").strip(),
            category=Category(category),
            date=date or dt.date.today(),
            mode=PaymentMode(mode),
        )

        transactions = self.store.load()
        transactions.append(transaction)
        self.store.save(transactions)

        logger.info(
            "Added %s of %.2f (%s) id=%s",
            transaction.type.value,
            transaction.amount,
            transaction.merchant or "-",
            transaction.id,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Delete a transaction by ID.

        Returns:
            True if deleted, False if not found (the store is left untouched)
        """
        transactions = self.store.load()
        remaining = [t for t in transactions if t.id != transaction_id]
        if len(remaining) == len(transactions):
            logger.debug("Delete ignored, no transaction with id=%s", transaction_id)
            return False

        self.store.save(remaining)
        logger.info("Deleted transaction id=%s", transaction_id)
        return True

    def reset(self) -> None:
        """Remove every stored transaction."""
        self.store.clear()
        logger.info("Cleared all transactions under key %s", self.store.key)

    def export_transactions(self) -> str:
        """Pretty-printed JSON array of the full stored collection."""
        transactions = self.store.load()
        logger.info("Exporting %d transactions", len(transactions))
        return serialize_transactions(transactions, indent=2)
