"""Models package for the family wallet."""

from wallet.models.storage import StorageEntry
from wallet.models.transaction import (
    Category,
    ClassifiedTransaction,
    PaymentMode,
    Transaction,
    TransactionType,
    generate_id,
)

__all__ = [
    "Category",
    "ClassifiedTransaction",
    "PaymentMode",
    "StorageEntry",
    "Transaction",
    "TransactionType",
    "generate_id",
]
