"""Search, filter and sort of classified transactions for display."""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel

from wallet.models import ClassifiedTransaction, TransactionType


class TypeFilter(str, Enum):
    ALL = "all"
    CREDIT = "credit"
    DEBIT = "debit"
    SUSPICIOUS = "suspicious"


class SortOrder(str, Enum):
    NONE = "none"
    LATEST = "latest"
    AMOUNT_HIGH = "amountHigh"
    AMOUNT_LOW = "amountLow"


class TransactionQuery(BaseModel):
    """Current view state of the transactions table."""

    search_text: str = ""
    type_filter: TypeFilter = TypeFilter.ALL
    sort_by: SortOrder = SortOrder.NONE


class QueryService:
    """Apply a ``TransactionQuery`` to an already classified collection."""

    def apply(
        self,
        transactions: Iterable[ClassifiedTransaction],
        query: TransactionQuery,
    ) -> list[ClassifiedTransaction]:
        """Search, then filter by type, then sort."""
        rows = self.search(transactions, query.search_text)
        rows = self.filter_type(rows, query.type_filter)
        return self.sort(rows, query.sort_by)

    def search(
        self, transactions: Iterable[ClassifiedTransaction], text: str
    ) -> list[ClassifiedTransaction]:
        """Case-insensitive substring match on merchant, category or mode.

        Category and mode match both their stored value and displayed label.
        """
        needle = text.strip().lower()
        if not needle:
            return list(transactions)
        return [
            t
            for t in transactions
            if needle in t.merchant.lower()
            or needle in t.category.value
            or needle in t.category.label.lower()
            or needle in t.mode.value
            or needle in t.mode.label.lower()
        ]

    def filter_type(
        self, transactions: Iterable[ClassifiedTransaction], type_filter: TypeFilter
    ) -> list[ClassifiedTransaction]:
        if type_filter == TypeFilter.CREDIT:
            return [t for t in transactions if t.type == TransactionType.CREDIT]
        if type_filter == TypeFilter.DEBIT:
            return [t for t in transactions if t.type == TransactionType.DEBIT]
        if type_filter == TypeFilter.SUSPICIOUS:
            return [t for t in transactions if t.suspicious]
        return list(transactions)

    def sort(
        self, transactions: Iterable[ClassifiedTransaction], sort_by: SortOrder
    ) -> list[ClassifiedTransaction]:
        """Stable sort; ``reverse=True`` keeps equal keys in original order."""
        if sort_by == SortOrder.LATEST:
            return sorted(transactions, key=lambda t: t.date, reverse=True)
        if sort_by == SortOrder.AMOUNT_HIGH:
            return sorted(transactions, key=lambda t: t.amount, reverse=True)
        if sort_by == SortOrder.AMOUNT_LOW:
            return sorted(transactions, key=lambda t: t.amount)
        return list(transactions)
