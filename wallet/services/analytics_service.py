"""Service for balance statistics over the stored collection."""

from collections import defaultdict
from typing import Iterable

from pydantic import BaseModel

from wallet.models import Transaction, TransactionType


class LedgerStats(BaseModel):
    """Global credit/debit totals and the resulting balance."""

    credit: float = 0.0
    debit: float = 0.0
    balance: float = 0.0


class AnalyticsService:
    """Aggregates are always computed over the full collection, not the view."""

    def get_total_income(self, transactions: Iterable[Transaction]) -> float:
        """Sum of credit amounts."""
        return sum(t.amount for t in transactions if t.type == TransactionType.CREDIT)

    def get_total_expenditure(self, transactions: Iterable[Transaction]) -> float:
        """Sum of debit amounts."""
        return sum(t.amount for t in transactions if t.type == TransactionType.DEBIT)

    def aggregate(self, transactions: Iterable[Transaction]) -> LedgerStats:
        transactions = list(transactions)
        credit = self.get_total_income(transactions)
        debit = self.get_total_expenditure(transactions)
        return LedgerStats(credit=credit, debit=debit, balance=credit - debit)

    def debit_by_category(self, transactions: Iterable[Transaction]) -> dict[str, float]:
        """
        Total debit amount per category, largest first.

        Categories without debits are omitted.
        """
        by_category: dict[str, float] = defaultdict(float)
        for t in transactions:
            if t.type == TransactionType.DEBIT:
                by_category[t.category.value] += t.amount
        return dict(sorted(by_category.items(), key=lambda item: item[1], reverse=True))
