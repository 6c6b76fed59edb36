"""Heuristic flagging of suspicious transactions."""

from collections import Counter
from typing import Iterable

from wallet.models import ClassifiedTransaction, Transaction

# Fixed thresholds; not user configurable.
AMOUNT_THRESHOLD = 10000
REPEAT_THRESHOLD = 3


def normalize_merchant(merchant: str) -> str:
    """Merchant key used for repeat counting."""
    return merchant.strip().lower()


class SuspicionClassifier:
    """Flag transactions that are unusually large or hit a repeated merchant.

    Counts are global, so ``classify`` must receive the complete stored
    collection, never a filtered view.
    """

    def merchant_counts(self, transactions: Iterable[Transaction]) -> Counter:
        """Occurrences of each normalized merchant."""
        return Counter(normalize_merchant(t.merchant) for t in transactions)

    def is_suspicious(self, txn: Transaction, counts: Counter) -> bool:
        """Apply both rules to one transaction."""
        return (
            txn.amount > AMOUNT_THRESHOLD
            or counts[normalize_merchant(txn.merchant)] >= REPEAT_THRESHOLD
        )

    def classify(
        self, transactions: Iterable[Transaction]
    ) -> list[ClassifiedTransaction]:
        """Return the same transactions, in order, annotated with ``suspicious``."""
        transactions = list(transactions)
        counts = self.merchant_counts(transactions)
        return [
            ClassifiedTransaction(
                **txn.model_dump(exclude={"suspicious"}),
                suspicious=self.is_suspicious(txn, counts),
            )
            for txn in transactions
        ]
