"""Render cycle: load, classify, query and aggregate in one pass."""

from pydantic import BaseModel

from wallet.models import ClassifiedTransaction
from wallet.services.analytics_service import AnalyticsService, LedgerStats
from wallet.services.classification_service import SuspicionClassifier
from wallet.services.query_service import QueryService, TransactionQuery
from wallet.services.storage_service import TransactionStore


class LedgerView(BaseModel):
    """Everything the presentation layer needs for one render."""

    rows: list[ClassifiedTransaction]
    stats: LedgerStats
    spending_by_category: dict[str, float]
    total_count: int


class TransactionPipeline:
    """Pipeline producing a fresh ``LedgerView`` from the store."""

    def __init__(self, store: TransactionStore):
        self.store = store
        self.classifier = SuspicionClassifier()
        self.query_service = QueryService()
        self.analytics_service = AnalyticsService()

    def process(self, query: TransactionQuery) -> LedgerView:
        """
        Run the full cycle against a fresh read of the store.

        Classification sees the whole collection before any search or filter,
        and the stats ignore the query entirely.
        """
        transactions = self.store.load()
        classified = self.classifier.classify(transactions)
        rows = self.query_service.apply(classified, query)

        return LedgerView(
            rows=rows,
            stats=self.analytics_service.aggregate(transactions),
            spending_by_category=self.analytics_service.debit_by_category(transactions),
            total_count=len(transactions),
        )
