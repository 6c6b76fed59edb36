"""Services package for the family wallet."""

from wallet.services.analytics_service import AnalyticsService, LedgerStats
from wallet.services.classification_service import SuspicionClassifier
from wallet.services.pipeline import LedgerView, TransactionPipeline
from wallet.services.query_service import (
    QueryService,
    SortOrder,
    TransactionQuery,
    TypeFilter,
)
from wallet.services.storage_service import (
    InMemoryTransactionStore,
    JsonFileTransactionStore,
    SQLiteTransactionStore,
    TransactionStore,
    create_store,
)
from wallet.services.transaction_service import TransactionService

__all__ = [
    "AnalyticsService",
    "InMemoryTransactionStore",
    "JsonFileTransactionStore",
    "LedgerStats",
    "LedgerView",
    "QueryService",
    "SQLiteTransactionStore",
    "SortOrder",
    "SuspicionClassifier",
    "TransactionPipeline",
    "TransactionQuery",
    "TransactionService",
    "TransactionStore",
    "TypeFilter",
    "create_store",
]
