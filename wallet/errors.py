"""Exceptions raised by the wallet services."""


class WalletError(Exception):
    """Base class for wallet errors."""


class InvalidAmountError(WalletError, ValueError):
    """A submitted amount is missing, non-numeric or not strictly positive."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Amount must be a positive number, got {amount!r}")


class StorageError(WalletError):
    """The transaction store could not be read or written."""


class CorruptStorageError(StorageError):
    """The stored blob exists but cannot be deserialized into transactions."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored data under {key!r} is unreadable: {reason}")
