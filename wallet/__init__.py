"""Family Wallet: a local personal transaction ledger."""

__version__ = "0.1.0"
