"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_backend: Literal["sqlite", "file", "memory"] = "sqlite"
    database_path: Path = Path("wallet.db")
    json_path: Path = Path("transactions_store.json")
    storage_key: str = "fam_wallet_txns_v1"

    # Presentation
    currency_symbol: str = "₹"
    export_filename: str = "transactions.json"
    app_title: str = "Family Wallet"
    port: int = 8081
    native: bool = False

    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        """Get SQLite connection URL."""
        return f"sqlite:///{self.database_path}"


settings = Settings()
