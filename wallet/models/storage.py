"""Key/value table backing the local transaction store."""

from sqlmodel import Field, SQLModel


class StorageEntry(SQLModel, table=True):
    """One serialized blob stored under a string key."""

    __tablename__ = "storage"

    key: str = Field(primary_key=True)
    value: str
