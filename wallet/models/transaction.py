"""Transaction models for the family wallet."""

import datetime as dt
import math
from enum import Enum
from uuid import uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel


class TransactionType(str, Enum):
    """Direction of a money movement."""

    CREDIT = "credit"
    DEBIT = "debit"


class Category(str, Enum):
    """Fixed set of spending/earning categories offered by the form."""

    FOOD = "food"
    HOME = "home"
    TRAVEL = "travel"
    SHOPPING = "shopping"
    BILLS = "bills"
    HEALTH = "health"
    EDUCATION = "education"
    ENTERTAINMENT = "entertainment"
    SALARY = "salary"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.title()


class PaymentMode(str, Enum):
    """How the money moved."""

    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Text shown in the form and the table."""
        return _MODE_LABELS.get(self.value, self.value.title())


_MODE_LABELS = {"upi": "UPI", "netbanking": "Net Banking"}


def generate_id() -> str:
    """Generate an opaque transaction id."""
    return uuid4().hex


class Transaction(SQLModel):
    """A single recorded credit or debit, as persisted in the store."""

    id: str = Field(default_factory=generate_id, min_length=1)
    type: TransactionType
    amount: float = Field(gt=0)
    merchant: str = ""
    category: Category
    date: dt.date
    mode: PaymentMode

    @field_validator("amount")
    @classmethod
    def amount_must_be_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("amount must be a finite number")
        return value


class ClassifiedTransaction(Transaction):
    """Transaction annotated with the derived suspicious flag (never stored)."""

    suspicious: bool = False
