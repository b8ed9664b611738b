"""Transaction data model."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(Enum):
    """Direction of a transaction."""

    CREDIT = "credit"
    DEBIT = "debit"


class Transaction(BaseModel):
    """Immutable account transaction."""

    id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    description: str
    timestamp: datetime
    type: TransactionType

    model_config = ConfigDict(frozen=True)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description cannot be blank")
        return v

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware")
        return v

    @classmethod
    def create(
        cls,
        account_id: str,
        amount: Decimal,
        description: str,
        type: TransactionType,
        *,
        timestamp: datetime | None = None,
    ) -> Transaction:
        """Create a transaction with a fresh id, stamped now unless given."""
        return cls(
            id=str(uuid.uuid4()),
            account_id=account_id,
            amount=amount,
            description=description,
            timestamp=timestamp or datetime.now(UTC),
            type=type,
        )

    @property
    def is_credit(self) -> bool:
        return self.type is TransactionType.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.type is TransactionType.DEBIT
