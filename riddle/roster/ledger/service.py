"""Transaction processing with per-day limits.

Validation failures raise LedgerError. The daily limit is checked per account
and transaction type against transactions stamped on the same UTC calendar
day as the service clock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from decimal import Decimal

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import LedgerError
from ..storage import InMemoryRecordStore, RecordStore
from .models import Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_TRANSACTION_AMOUNT = Decimal("10000.00")
DAILY_LIMIT = Decimal("50000.00")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def calendar_day(moment: datetime) -> date:
    """UTC calendar day of an aware datetime."""
    return moment.astimezone(UTC).date()


class TransactionService:
    """Validates, limits and stores transactions."""

    def __init__(
        self,
        store: RecordStore[Transaction] | None = None,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store if store is not None else InMemoryRecordStore(
            key=lambda tx: tx.account_id
        )
        self._clock = clock

    def process_transaction(
        self,
        account_id: str,
        amount: Decimal,
        description: str,
        type: TransactionType | None,
    ) -> Transaction:
        """Validate, check the daily limit and store a new transaction.

        Raises:
            LedgerError: If validation or the daily limit rejects it
        """
        self._validate(account_id, amount, description, type)
        now = self._clock()
        self._check_daily_limit(account_id, amount, type, now)

        try:
            transaction = Transaction.create(
                account_id, amount, description, type, timestamp=now
            )
        except PydanticValidationError as e:
            raise LedgerError(f"Transaction processing failed: {e}") from e

        self._store.append(transaction)
        logger.info(
            "transaction_processed",
            extra={
                "account_id": account_id,
                "amount": str(amount),
                "type": type.value,
                "transaction_id": transaction.id,
            },
        )
        return transaction

    def get_transaction_history(self, account_id: str) -> list[Transaction]:
        """Transactions of an account, newest first."""
        if not account_id or not account_id.strip():
            raise LedgerError("Account ID cannot be blank")
        history = self._store.query_by_key(account_id)
        return sorted(history, key=lambda tx: tx.timestamp, reverse=True)

    def calculate_balance(self, account_id: str) -> Decimal:
        """Credits minus debits."""
        history = self.get_transaction_history(account_id)
        credits = sum((tx.amount for tx in history if tx.is_credit), Decimal("0"))
        debits = sum((tx.amount for tx in history if tx.is_debit), Decimal("0"))
        return credits - debits

    def summarize(self, account_id: str) -> str:
        """One-line account summary."""
        balance = self.calculate_balance(account_id)
        count = len(self.get_transaction_history(account_id))
        return f"Account {account_id}: Balance={balance:.2f}, Transactions={count}"

    def daily_total(self, account_id: str, type: TransactionType, on: date) -> Decimal:
        """Sum of one type of transaction on a UTC calendar day."""
        return sum(
            (
                tx.amount
                for tx in self._store.query_by_key(account_id)
                if tx.type is type and calendar_day(tx.timestamp) == on
            ),
            Decimal("0"),
        )

    def _validate(
        self,
        account_id: str,
        amount: Decimal | None,
        description: str,
        type: TransactionType | None,
    ) -> None:
        if not account_id or not account_id.strip():
            raise LedgerError("Account ID cannot be blank")
        if amount is None or amount <= 0:
            raise LedgerError("Amount must be positive")
        if amount > MAX_TRANSACTION_AMOUNT:
            raise LedgerError(f"Amount exceeds maximum limit of {MAX_TRANSACTION_AMOUNT}")
        if not description or not description.strip():
            raise LedgerError("Description cannot be blank")
        if type is None:
            raise LedgerError("Transaction type cannot be null")

    def _check_daily_limit(
        self,
        account_id: str,
        amount: Decimal,
        type: TransactionType,
        now: datetime,
    ) -> None:
        current = self.daily_total(account_id, type, calendar_day(now))
        if current + amount > DAILY_LIMIT:
            raise LedgerError(
                f"Daily limit exceeded. Current: {current}, Attempted: {amount}, "
                f"Limit: {DAILY_LIMIT}"
            )
