"""Account transaction ledger."""

from .models import Transaction, TransactionType
from .service import DAILY_LIMIT, MAX_TRANSACTION_AMOUNT, TransactionService, calendar_day

__all__ = [
    "Transaction",
    "TransactionType",
    "TransactionService",
    "DAILY_LIMIT",
    "MAX_TRANSACTION_AMOUNT",
    "calendar_day",
]
