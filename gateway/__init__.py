"""Gateway adapters for the remote transactions store."""

from gateway.session import SessionContext
from gateway.transactions_repository import (
    HttpTransactionRepository,
    InMemoryTransactionRepository,
    TransactionRepository,
)

__all__ = [
    "HttpTransactionRepository",
    "InMemoryTransactionRepository",
    "SessionContext",
    "TransactionRepository",
]
