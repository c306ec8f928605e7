"""Transactions repository interface and adapters.

Every adapter is bound to one ``SessionContext``; all reads and writes are
scoped to that user.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Protocol
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from gateway.http_client import LedgerHttpClient
from gateway.session import SessionContext, require_session
from shared.errors import NotFoundError, ServerError, ValidationError
from shared.models import FilterCriteria, ListQuery, Transaction, TransactionFields, TypeFilter


class TransactionRepository(Protocol):
    async def list_transactions(self, criteria: FilterCriteria) -> list[Transaction]:
        """Return the user's transactions matching the criteria, server-ordered."""

    async def create_transaction(self, fields: TransactionFields) -> Transaction:
        """Create a transaction and return it with its server-assigned id."""

    async def update_transaction(self, transaction_id: str, fields: TransactionFields) -> None:
        """Replace the editable fields of an existing transaction."""

    async def delete_transaction(self, transaction_id: str) -> None:
        """Delete an existing transaction."""


def matches_query(transaction: Transaction, query: ListQuery, *, today: date) -> bool:
    """Apply list query semantics to a single transaction."""

    if query.frequency_days is not None:
        if transaction.date <= today - timedelta(days=query.frequency_days):
            return False
    elif query.date_range is not None:
        if not query.date_range.start_date <= transaction.date <= query.date_range.end_date:
            return False

    if query.type_filter != TypeFilter.ALL and transaction.type.value != query.type_filter.value:
        return False
    return True


class InMemoryTransactionRepository:
    """In-memory transactions store used by tests/dev."""

    def __init__(
        self,
        session: SessionContext | None,
        *,
        seed: list[Transaction] | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._session = require_session(session)
        self._clock = clock
        self._transactions: list[Transaction] = list(seed or [])

    def _find_index(self, transaction_id: str) -> int:
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id and transaction.user_id == self._session.user_id:
                return index
        raise NotFoundError(f"Transaction {transaction_id} not found")

    async def list_transactions(self, criteria: FilterCriteria) -> list[Transaction]:
        query = criteria.to_query()
        today = self._clock()
        rows = [
            (position, transaction)
            for position, transaction in enumerate(self._transactions)
            if transaction.user_id == self._session.user_id
            and matches_query(transaction, query, today=today)
        ]
        rows.sort(key=lambda row: (-row[1].date.toordinal(), row[0]))
        return [transaction for _, transaction in rows]

    async def create_transaction(self, fields: TransactionFields) -> Transaction:
        transaction = Transaction(
            id=uuid4().hex,
            user_id=self._session.user_id,
            **fields.model_dump(),
        )
        self._transactions.append(transaction)
        return transaction

    async def update_transaction(self, transaction_id: str, fields: TransactionFields) -> None:
        index = self._find_index(transaction_id)
        self._transactions[index] = self._transactions[index].model_copy(update=fields.model_dump())

    async def delete_transaction(self, transaction_id: str) -> None:
        index = self._find_index(transaction_id)
        del self._transactions[index]


@dataclass(frozen=True, slots=True)
class LedgerRoutes:
    list_path: str = "/transections/get-transection"
    create_path: str = "/transections/add-transection"
    update_path: str = "/transections/edit-transection"
    delete_path: str = "/transections/delete-transection"


def build_list_body(user_id: str, query: ListQuery) -> dict[str, Any]:
    """Encode a canonical query into the remote list request body."""

    if query.frequency_days is not None:
        frequency = str(query.frequency_days)
    else:
        frequency = "custom"

    selected_date: list[str] = []
    if query.date_range is not None:
        selected_date = [
            query.date_range.start_date.isoformat(),
            query.date_range.end_date.isoformat(),
        ]

    return {
        "userid": user_id,
        "frequency": frequency,
        "selectedDate": selected_date,
        "type": query.type_filter.value,
    }


class HttpTransactionRepository:
    """Remote repository; blocking HTTP calls run in a worker thread."""

    def __init__(
        self,
        client: LedgerHttpClient,
        session: SessionContext | None,
        *,
        routes: LedgerRoutes | None = None,
    ) -> None:
        self._client = client
        self._session = require_session(session)
        self._routes = routes or LedgerRoutes()

    async def _post(self, path: str, payload: dict[str, Any]) -> Any:
        return await asyncio.to_thread(self._client.post_json, path, payload)

    async def list_transactions(self, criteria: FilterCriteria) -> list[Transaction]:
        body = build_list_body(self._session.user_id, criteria.to_query())
        try:
            rows = await self._post(self._routes.list_path, body)
        except (ValidationError, NotFoundError) as exc:
            raise ServerError(exc.message, status=exc.status) from exc

        if not isinstance(rows, list):
            raise ServerError("Ledger list reply is not a list of transactions")
        try:
            return [Transaction.model_validate(row) for row in rows]
        except PydanticValidationError as exc:
            raise ServerError(f"Ledger list reply is malformed: {exc}") from exc

    async def create_transaction(self, fields: TransactionFields) -> Transaction:
        body = {**fields.model_dump(mode="json"), "userid": self._session.user_id}
        row = await self._post(self._routes.create_path, body)
        if not isinstance(row, dict):
            raise ServerError("Ledger create reply did not include the created transaction")
        try:
            return Transaction.model_validate(row)
        except PydanticValidationError as exc:
            raise ServerError(f"Ledger create reply is malformed: {exc}") from exc

    async def update_transaction(self, transaction_id: str, fields: TransactionFields) -> None:
        body = {
            "payload": {**fields.model_dump(mode="json"), "userId": self._session.user_id},
            "transactionId": transaction_id,
        }
        await self._post(self._routes.update_path, body)

    async def delete_transaction(self, transaction_id: str) -> None:
        body = {"transactionId": transaction_id, "userid": self._session.user_id}
        await self._post(self._routes.delete_path, body)
