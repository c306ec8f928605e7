"""Mutation sequencing: one dispatch per key, then a single list refresh."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from gateway.transactions_repository import TransactionRepository
from ledger.notifications import Notifier
from ledger.query_controller import QueryController
from shared.errors import LedgerError, NotFoundError
from shared.models import Transaction, TransactionFields


logger = logging.getLogger(__name__)

CREATE_FORM_KEY = "form:create"


class MutationStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class MutationResult:
    status: MutationStatus
    transaction: Transaction | None = None
    error: LedgerError | None = None

    @property
    def ok(self) -> bool:
        return self.status == MutationStatus.SUCCEEDED


def record_key(transaction_id: str) -> str:
    return f"record:{transaction_id}"


class MutationCoordinator:
    def __init__(
        self,
        repository: TransactionRepository,
        query_controller: QueryController,
        notifier: Notifier,
    ) -> None:
        self._repository = repository
        self._query_controller = query_controller
        self._notifier = notifier
        self._pending: set[str] = set()

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    async def create(self, fields: TransactionFields) -> MutationResult:
        return await self._run(
            CREATE_FORM_KEY,
            "create",
            lambda: self._repository.create_transaction(fields),
            success_message="Transaction Added Successfully",
            failure_message="Failed to add transaction",
        )

    async def update(self, transaction_id: str, fields: TransactionFields) -> MutationResult:
        return await self._run(
            record_key(transaction_id),
            "update",
            lambda: self._repository.update_transaction(transaction_id, fields),
            success_message="Transaction Updated Successfully",
            failure_message="Failed to update transaction",
        )

    async def delete(self, record: Transaction) -> MutationResult:
        return await self._run(
            record_key(record.id),
            "delete",
            lambda: self._repository.delete_transaction(record.id),
            success_message="Transaction Deleted",
            failure_message="Unable to delete",
        )

    async def _run(
        self,
        key: str,
        operation: str,
        dispatch: Callable[[], Awaitable[Transaction | None]],
        *,
        success_message: str,
        failure_message: str,
    ) -> MutationResult:
        if key in self._pending:
            logger.info("mutation_skipped_pending operation=%s key=%s", operation, key)
            return MutationResult(status=MutationStatus.SKIPPED)

        self._pending.add(key)
        try:
            outcome = await dispatch()
        except LedgerError as exc:
            self._pending.discard(key)
            logger.warning(
                "mutation_failed operation=%s key=%s code=%s", operation, key, exc.code.value
            )
            self._notifier.error(failure_message)
            if isinstance(exc, NotFoundError):
                # Record vanished remotely; resync the displayed list.
                await self._query_controller.refresh()
            return MutationResult(status=MutationStatus.FAILED, error=exc)
        finally:
            self._pending.discard(key)

        logger.info("mutation_succeeded operation=%s key=%s", operation, key)
        self._notifier.success(success_message)
        await self._query_controller.refresh()
        return MutationResult(
            status=MutationStatus.SUCCEEDED,
            transaction=outcome if isinstance(outcome, Transaction) else None,
        )
