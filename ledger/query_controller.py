"""List query state machine for the transactions page.

Every list request is tagged with a sequence number. Only the reply to the
most recently issued request is applied; replies to superseded requests are
discarded so a slow, older reply can never overwrite a newer one. The current
list stays visible while a request is in flight and after a failed one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from gateway.transactions_repository import TransactionRepository
from ledger.notifications import Notifier
from shared.errors import LedgerError
from shared.models import FilterCriteria, Transaction


logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Fetch issue with transactions"


class LoadingState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class QueryState:
    loading_state: LoadingState
    transactions: tuple[Transaction, ...]
    error: LedgerError | None
    criteria: FilterCriteria


QueryListener = Callable[[QueryState], None]


class QueryController:
    def __init__(
        self,
        repository: TransactionRepository,
        notifier: Notifier,
        *,
        criteria: FilterCriteria | None = None,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._criteria = criteria or FilterCriteria()
        self._transactions: tuple[Transaction, ...] = ()
        self._loading_state = LoadingState.IDLE
        self._error: LedgerError | None = None
        self._issued_seq = 0
        self._listeners: list[QueryListener] = []

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def latest_seq(self) -> int:
        return self._issued_seq

    def snapshot(self) -> QueryState:
        return QueryState(
            loading_state=self._loading_state,
            transactions=self._transactions,
            error=self._error,
            criteria=self._criteria,
        )

    def subscribe(self, listener: QueryListener) -> Callable[[], None]:
        """Register a state listener and return its unsubscribe callback."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)

    async def set_criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the list for the current criteria and apply it if still latest."""

        self._issued_seq += 1
        seq = self._issued_seq
        criteria = self._criteria
        self._loading_state = LoadingState.LOADING
        self._emit()
        logger.info("query_request_issued seq=%s query=%s", seq, criteria.to_query())

        try:
            transactions = await self._repository.list_transactions(criteria)
        except LedgerError as exc:
            self._notifier.error(FETCH_ERROR_MESSAGE)
            if seq != self._issued_seq:
                logger.info("query_error_superseded seq=%s latest=%s", seq, self._issued_seq)
                return
            logger.warning("query_request_failed seq=%s code=%s", seq, exc.code.value)
            self._loading_state = LoadingState.ERROR
            self._error = exc
            self._emit()
            return

        if seq != self._issued_seq:
            logger.info("query_response_discarded seq=%s latest=%s", seq, self._issued_seq)
            return

        self._transactions = tuple(transactions)
        self._loading_state = LoadingState.IDLE
        self._error = None
        logger.info("query_response_applied seq=%s count=%s", seq, len(self._transactions))
        self._emit()
