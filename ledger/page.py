"""Transactions page: routes view intents into the controllers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ledger.analytics import AnalyticsSummary, summarize
from ledger.form_controller import FormController, FormState
from ledger.mutation_coordinator import MutationCoordinator, MutationResult
from ledger.notifications import Notifier
from ledger.query_controller import LoadingState, QueryController, QueryState
from shared.errors import ValidationError
from shared.models import FrequencyPreset, Transaction, TypeFilter


logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    TABLE = "table"
    ANALYTICS = "analytics"


@dataclass(frozen=True, slots=True)
class PageState:
    query: QueryState
    form: FormState
    view_mode: ViewMode

    @property
    def loading(self) -> bool:
        return self.query.loading_state == LoadingState.LOADING

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self.query.transactions

    def analytics(self) -> AnalyticsSummary | None:
        if self.view_mode != ViewMode.ANALYTICS:
            return None
        return summarize(self.query.transactions)


class TransactionsPage:
    def __init__(
        self,
        query_controller: QueryController,
        form_controller: FormController,
        coordinator: MutationCoordinator,
        notifier: Notifier,
    ) -> None:
        self.query_controller = query_controller
        self.form_controller = form_controller
        self.coordinator = coordinator
        self._notifier = notifier
        self._view_mode = ViewMode.TABLE

    def snapshot(self) -> PageState:
        return PageState(
            query=self.query_controller.snapshot(),
            form=self.form_controller.snapshot(),
            view_mode=self._view_mode,
        )

    async def load(self) -> None:
        await self.query_controller.refresh()

    async def filter_changed(
        self,
        *,
        frequency: FrequencyPreset | str | None = None,
        custom_range: tuple[date, date] | None = None,
        type_filter: TypeFilter | str | None = None,
    ) -> None:
        current = self.query_controller.criteria
        try:
            criteria = current
            if frequency is not None:
                criteria = criteria.set_frequency(frequency)
            if custom_range is not None:
                criteria = criteria.set_custom_range(*custom_range)
            if type_filter is not None:
                criteria = criteria.set_type(type_filter)
        except ValidationError as exc:
            logger.info("filter_change_rejected fields=%s", sorted(exc.field_errors))
            self._notifier.error(exc.message)
            return

        if criteria == current:
            return
        await self.query_controller.set_criteria(criteria)

    def add_requested(self) -> None:
        self.form_controller.open_create()

    def edit_requested(self, record: Transaction) -> None:
        self.form_controller.open_edit(record)

    async def delete_requested(self, record: Transaction) -> MutationResult:
        return await self.coordinator.delete(record)

    def form_field_changed(self, name: str, value: object) -> None:
        self.form_controller.set_field(name, value)

    async def form_submitted(self) -> MutationResult:
        return await self.form_controller.submit()

    def form_cancelled(self) -> None:
        self.form_controller.cancel()

    def view_mode_changed(self, mode: ViewMode | str) -> None:
        self._view_mode = ViewMode(mode)
