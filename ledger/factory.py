"""Composition root for the transactions page."""

from __future__ import annotations

from gateway.factory import build_transaction_repository, session_from_env
from gateway.session import SessionContext
from gateway.transactions_repository import TransactionRepository
from ledger.form_controller import FormController
from ledger.mutation_coordinator import MutationCoordinator
from ledger.notifications import LoggingNotifier, Notifier
from ledger.page import TransactionsPage
from ledger.query_controller import QueryController
from shared import config
from shared.models import FilterCriteria


def build_transactions_page(
    *,
    session: SessionContext | None = None,
    repository: TransactionRepository | None = None,
    notifier: Notifier | None = None,
) -> TransactionsPage:
    """Build a transactions page wiring all controllers around one repository."""

    if repository is None:
        repository = build_transaction_repository(session or session_from_env())
    notifier = notifier or LoggingNotifier()

    criteria = FilterCriteria().set_frequency(config.default_frequency())
    query_controller = QueryController(repository, notifier, criteria=criteria)
    coordinator = MutationCoordinator(repository, query_controller, notifier)
    form_controller = FormController(coordinator)
    return TransactionsPage(
        query_controller=query_controller,
        form_controller=form_controller,
        coordinator=coordinator,
        notifier=notifier,
    )
