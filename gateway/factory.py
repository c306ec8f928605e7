"""Composition root for gateway adapters."""

from __future__ import annotations

from gateway.http_client import LedgerApiSettings, LedgerHttpClient
from gateway.session import SessionContext, require_session
from gateway.transactions_repository import (
    HttpTransactionRepository,
    InMemoryTransactionRepository,
    TransactionRepository,
)
from shared import config


def session_from_env() -> SessionContext | None:
    """Build the session for the user configured in the environment, if any."""

    user_id = config.ledger_user_id()
    if user_id is None:
        return None
    return SessionContext(user_id=user_id, token=config.ledger_api_token())


def build_transaction_repository(session: SessionContext | None) -> TransactionRepository:
    """Build the transactions repository for an authenticated session.

    The remote adapter is used when ``LEDGER_API_URL`` is configured; otherwise
    an in-memory store backs the page.
    """

    session = require_session(session)
    api_url = config.ledger_api_url()
    if api_url:
        client = LedgerHttpClient(
            settings=LedgerApiSettings(
                url=api_url,
                token=session.token or config.ledger_api_token(),
                timeout_seconds=config.ledger_api_timeout_seconds(),
            )
        )
        return HttpTransactionRepository(client=client, session=session)
    return InMemoryTransactionRepository(session=session)
