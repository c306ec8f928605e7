"""Explicit session context handed to gateway adapters."""

from __future__ import annotations

from dataclasses import dataclass

from shared.errors import SessionRequiredError


@dataclass(frozen=True, slots=True)
class SessionContext:
    user_id: str
    token: str | None = None


def require_session(session: SessionContext | None) -> SessionContext:
    """Return the session or fail when no user is authenticated."""

    if session is None or not session.user_id.strip():
        raise SessionRequiredError("An authenticated user is required for ledger operations")
    return session
