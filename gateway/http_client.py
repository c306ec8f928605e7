"""Minimal JSON-over-HTTP client used by the remote transactions repository."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from shared.errors import LedgerError, NetworkError, NotFoundError, ServerError, ValidationError


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LedgerApiSettings:
    url: str
    token: str | None = None
    timeout_seconds: float = 10.0


def error_for_status(status: int, body: str) -> LedgerError:
    """Map an HTTP status class onto the ledger error taxonomy."""

    message = f"Ledger request failed with status {status}: {body}"
    if status == 404:
        return NotFoundError(message, status=status)
    if 400 <= status < 500:
        return ValidationError(message, status=status)
    return ServerError(message, status=status)


class LedgerHttpClient:
    def __init__(self, settings: LedgerApiSettings) -> None:
        self.settings = settings

    def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded reply (``None`` when empty)."""

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"

        request = Request(
            url=f"{self.settings.url}{path}",
            data=json.dumps(payload).encode("utf-8"),
            headers=headers,
            method="POST",
        )
        try:
            with urlopen(request, timeout=self.settings.timeout_seconds) as response:  # noqa: S310 - URL comes from trusted env config
                raw_bytes = response.read()
        except HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")[:500]
            logger.warning("ledger_http_error path=%s status=%s", path, exc.code)
            raise error_for_status(exc.code, body) from exc
        except (URLError, TimeoutError, ConnectionError, HTTPException) as exc:
            logger.warning("ledger_network_error path=%s error=%s", path, exc)
            raise NetworkError(f"Ledger request to {path} failed: {exc}") from exc

        try:
            raw_body = raw_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ServerError(f"Ledger reply for {path} is not valid UTF-8") from exc

        if not raw_body.strip():
            return None
        try:
            return json.loads(raw_body)
        except json.JSONDecodeError as exc:
            raise ServerError(f"Ledger reply for {path} is not valid JSON") from exc
