from __future__ import annotations

from typing import Any

import httpx

from chat_client.application.exceptions import (
    AppError,
    AuthenticationFailure,
    ConstraintFailure,
    NetworkFailure,
    NotFoundError,
    ValidationFailure,
)

CONSTRAINT_EXCEPTION = "Illuminate\\Database\\QueryException"


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_for_response(response: httpx.Response) -> AppError | None:
    """Map a non-2xx response to the application error taxonomy."""
    if response.is_success:
        return None

    body = _json_or_empty(response)
    status = response.status_code
    detail = str(body.get("message") or body.get("detail") or response.reason_phrase or status)

    if body.get("exception") == CONSTRAINT_EXCEPTION:
        return ConstraintFailure(detail)
    if status == 401:
        return AuthenticationFailure(detail)
    if status == 404:
        return NotFoundError(detail)
    if 400 <= status < 500:
        return ValidationFailure(detail)
    return NetworkFailure(f"HTTP {status}: {detail}")
