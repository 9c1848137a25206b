"""ASGI middleware that runs a strategy and exposes the identity via ContextVar."""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from typing import Any

from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from pythia_auth.credentials import CredentialRequest
from pythia_auth.outcome import INCORRECT_PASSWORD, INCORRECT_USERNAME, Error, Fail
from pythia_auth.protocol import Strategy

logger = logging.getLogger(__name__)

# Bridge between the middleware and downstream handlers
auth_identity_var: ContextVar[Any | None] = ContextVar("auth_identity", default=None)

_MASKED_MESSAGES = {INCORRECT_USERNAME, INCORRECT_PASSWORD}
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def build_credential_request(request: Request) -> CredentialRequest:
    """Collect the body-like and query-like sources of a Starlette request."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    body: dict[str, Any] = {}
    if content_type in _FORM_TYPES:
        try:
            form = await request.form()
        except (HTTPException, MultiPartException):
            logger.debug("Ignoring malformed form body", exc_info=True)
        else:
            body = dict(form)
    elif content_type == "application/json":
        try:
            payload = await request.json()
        except ValueError:
            logger.debug("Ignoring malformed JSON body", exc_info=True)
            payload = None
        if isinstance(payload, dict):
            body = payload
    return CredentialRequest(body=body, query=dict(request.query_params))


class StrategyMiddleware:
    """ASGI middleware that authenticates requests with a ``Strategy``.

    Args:
        app: The ASGI application to wrap.
        strategy: A ``Strategy`` implementation.
        exempt_paths: Exact paths that bypass authentication.
        exempt_prefixes: Path prefixes that bypass authentication.
        mask_failures: If True, incorrect-username and incorrect-password
            failures share one generic message so clients cannot tell
            which one occurred.
        logger: Logger for strategy errors. Defaults to the module logger.
    """

    def __init__(
        self,
        app: Any,
        strategy: Strategy,
        *,
        exempt_paths: set[str] | None = None,
        exempt_prefixes: set[str] | None = None,
        mask_failures: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._app = app
        self._strategy = strategy
        self._exempt_paths = exempt_paths if exempt_paths is not None else {"/health"}
        self._exempt_prefixes = exempt_prefixes or set()
        self._mask_failures = mask_failures
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def _is_exempt(self, path: str) -> bool:
        """Check if a path is exempt from authentication."""
        if path in self._exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in self._exempt_prefixes)

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        path = scope.get("path", "")
        if self._is_exempt(path):
            await self._app(scope, receive, send)
            return

        # The body is read twice: once for the credentials, once downstream.
        body = await _read_body(receive)
        request = Request(scope, _replay_receive(body, receive))
        outcome = await self._strategy.authenticate(await build_credential_request(request))

        if isinstance(outcome, Error):
            self._logger.error(
                "Strategy %s raised while authenticating %s",
                self._strategy.name,
                path,
                exc_info=outcome.cause,
            )
            await _send_json(send, 500, {"error": "Internal Server Error", "detail": "Authentication unavailable"})
            return

        if isinstance(outcome, Fail):
            self._logger.warning("Authentication failed for %s: %s", path, outcome.message)
            message = outcome.message
            if self._mask_failures and message in _MASKED_MESSAGES:
                message = "Invalid credentials"
            status = outcome.status or 401
            error = "Bad Request" if status == 400 else "Unauthorized"
            await _send_json(send, status, {"error": error, "detail": message})
            return

        token = auth_identity_var.set(outcome.identity)
        try:
            await self._app(scope, _replay_receive(body, receive), send)
        finally:
            auth_identity_var.reset(token)


async def _read_body(receive: Any) -> bytes:
    """Drain the request body from *receive*."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _replay_receive(body: bytes, receive: Any) -> Any:
    """Build a receive callable that yields *body* once, then defers to *receive*."""
    sent = False

    async def replay() -> dict[str, Any]:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


async def _send_json(send: Any, status: int, payload: dict[str, str]) -> None:
    """Send a JSON error response."""
    body = json.dumps(payload).encode()
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [
                [b"content-type", b"application/json"],
                [b"content-length", str(len(body)).encode()],
            ],
        }
    )
    await send({"type": "http.response.body", "body": body})
