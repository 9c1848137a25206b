"""Username/password verification strategy."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from pythia_auth._utils import maybe_await
from pythia_auth.credentials import extract_credentials
from pythia_auth.outcome import (
    BAD_REQUEST,
    INCORRECT_PASSWORD,
    INCORRECT_USERNAME,
    MISSING_CREDENTIALS,
    Error,
    Fail,
    Outcome,
    OutcomeHandler,
    Success,
)
from pythia_auth.protocol import Resolver, Strategy


@dataclass(frozen=True)
class StrategyOptions:
    """Selects where a strategy finds the credentials.

    Attributes:
        username_field: Field holding the username. Supports ``a[b]`` nesting.
        password_field: Field holding the password.
        name: Name a host registers the strategy under.
    """

    username_field: str = "username"
    password_field: str = "password"
    name: str = "pythia"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> StrategyOptions:
        """Build options from a mapping; empty values fall back to defaults."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise TypeError(f"Unknown strategy options: {sorted(unknown)}")
        return cls(**{key: value for key, value in values.items() if value})


class PythiaStrategy:
    """Authenticates requests carrying a username and password.

    The strategy resolves the username to an identity through the
    injected *resolver*, then asks that identity to compare the submitted
    password. Each call to :meth:`authenticate` returns exactly one
    ``Outcome``; exceptions raised by the resolver or the comparator are
    returned as ``Error`` rather than propagated.

    Args:
        options: A ``StrategyOptions``, a mapping of its fields, or the
            resolver itself when no options are needed.
        resolver: Callable mapping a username to an identity, or to a
            falsy value when the user is unknown. May be sync or async.
        logger: Logger for diagnostics. Defaults to the module logger.

    Raises:
        TypeError: If no callable resolver is supplied.

    Example::

        async def find_user(username):
            return await users.get(username)

        strategy = PythiaStrategy(find_user)
        outcome = await strategy.authenticate(request)
    """

    def __init__(
        self,
        options: StrategyOptions | Mapping[str, Any] | Resolver | None = None,
        resolver: Resolver | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if callable(options) and resolver is None:
            resolver, options = options, None
        if resolver is None or not callable(resolver):
            raise TypeError("PythiaStrategy requires a user lookup callback")

        if options is None:
            options = StrategyOptions()
        elif isinstance(options, Mapping):
            options = StrategyOptions.from_mapping(options)
        elif not isinstance(options, StrategyOptions):
            raise TypeError(f"Unsupported options type: {type(options).__name__}")

        self._options = options
        self._resolver = resolver
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self.name = options.name
        self._logger.debug("Initializing %s strategy", self.name)

    @property
    def options(self) -> StrategyOptions:
        return self._options

    async def authenticate(self, request: Any) -> Outcome:
        """Verify the credentials carried by *request*."""
        try:
            credentials = extract_credentials(
                request,
                self._options.username_field,
                self._options.password_field,
            )
        except Exception as exc:
            self._logger.debug("Credential extraction failed", exc_info=True)
            return Error(exc)

        if credentials is None:
            return Fail(MISSING_CREDENTIALS, BAD_REQUEST)

        try:
            identity = await maybe_await(self._resolver(credentials.identifier))
        except Exception as exc:
            self._logger.debug("User lookup failed for %r", credentials.identifier, exc_info=True)
            return Error(exc)

        if not identity:
            return Fail(INCORRECT_USERNAME)

        try:
            matched = await maybe_await(identity.compare_secret(credentials.secret))
        except Exception as exc:
            self._logger.debug("Password comparison failed for %r", credentials.identifier, exc_info=True)
            return Error(exc)

        if not matched:
            return Fail(INCORRECT_PASSWORD)

        self._logger.debug("Authenticated %r", credentials.identifier)
        return Success(identity)

    async def run(self, request: Any, handler: OutcomeHandler) -> None:
        """Authenticate *request* and deliver the outcome to *handler*."""
        outcome = await self.authenticate(request)
        outcome.deliver(handler)


# Verify protocol compliance at import time
assert isinstance(PythiaStrategy(lambda username: None), Strategy)
