"""Protocols for pluggable strategies and the identities they verify."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Union, runtime_checkable

from pythia_auth.outcome import Outcome


@runtime_checkable
class SupportsCompareSecret(Protocol):
    """An identity record able to check a candidate secret.

    The comparison may be synchronous or return an awaitable.
    """

    def compare_secret(self, candidate: str) -> bool | Awaitable[bool]: ...


# Maps an identifier to an identity, or to a falsy value when unknown.
Resolver = Callable[[str], Union[Any, Awaitable[Any]]]


@runtime_checkable
class Strategy(Protocol):
    """Protocol for authentication strategies.

    Hosts hold strategies polymorphically through this protocol and
    dispatch on the returned ``Outcome``.
    """

    name: str

    async def authenticate(self, request: Any) -> Outcome:
        """Authenticate a request.

        Args:
            request: An object exposing ``body`` and ``query`` mappings,
                or a mapping with ``"body"`` and ``"query"`` keys.

        Returns:
            Exactly one of ``Success``, ``Fail`` or ``Error``.
        """
        ...
