"""Tri-state authentication outcomes: Success, Fail, Error."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

# Transport status hint attached to input errors.
BAD_REQUEST = 400

MISSING_CREDENTIALS = "Missing credentials"
INCORRECT_USERNAME = "Incorrect username."
INCORRECT_PASSWORD = "Incorrect password."


@runtime_checkable
class OutcomeHandler(Protocol):
    """Receiver for the three emission points of a strategy.

    Exactly one method is invoked per authentication attempt. Return
    values are ignored.
    """

    def success(self, identity: Any) -> None: ...

    def fail(self, message: str, status: int | None) -> None: ...

    def error(self, cause: BaseException) -> None: ...


@dataclass(frozen=True)
class Success:
    """Credentials are valid.

    Attributes:
        identity: The record returned by the resolver.
    """

    identity: Any

    def deliver(self, handler: OutcomeHandler) -> None:
        handler.success(self.identity)


@dataclass(frozen=True)
class Fail:
    """Credentials are missing or incorrect.

    Attributes:
        message: Human-readable reason.
        status: Optional transport status hint. Only set for malformed
            requests; hosts apply their own default otherwise.
    """

    message: str
    status: int | None = None

    def deliver(self, handler: OutcomeHandler) -> None:
        handler.fail(self.message, self.status)


@dataclass(frozen=True)
class Error:
    """The resolver, the comparator or the strategy itself raised.

    Says nothing about the validity of the credentials.
    """

    cause: BaseException

    def deliver(self, handler: OutcomeHandler) -> None:
        handler.error(self.cause)


Outcome = Union[Success, Fail, Error]
