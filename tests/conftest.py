"""Shared test fixtures for pythia-auth tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

# ---------------------------------------------------------------------------
# Lightweight identity records used by resolver stubs.
# ---------------------------------------------------------------------------


@dataclass
class User:
    """Identity with a synchronous comparator that records its calls."""

    username: str
    password: str
    compared: list[str] = field(default_factory=list)

    def compare_secret(self, candidate: str) -> bool:
        self.compared.append(candidate)
        return candidate == self.password


@dataclass
class AsyncUser:
    """Identity with an asynchronous comparator."""

    username: str
    password: str
    compared: list[str] = field(default_factory=list)

    async def compare_secret(self, candidate: str) -> bool:
        self.compared.append(candidate)
        return candidate == self.password


class UserStore:
    """In-memory resolver that records the identifiers it was asked for."""

    def __init__(self, *users: User | AsyncUser) -> None:
        self._users = {u.username: u for u in users}
        self.lookups: list[str] = []

    async def __call__(self, username: str) -> User | AsyncUser | None:
        self.lookups.append(username)
        return self._users.get(username)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def alice() -> User:
    return User(username="alice", password="right")


@pytest.fixture
def store(alice: User) -> UserStore:
    return UserStore(alice)
