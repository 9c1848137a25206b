"""Credential extraction from body-like and query-like request sources."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """A username/password pair, both non-empty."""

    identifier: str
    secret: str


@dataclass(frozen=True)
class CredentialRequest:
    """Minimal request shape consumed by strategies.

    Attributes:
        body: Submitted form or JSON fields.
        query: Query string parameters.
    """

    body: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)


def lookup(source: Any, field_name: str) -> Any:
    """Look up *field_name* in *source*, following ``a[b][c]`` nesting.

    A key equal to *field_name* itself wins over the nested chain, so flat
    form fields named ``user[name]`` resolve too.

    Returns the first non-mapping value reached along the key chain, or
    None when the source is missing, a key is absent, or the chain ends
    on a mapping.
    """
    if source is None:
        return None
    if isinstance(source, Mapping) and field_name in source:
        value = source[field_name]
        if not isinstance(value, Mapping):
            return value
    chain = field_name.replace("]", "").split("[")
    current = source
    for key in chain:
        if not isinstance(current, Mapping) or key not in current:
            return None
        value = current[key]
        if not isinstance(value, Mapping):
            return value
        current = value
    return None


def _source(request: Any, name: str) -> Any:
    if isinstance(request, Mapping):
        return request.get(name)
    return getattr(request, name, None)


def _first_present(request: Any, field_name: str) -> Any:
    for name in ("body", "query"):
        value = lookup(_source(request, name), field_name)
        if isinstance(value, str) and value:
            return value
    return None


def extract_credentials(request: Any, username_field: str, password_field: str) -> Credentials | None:
    """Read credentials from *request*, body first, then query.

    Returns None if either field is empty, not a string, or absent in
    both sources.
    """
    identifier = _first_present(request, username_field)
    secret = _first_present(request, password_field)
    if not identifier or not secret:
        return None
    return Credentials(identifier=identifier, secret=secret)
