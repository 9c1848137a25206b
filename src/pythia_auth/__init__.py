"""pythia-auth: username/password verification strategy with a tri-state outcome."""

from __future__ import annotations

import logging

from pythia_auth.credentials import CredentialRequest, Credentials, extract_credentials, lookup
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
from pythia_auth.protocol import Resolver, Strategy, SupportsCompareSecret
from pythia_auth.strategy import PythiaStrategy, StrategyOptions

__all__ = [
    # Strategy
    "PythiaStrategy",
    "StrategyOptions",
    # Protocols
    "Strategy",
    "SupportsCompareSecret",
    "Resolver",
    # Outcomes
    "Outcome",
    "OutcomeHandler",
    "Success",
    "Fail",
    "Error",
    # Credentials
    "Credentials",
    "CredentialRequest",
    "extract_credentials",
    "lookup",
    # Constants
    "BAD_REQUEST",
    "MISSING_CREDENTIALS",
    "INCORRECT_USERNAME",
    "INCORRECT_PASSWORD",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
