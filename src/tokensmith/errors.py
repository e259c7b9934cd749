"""
Error taxonomy and failure classification.

Submission failures are classified by matching substrings of the
underlying error message. The mapping lives in one table so that
upstream wording changes only touch ``KNOWN_ERRORS``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class TokensmithError(Exception):
    """Base class for all tokensmith errors."""
    pass


class ConfigurationError(TokensmithError):
    """Raised when the signing key or other settings are missing or invalid."""
    pass


class InsufficientFundsError(TokensmithError):
    """Raised when the preflight check finds a zero fee-coin balance."""

    def __init__(self, address: str, coin_type: str):
        super().__init__(
            f"Wallet {address} has no {coin_type} balance. "
            "Please get some from the faucet first."
        )
        self.address = address
        self.coin_type = coin_type


class ActionBuildError(TokensmithError, ValueError):
    """Raised when an action cannot be constructed from its inputs."""
    pass


class NetworkError(TokensmithError):
    """Raised for any failure reported by the ledger client."""
    pass


class NodeConnectionError(NetworkError):
    """Raised when the fullnode cannot be reached or answers with an RPC error."""
    pass


class TransactionSubmitError(NetworkError):
    """Raised when a transaction is rejected or fails during execution."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        digest: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.digest = digest


class ErrorKind(str, Enum):
    """Known submission failure kinds."""
    INVALID_OPTION_TYPE = "invalid_option_type"
    INSUFFICIENT_GAS = "insufficient_gas"
    INVALID_SIGNATURE = "invalid_signature"
    OBJECT_NOT_FOUND = "object_not_found"
    TYPE_MISMATCH = "type_mismatch"
    UNCLASSIFIED = "unclassified"


# Checked in order, first match wins. Needles are lower case.
KNOWN_ERRORS: Tuple[Tuple[ErrorKind, Tuple[str, ...], str], ...] = (
    (
        ErrorKind.INVALID_OPTION_TYPE,
        ("eoptiontype",),
        "Invalid option type. Must be a CALL option.",
    ),
    (
        ErrorKind.INSUFFICIENT_GAS,
        ("insufficient gas", "insufficientgas"),
        "Transaction failed due to insufficient gas. Try increasing the gas budget.",
    ),
    (
        ErrorKind.INVALID_SIGNATURE,
        ("authority signature",),
        "Transaction failed due to invalid signature. Check your keypair.",
    ),
    (
        ErrorKind.OBJECT_NOT_FOUND,
        ("object not found", "could not find the referenced object"),
        "One or more referenced objects not found. Check your object IDs.",
    ),
    (
        ErrorKind.TYPE_MISMATCH,
        ("type mismatch", "typemismatch"),
        "Type arguments mismatch. Check your coin type arguments.",
    ),
)


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a failure message."""
    kind: ErrorKind
    hint: Optional[str] = None


def classify_message(message: str) -> ErrorKind:
    """Map an error message onto a known failure kind."""
    text = (message or "").lower()
    for kind, needles, _ in KNOWN_ERRORS:
        if any(needle in text for needle in needles):
            return kind
    return ErrorKind.UNCLASSIFIED


def default_hint(kind: ErrorKind) -> Optional[str]:
    """Get the generic hint for a failure kind."""
    for known_kind, _, hint in KNOWN_ERRORS:
        if known_kind == kind:
            return hint
    return None


def classify(
    message: str,
    hints: Optional[Dict[ErrorKind, str]] = None,
) -> Classification:
    """
    Classify a failure message and resolve its hint.

    Args:
        message: Underlying error message
        hints: Action-specific hint text overriding the defaults

    Returns:
        Classification with the matched kind and at most one hint
    """
    kind = classify_message(message)
    if kind == ErrorKind.UNCLASSIFIED:
        return Classification(kind)

    hint = (hints or {}).get(kind) or default_hint(kind)
    return Classification(kind, hint)
