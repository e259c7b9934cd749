"""
Test suite for failure classification.
"""

import pytest

from tokensmith.errors import (
    KNOWN_ERRORS,
    ActionBuildError,
    Classification,
    ErrorKind,
    InsufficientFundsError,
    NetworkError,
    NodeConnectionError,
    TransactionSubmitError,
    classify,
    classify_message,
)


class TestClassifyMessage:
    """Tests for substring classification."""

    @pytest.mark.parametrize(
        "message, kind",
        [
            ("MoveAbort in tokensmith: EOptionType", ErrorKind.INVALID_OPTION_TYPE),
            ("Transaction failed: insufficient gas for execution", ErrorKind.INSUFFICIENT_GAS),
            ("InsufficientGas", ErrorKind.INSUFFICIENT_GAS),
            ("Invalid user signature: authority signature mismatch", ErrorKind.INVALID_SIGNATURE),
            ("object not found: 0x44c2", ErrorKind.OBJECT_NOT_FOUND),
            ("Could not find the referenced object 0x44c2 at version None", ErrorKind.OBJECT_NOT_FOUND),
            ("type mismatch for argument 0", ErrorKind.TYPE_MISMATCH),
            ("connection reset by peer", ErrorKind.UNCLASSIFIED),
            ("", ErrorKind.UNCLASSIFIED),
        ],
    )
    def test_known_messages(self, message, kind):
        assert classify_message(message) == kind

    def test_case_insensitive(self):
        assert classify_message("INSUFFICIENT GAS") == ErrorKind.INSUFFICIENT_GAS

    def test_first_match_wins(self):
        message = "EOptionType raised after insufficient gas and object not found"

        assert classify_message(message) == ErrorKind.INVALID_OPTION_TYPE

    def test_every_known_kind_has_a_hint(self):
        kinds = {kind for kind, _, hint in KNOWN_ERRORS if hint}

        assert kinds == set(ErrorKind) - {ErrorKind.UNCLASSIFIED}


class TestClassify:
    """Tests for hint resolution."""

    def test_gas_hint(self):
        result = classify("insufficient gas")

        assert result.kind == ErrorKind.INSUFFICIENT_GAS
        assert "gas budget" in result.hint

    def test_pure_function_of_message(self):
        # Same text, different exception types and fields
        a = TransactionSubmitError("insufficient gas", error_code=-32002, digest="abc")
        b = NodeConnectionError("insufficient gas")

        assert classify(str(a)) == classify(str(b))

    def test_action_hint_override(self):
        hints = {ErrorKind.OBJECT_NOT_FOUND: "Check the treasury cap."}

        assert classify("object not found", hints) == Classification(
            ErrorKind.OBJECT_NOT_FOUND, "Check the treasury cap."
        )
        # Overrides only apply to their own kind
        assert classify("type mismatch", hints).hint == classify("type mismatch").hint

    def test_unclassified_has_no_hint(self):
        result = classify("something else", {ErrorKind.UNCLASSIFIED: "ignored"})

        assert result.kind == ErrorKind.UNCLASSIFIED
        assert result.hint is None


class TestErrorTypes:
    """Tests for the exception hierarchy."""

    def test_network_errors(self):
        assert issubclass(NodeConnectionError, NetworkError)
        assert issubclass(TransactionSubmitError, NetworkError)

    def test_action_build_error_is_value_error(self):
        assert issubclass(ActionBuildError, ValueError)

    def test_insufficient_funds_message(self):
        error = InsufficientFundsError("0xabc", "0x2::sui::SUI")

        assert error.address == "0xabc"
        assert "faucet" in str(error)
