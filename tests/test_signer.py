"""
Test suite for key loading and transaction signing.
"""

import base64
import hashlib
import re

import nacl.signing
import pytest

from tokensmith.config import RunnerConfig
from tokensmith.errors import ConfigurationError
from tokensmith.tx.signer import (
    TRANSACTION_INTENT,
    TransactionSigner,
    decode_private_key,
    encode_private_key,
    generate_key,
)

from conftest import TEST_SEED_HEX

SEED = bytes.fromhex(TEST_SEED_HEX)


class TestKeyDecoding:
    """Tests for private key formats."""

    def test_hex_seed(self):
        assert decode_private_key(TEST_SEED_HEX) == SEED
        assert decode_private_key("0x" + TEST_SEED_HEX) == SEED

    def test_base64_keystore_entry(self):
        encoded = base64.b64encode(b"\x00" + SEED).decode()

        assert decode_private_key(encoded) == SEED

    def test_suiprivkey(self):
        encoded = encode_private_key(SEED)

        assert encoded.startswith("suiprivkey1")
        assert decode_private_key(encoded) == SEED

    def test_unsupported_scheme(self):
        encoded = base64.b64encode(b"\x01" + SEED).decode()

        with pytest.raises(ConfigurationError, match="Unsupported key scheme"):
            decode_private_key(encoded)

    def test_wrong_length(self):
        with pytest.raises(ConfigurationError, match="32 bytes"):
            decode_private_key(base64.b64encode(b"short").decode())

    def test_garbage(self):
        with pytest.raises(ConfigurationError):
            decode_private_key("definitely not a key!")

    def test_corrupted_suiprivkey(self):
        encoded = encode_private_key(SEED)
        corrupted = encoded[:-1] + ("q" if encoded[-1] != "q" else "p")

        with pytest.raises(ConfigurationError, match="Malformed"):
            decode_private_key(corrupted)

    def test_empty(self):
        with pytest.raises(ConfigurationError, match="No private key"):
            decode_private_key("")


class TestTransactionSigner:
    """Tests for transaction signing functionality."""

    def test_generate_key(self):
        signer = generate_key(RunnerConfig(private_key=None))

        assert signer.is_loaded is True
        assert re.fullmatch(r"0x[0-9a-f]{64}", signer.address)

    def test_address_derivation(self, test_signer):
        expected = hashlib.blake2b(b"\x00" + test_signer.public_key, digest_size=32).hexdigest()

        assert test_signer.address == "0x" + expected

    def test_same_key_same_address(self, test_config):
        first = TransactionSigner(test_config)
        first.load_key(TEST_SEED_HEX)
        second = TransactionSigner(test_config)
        second.load_key(encode_private_key(SEED))

        assert first.address == second.address

    def test_export_round_trip(self, test_signer):
        assert decode_private_key(test_signer.export_private_key()) == SEED

    def test_load_from_config(self):
        signer = TransactionSigner(RunnerConfig(private_key=TEST_SEED_HEX))
        signer.load_from_config()

        assert signer.is_loaded

    def test_load_from_config_without_key(self):
        signer = TransactionSigner(RunnerConfig(private_key=None))

        with pytest.raises(ConfigurationError, match="No signing key configured"):
            signer.load_from_config()

    def test_signer_not_loaded(self, test_config):
        signer = TransactionSigner(test_config)

        assert signer.is_loaded is False

        with pytest.raises(RuntimeError, match="No signing key loaded"):
            signer.sign_transaction(b"tx")

    def test_sign_transaction(self, test_signer):
        tx_bytes = b"\x00\x01transaction-data"

        signed = test_signer.sign_transaction(tx_bytes)

        assert base64.b64decode(signed.tx_bytes) == tx_bytes
        assert len(signed.signatures) == 1

        raw = base64.b64decode(signed.signatures[0])
        assert len(raw) == 1 + 64 + 32
        assert raw[0] == 0x00
        assert raw[65:] == test_signer.public_key

        digest = hashlib.blake2b(TRANSACTION_INTENT + tx_bytes, digest_size=32).digest()
        verify_key = nacl.signing.VerifyKey(raw[65:])
        assert verify_key.verify(digest, raw[1:65]) == digest
