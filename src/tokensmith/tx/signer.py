"""
Transaction Signer - handles transaction signing.

Manages the Ed25519 signing key and produces Sui user signatures over
transaction bytes.
"""

import base64
import binascii
import hashlib
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import bech32
import nacl.signing
import structlog

from tokensmith.config import RunnerConfig, get_config
from tokensmith.errors import ConfigurationError

logger = structlog.get_logger(__name__)

ED25519_FLAG = 0x00
PRIVATE_KEY_HRP = "suiprivkey"
SEED_LENGTH = 32

# Intent scope TransactionData, version V0, app id Sui.
TRANSACTION_INTENT = bytes([0, 0, 0])

_HEX_SEED = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


@dataclass(frozen=True)
class SignedTransaction:
    """Transaction bytes with the signatures authorizing them."""
    tx_bytes: str                   # base64 encoded TransactionData
    signatures: Tuple[str, ...]     # base64 serialized signatures


def decode_private_key(value: str) -> bytes:
    """
    Decode a private key into its 32-byte Ed25519 seed.

    Accepts ``suiprivkey1...`` Bech32 strings, base64 ``flag || seed``
    (the keystore format), base64 seeds and hex seeds.

    Raises:
        ConfigurationError: If the key cannot be decoded
    """
    key = (value or "").strip()
    if not key:
        raise ConfigurationError("No private key configured")

    if key.startswith(PRIVATE_KEY_HRP):
        hrp, data = bech32.bech32_decode(key)
        if hrp != PRIVATE_KEY_HRP or data is None:
            raise ConfigurationError("Malformed suiprivkey private key")
        raw = bytes(bech32.convertbits(data, 5, 8, False) or b"")
    elif _HEX_SEED.match(key):
        raw = bytes.fromhex(key[2:] if key.startswith("0x") else key)
    else:
        try:
            raw = base64.b64decode(key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("Private key is neither bech32, hex nor base64") from e

    if len(raw) == SEED_LENGTH + 1:
        if raw[0] != ED25519_FLAG:
            raise ConfigurationError(f"Unsupported key scheme flag: {raw[0]:#04x}")
        raw = raw[1:]

    if len(raw) != SEED_LENGTH:
        raise ConfigurationError(f"Private key must be {SEED_LENGTH} bytes, got {len(raw)}")

    return raw


def encode_private_key(seed: bytes) -> str:
    """Encode an Ed25519 seed as a ``suiprivkey1...`` string."""
    data = bech32.convertbits(bytes([ED25519_FLAG]) + seed, 8, 5)
    return bech32.bech32_encode(PRIVATE_KEY_HRP, data)


class TransactionSigner:
    """
    Handles transaction signing with the operator's key.

    Supports loading keys from:
    - ``suiprivkey`` Bech32 strings (as exported by the Sui CLI)
    - base64 keystore entries or hex seeds

    The key is loaded once per run and never changes afterwards.
    """

    def __init__(self, config: Optional[RunnerConfig] = None):
        """
        Initialize the transaction signer.

        Args:
            config: Runner configuration
        """
        self.config = config or get_config()
        self._signing_key: Optional[nacl.signing.SigningKey] = None
        self._public_key: Optional[bytes] = None
        self._address: Optional[str] = None

    def load_key(self, private_key: str) -> None:
        """
        Load signing key from an encoded private key.

        Args:
            private_key: suiprivkey, base64 or hex encoded key
        """
        self._set_seed(decode_private_key(private_key))
        logger.info("signing_key_loaded", address=self._address)

    def load_from_config(self) -> None:
        """Load signing key from configuration."""
        if not self.config.private_key:
            raise ConfigurationError(
                "No signing key configured. Set TOKENSMITH_PRIVATE_KEY or privatekey."
            )
        self.load_key(self.config.private_key)

    def _set_seed(self, seed: bytes) -> None:
        self._signing_key = nacl.signing.SigningKey(seed)
        self._public_key = bytes(self._signing_key.verify_key)
        self._address = "0x" + _blake2b_256(bytes([ED25519_FLAG]) + self._public_key).hex()

    @property
    def address(self) -> Optional[str]:
        """Get the signer's Sui address."""
        return self._address

    @property
    def public_key(self) -> Optional[bytes]:
        """Get the raw Ed25519 public key."""
        return self._public_key

    @property
    def is_loaded(self) -> bool:
        """Check if a signing key is loaded."""
        return self._signing_key is not None

    def sign_transaction(self, tx_bytes: bytes) -> SignedTransaction:
        """
        Sign transaction bytes.

        Args:
            tx_bytes: BCS serialized TransactionData

        Returns:
            Signed transaction ready for submission
        """
        if not self._signing_key:
            raise RuntimeError("No signing key loaded")

        digest = _blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self._signing_key.sign(digest).signature

        serialized = bytes([ED25519_FLAG]) + signature + self._public_key

        logger.debug("transaction_signed", digest=digest.hex()[:16] + "...")

        return SignedTransaction(
            tx_bytes=base64.b64encode(tx_bytes).decode(),
            signatures=(base64.b64encode(serialized).decode(),),
        )

    def export_private_key(self) -> str:
        """Export the loaded key as a ``suiprivkey`` string."""
        if not self._signing_key:
            raise RuntimeError("No signing key loaded")
        return encode_private_key(bytes(self._signing_key))


def generate_key(config: Optional[RunnerConfig] = None) -> TransactionSigner:
    """
    Generate a new random signing key.

    The key is not persisted; use ``export_private_key`` to keep it.

    Returns:
        TransactionSigner with a new random key
    """
    signer = TransactionSigner(config)
    signer._set_seed(bytes(nacl.signing.SigningKey.generate()))

    logger.warning("key_generated", address=signer.address)

    return signer
