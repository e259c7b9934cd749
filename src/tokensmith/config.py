"""
Configuration management for tokensmith.

Supports configuration via environment variables and .env files.
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SuiNetwork(str, Enum):
    """Sui network types."""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCALNET = "localnet"


FULLNODE_URLS = {
    SuiNetwork.MAINNET: "https://fullnode.mainnet.sui.io:443",
    SuiNetwork.TESTNET: "https://fullnode.testnet.sui.io:443",
    SuiNetwork.DEVNET: "https://fullnode.devnet.sui.io:443",
    SuiNetwork.LOCALNET: "http://127.0.0.1:9000",
}

SUI_COIN_TYPE = "0x2::sui::SUI"


class RunnerConfig(BaseSettings):
    """
    Configuration settings for the transaction runner.

    All settings can be configured via environment variables with the
    TOKENSMITH_ prefix. The signing key is also read from the bare
    ``privatekey`` variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOKENSMITH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Network settings
    network: SuiNetwork = Field(
        default=SuiNetwork.TESTNET,
        description="Sui network to connect to"
    )
    rpc_url: Optional[str] = Field(
        default=None,
        description="Custom fullnode JSON-RPC URL (optional)"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single fullnode request"
    )

    # Wallet settings
    private_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("private_key", "tokensmith_private_key", "privatekey"),
        description="Ed25519 private key (suiprivkey bech32, base64 or hex)"
    )

    # Transaction settings
    gas_budget: int = Field(
        default=10_000_000,
        gt=0,
        description="Maximum gas (in MIST) a submission may consume"
    )
    fee_coin_type: str = Field(
        default=SUI_COIN_TYPE,
        description="Coin type used to pay fees, checked before submission"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    @property
    def fullnode_url(self) -> str:
        """Get the fullnode URL based on network."""
        if self.rpc_url:
            return self.rpc_url
        return FULLNODE_URLS[self.network]


# Global config instance
_config: Optional[RunnerConfig] = None


def get_config() -> RunnerConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = RunnerConfig()
    return _config


def set_config(config: RunnerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
