"""
Named on-chain references for the tokensmith deployment.

Package ids, shared objects and coin types used by the actions, with
per-network defaults that can be overridden from the environment.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from tokensmith.config import SuiNetwork

# Sui system clock shared object.
CLOCK_OBJECT_ID = "0x6"


# =============================================================================
# Network-specific references
# =============================================================================

# Testnet deployment used by the original operator scripts
TESTNET_REFS = {
    "options_package": "0xd82198a8369825beb19a2c4c5209bbe33b1b6dcd320c1b2e7145a54ced05f8b6",
    "marketplace": "0x6231761053767f8680abc0ae9570483d9aae0fb19f6388c9749dd9574d6afa54",
    "option_treasury_cap": "0xb7a34897a47a39cb8576efcd504fa129300c9a78ca1d83b2903bb19adf2757bf",
    "mock_coin_package": "0x0ba87d5477f2ff33f9c51b479329a73736e0f1eb847db96ab902a80ef09ae9eb",
    "usdc_treasury_cap": "0x353cd8638d91ce0f2169c13ba8d1334d6b72a8927681261caba2268fd8a916f0",
    "vault_owner": "0xe34b00924a15146dc156d5160f03f387ff927b1c2e1bd945e20d566acbdacdaa",
    "asset_coin": "0x44c2eafa033c9c08f684fb0578b5175aec231b99933b3a324f70db300fc65130",
    "asset_type": "0x0ba87d5477f2ff33f9c51b479329a73736e0f1eb847db96ab902a80ef09ae9eb::mock_coin::MOCK_COIN",
    "usdc_type": "0x0ba87d5477f2ff33f9c51b479329a73736e0f1eb847db96ab902a80ef09ae9eb::mock_usdc::MOCK_USDC",
    "option_type": "0x1324676a00603e868b87d29997926e2bc5015889a986dc857ee84543a1cd0ead::mock_option::MOCK_OPTION",
}

# Other networks have no deployment yet; set values via TOKENSMITH_REF_*
EMPTY_REFS = {name: "" for name in TESTNET_REFS}

NETWORK_REFS = {
    SuiNetwork.TESTNET: TESTNET_REFS,
    SuiNetwork.MAINNET: EMPTY_REFS,
    SuiNetwork.DEVNET: EMPTY_REFS,
    SuiNetwork.LOCALNET: EMPTY_REFS,
}


class ContractRefOverrides(BaseSettings):
    """
    Reference overrides read from ``TOKENSMITH_REF_*`` variables.

    Unset fields keep the network default.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOKENSMITH_REF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    options_package: Optional[str] = None
    marketplace: Optional[str] = None
    option_treasury_cap: Optional[str] = None
    mock_coin_package: Optional[str] = None
    usdc_treasury_cap: Optional[str] = None
    vault_owner: Optional[str] = None
    asset_coin: Optional[str] = None
    asset_type: Optional[str] = None
    usdc_type: Optional[str] = None
    option_type: Optional[str] = None
    clock: Optional[str] = None


@dataclass(frozen=True)
class ContractRefs:
    """
    Resolved set of named references.

    Attributes:
        options_package: Package publishing the ``tokensmith`` module
        marketplace: Shared options marketplace object
        option_treasury_cap: Treasury cap of the option coin
        mock_coin_package: Package publishing the mock coins
        usdc_treasury_cap: Treasury cap of the mock USDC coin
        vault_owner: Vault owner capability object
        asset_coin: Asset coin deposited as collateral
        asset_type: Asset coin type tag
        usdc_type: Mock USDC coin type tag
        option_type: Option coin type tag
        clock: Clock shared object
    """

    options_package: str = ""
    marketplace: str = ""
    option_treasury_cap: str = ""
    mock_coin_package: str = ""
    usdc_treasury_cap: str = ""
    vault_owner: str = ""
    asset_coin: str = ""
    asset_type: str = ""
    usdc_type: str = ""
    option_type: str = ""
    clock: str = CLOCK_OBJECT_ID

    @classmethod
    def for_network(cls, network: SuiNetwork) -> "ContractRefs":
        """Get the built-in references for a network."""
        return cls(**NETWORK_REFS.get(network, EMPTY_REFS))

    @classmethod
    def from_env(
        cls,
        network: SuiNetwork = SuiNetwork.TESTNET,
        overrides: Optional[ContractRefOverrides] = None,
    ) -> "ContractRefs":
        """
        Resolve references for a network, applying environment overrides.

        Each field can be overridden with ``TOKENSMITH_REF_<FIELD>``, set
        in the process environment or in ``.env``.

        Args:
            network: Network whose defaults are used
            overrides: Loaded overrides (read from the environment if omitted)

        Returns:
            Resolved references
        """
        overrides = overrides or ContractRefOverrides()
        values = {
            name: value.strip()
            for name, value in overrides.model_dump(exclude_none=True).items()
            if value.strip()
        }

        return replace(cls.for_network(network), **values)

    def missing(self) -> list:
        """Names of references that are not set."""
        return [f.name for f in fields(self) if not getattr(self, f.name)]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
