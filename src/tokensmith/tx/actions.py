"""
Action variants supported by the runner.

Each variant validates its inputs when it is created and builds one
immutable Action. DApp operators add new operations by subclassing
ActionSpec.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional

from tokensmith.contracts import CLOCK_OBJECT_ID, ContractRefs
from tokensmith.errors import ActionBuildError, ErrorKind
from tokensmith.tx.action import Action, MoveArg, normalize_object_id, normalize_type_tag

DEFAULT_MINT_AMOUNT = 100_000_000
DEFAULT_EXPIRY_MS = 3_600_000


class ActionKind(str, Enum):
    """Variant tag of an action."""
    MINT = "mint"
    INIT_VAULT = "init_vault"
    WRITE_CALL = "write_call"


class OptionType(IntEnum):
    """Option kinds understood by the tokensmith module."""
    CALL = 0
    PUT = 1


def _require_refs(refs: ContractRefs, *names: str) -> None:
    """Fail if any of the named references is unset."""
    missing = [name for name in names if not getattr(refs, name)]
    if missing:
        raise ActionBuildError(f"Missing contract references: {', '.join(missing)}")


class ActionSpec(ABC):
    """
    Abstract base class for a submittable operation.

    Subclasses hold validated inputs and turn them into an Action.
    """

    kind: ActionKind

    @abstractmethod
    def build(self) -> Action:
        """
        Build the Action for this operation.

        Returns:
            Immutable Action descriptor
        """
        pass

    @property
    def hints(self) -> Dict[ErrorKind, str]:
        """Hint text for failure kinds, overriding the generic hints."""
        return {}


@dataclass(frozen=True)
class MintAction(ActionSpec):
    """Mint mock USDC with the treasury cap held by the signer."""

    package_id: str
    treasury_cap: str
    amount: int = DEFAULT_MINT_AMOUNT
    kind: ActionKind = field(default=ActionKind.MINT, init=False)

    def __post_init__(self):
        object.__setattr__(self, "package_id", normalize_object_id(self.package_id, "package id"))
        object.__setattr__(self, "treasury_cap", normalize_object_id(self.treasury_cap, "treasury cap"))
        object.__setattr__(self, "amount", MoveArg.u64(self.amount).value)

    @classmethod
    def from_refs(cls, refs: ContractRefs, amount: int = DEFAULT_MINT_AMOUNT) -> "MintAction":
        _require_refs(refs, "mock_coin_package", "usdc_treasury_cap")
        return cls(refs.mock_coin_package, refs.usdc_treasury_cap, amount)

    def build(self) -> Action:
        return Action.move_call(
            f"{self.package_id}::mock_usdc::mint",
            [MoveArg.object(self.treasury_cap), MoveArg.u64(self.amount)],
        )

    @property
    def hints(self) -> Dict[ErrorKind, str]:
        return {
            ErrorKind.OBJECT_NOT_FOUND: (
                "One or more referenced objects not found. "
                "Check your mock coin package ID and USDC treasury cap."
            ),
        }


@dataclass(frozen=True)
class InitVaultAction(ActionSpec):
    """
    Initialize an option vault on the marketplace.

    ``expire_ms`` is an absolute timestamp in milliseconds; callers derive
    it from the current time so that building stays deterministic.
    """

    package_id: str
    treasury_cap: str
    marketplace: str
    asset_type: str
    usdc_type: str
    option_coin_type: str
    expire_ms: int
    option_type: OptionType = OptionType.CALL
    price_numerator: int = 100
    price_denominator: int = 1
    asset_decimals: int = 8
    usdc_decimals: int = 6
    clock: str = CLOCK_OBJECT_ID
    kind: ActionKind = field(default=ActionKind.INIT_VAULT, init=False)

    def __post_init__(self):
        for name in ("package_id", "treasury_cap", "marketplace", "clock"):
            object.__setattr__(self, name, normalize_object_id(getattr(self, name), name))
        for name in ("asset_type", "usdc_type", "option_coin_type"):
            object.__setattr__(self, name, normalize_type_tag(getattr(self, name)))

        try:
            option_type = OptionType(MoveArg.u8(self.option_type).value)
        except ValueError as e:
            raise ActionBuildError(f"Invalid option type: {self.option_type!r}") from e
        object.__setattr__(self, "option_type", option_type)

        for name in ("expire_ms", "price_numerator", "price_denominator"):
            object.__setattr__(self, name, MoveArg.u64(getattr(self, name)).value)
        for name in ("asset_decimals", "usdc_decimals"):
            object.__setattr__(self, name, MoveArg.u8(getattr(self, name)).value)

        if self.price_denominator == 0:
            raise ActionBuildError("Price denominator must be non-zero")

    @classmethod
    def from_refs(cls, refs: ContractRefs, expire_ms: int, **params) -> "InitVaultAction":
        _require_refs(
            refs,
            "options_package",
            "option_treasury_cap",
            "marketplace",
            "asset_type",
            "usdc_type",
            "option_type",
        )
        return cls(
            package_id=refs.options_package,
            treasury_cap=refs.option_treasury_cap,
            marketplace=refs.marketplace,
            asset_type=refs.asset_type,
            usdc_type=refs.usdc_type,
            option_coin_type=refs.option_type,
            expire_ms=expire_ms,
            clock=refs.clock,
            **params,
        )

    def build(self) -> Action:
        return Action.move_call(
            f"{self.package_id}::tokensmith::init_option_vault",
            [
                MoveArg.object(self.clock),
                MoveArg.object(self.treasury_cap),
                MoveArg.u8(int(self.option_type)),
                MoveArg.u64(self.expire_ms),
                MoveArg.u64(self.price_numerator),
                MoveArg.u64(self.price_denominator),
                MoveArg.u8(self.asset_decimals),
                MoveArg.u8(self.usdc_decimals),
                MoveArg.object(self.marketplace),
            ],
            [self.asset_type, self.usdc_type, self.option_coin_type],
        )

    @property
    def hints(self) -> Dict[ErrorKind, str]:
        return {
            ErrorKind.OBJECT_NOT_FOUND: (
                "One or more referenced objects not found. "
                "Check your options package ID and option treasury cap."
            ),
            ErrorKind.TYPE_MISMATCH: (
                "Type arguments mismatch. Check your asset, USDC, and option coin types."
            ),
        }


@dataclass(frozen=True)
class WriteCallAction(ActionSpec):
    """Write a covered call option against an asset coin."""

    package_id: str
    marketplace: str
    vault_owner: str
    asset_coin: str
    asset_type: str
    usdc_type: str
    option_coin_type: str
    clock: str = CLOCK_OBJECT_ID
    kind: ActionKind = field(default=ActionKind.WRITE_CALL, init=False)

    def __post_init__(self):
        for name in ("package_id", "marketplace", "vault_owner", "asset_coin", "clock"):
            object.__setattr__(self, name, normalize_object_id(getattr(self, name), name))
        for name in ("asset_type", "usdc_type", "option_coin_type"):
            object.__setattr__(self, name, normalize_type_tag(getattr(self, name)))

    @classmethod
    def from_refs(
        cls,
        refs: ContractRefs,
        vault_owner: Optional[str] = None,
        asset_coin: Optional[str] = None,
    ) -> "WriteCallAction":
        if vault_owner is None:
            _require_refs(refs, "vault_owner")
        if asset_coin is None:
            _require_refs(refs, "asset_coin")
        _require_refs(refs, "options_package", "marketplace", "asset_type", "usdc_type", "option_type")
        return cls(
            package_id=refs.options_package,
            marketplace=refs.marketplace,
            vault_owner=vault_owner or refs.vault_owner,
            asset_coin=asset_coin or refs.asset_coin,
            asset_type=refs.asset_type,
            usdc_type=refs.usdc_type,
            option_coin_type=refs.option_type,
            clock=refs.clock,
        )

    def build(self) -> Action:
        return Action.move_call(
            f"{self.package_id}::tokensmith::write_covered_call",
            [
                MoveArg.object(self.marketplace),
                MoveArg.object(self.vault_owner),
                MoveArg.object(self.clock),
                MoveArg.object(self.asset_coin),
            ],
            [self.asset_type, self.usdc_type, self.option_coin_type],
        )

    @property
    def hints(self) -> Dict[ErrorKind, str]:
        return {
            ErrorKind.OBJECT_NOT_FOUND: (
                "One or more objects not found. "
                "Check your marketplace, vault owner, and asset coin IDs."
            ),
            ErrorKind.TYPE_MISMATCH: (
                "Type arguments mismatch. Check your asset, USDC, and option coin types."
            ),
        }
