"""
Action descriptor - one Move call to submit.

An Action is built locally from validated arguments and never touches
the network. Descriptors are immutable; the same target, arguments and
type arguments always produce an equal Action.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Tuple, Union

from tokensmith.errors import ActionBuildError

_HEX_ID = re.compile(r"^0x([0-9a-fA-F]{1,64})$")
_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
_TYPE_TAG = re.compile(
    rf"^(0x[0-9a-fA-F]{{1,64}})::({_IDENTIFIER})::({_IDENTIFIER})(<.+>)?$"
)
_TARGET = re.compile(rf"^(0x[0-9a-fA-F]{{1,64}})::({_IDENTIFIER})::({_IDENTIFIER})$")
_DIGITS = re.compile(r"^[0-9]+$")


class ArgKind(str, Enum):
    """Primitive kinds a Move call argument can take."""
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    BOOL = "bool"
    ADDRESS = "address"
    OBJECT = "object"
    STRING = "string"


_INT_BITS = {
    ArgKind.U8: 8,
    ArgKind.U16: 16,
    ArgKind.U32: 32,
    ArgKind.U64: 64,
    ArgKind.U128: 128,
    ArgKind.U256: 256,
}

# Integers wider than this are sent as decimal strings.
_JSON_NUMBER_BITS = 32


def normalize_object_id(value: Any, what: str = "object id") -> str:
    """
    Normalize a 0x-prefixed hex id to its full 32-byte form.

    Raises:
        ActionBuildError: If the value is not a hex id of at most 32 bytes
    """
    if not isinstance(value, str):
        raise ActionBuildError(f"Invalid {what}: expected hex string, got {value!r}")

    match = _HEX_ID.match(value.strip())
    if not match:
        raise ActionBuildError(f"Invalid {what}: {value!r}")

    return "0x" + match.group(1).lower().rjust(64, "0")


def normalize_type_tag(value: Any) -> str:
    """
    Validate a ``0xADDR::module::Name`` type tag and normalize its address.

    Raises:
        ActionBuildError: If the value is not a struct type tag
    """
    if not isinstance(value, str):
        raise ActionBuildError(f"Invalid type argument: {value!r}")

    match = _TYPE_TAG.match(value.strip())
    if not match:
        raise ActionBuildError(f"Invalid type argument: {value!r}")

    address, module, name, generics = match.groups()
    return f"{normalize_object_id(address, 'type address')}::{module}::{name}{generics or ''}"


def _parse_unsigned(kind: ArgKind, value: Any) -> int:
    """Parse and range-check an unsigned integer literal."""
    if isinstance(value, bool):
        raise ActionBuildError(f"Invalid {kind.value} value: {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS.match(value.strip()):
        number = int(value.strip())
    else:
        raise ActionBuildError(f"Invalid {kind.value} value: {value!r} is not a non-negative integer")

    bits = _INT_BITS[kind]
    if number < 0 or number >= 1 << bits:
        raise ActionBuildError(f"{kind.value} value out of range: {number}")

    return number


@dataclass(frozen=True)
class MoveArg:
    """A typed positional argument of a Move call."""

    kind: ArgKind
    value: Union[int, bool, str]

    def __post_init__(self):
        kind = ArgKind(self.kind)
        object.__setattr__(self, "kind", kind)

        if kind in _INT_BITS:
            value = _parse_unsigned(kind, self.value)
        elif kind == ArgKind.BOOL:
            if not isinstance(self.value, bool):
                raise ActionBuildError(f"Invalid bool value: {self.value!r}")
            value = self.value
        elif kind in (ArgKind.ADDRESS, ArgKind.OBJECT):
            value = normalize_object_id(self.value, kind.value)
        else:
            if not isinstance(self.value, str):
                raise ActionBuildError(f"Invalid string value: {self.value!r}")
            value = self.value

        object.__setattr__(self, "value", value)

    @classmethod
    def u8(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U8, value)

    @classmethod
    def u16(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U16, value)

    @classmethod
    def u32(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U32, value)

    @classmethod
    def u64(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U64, value)

    @classmethod
    def u128(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U128, value)

    @classmethod
    def u256(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.U256, value)

    @classmethod
    def bool(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.BOOL, value)

    @classmethod
    def address(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.ADDRESS, value)

    @classmethod
    def object(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.OBJECT, value)

    @classmethod
    def string(cls, value: Any) -> "MoveArg":
        return cls(ArgKind.STRING, value)

    def to_json(self) -> Any:
        """Encode as a JSON-RPC ``SuiJsonValue``."""
        bits = _INT_BITS.get(self.kind)
        if bits is not None and bits > _JSON_NUMBER_BITS:
            return str(self.value)
        return self.value


@dataclass(frozen=True)
class MoveTarget:
    """Fully qualified Move function: ``package::module::function``."""

    package: str
    module: str
    function: str

    @classmethod
    def parse(cls, target: str) -> "MoveTarget":
        """
        Parse a ``package::module::function`` string.

        Raises:
            ActionBuildError: If the target is malformed
        """
        match = _TARGET.match(target.strip()) if isinstance(target, str) else None
        if not match:
            raise ActionBuildError(f"Invalid call target: {target!r}")

        package, module, function = match.groups()
        return cls(normalize_object_id(package, "package id"), module, function)

    def __str__(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


@dataclass(frozen=True)
class Action:
    """
    One Move call request.

    Attributes:
        target: Function being called
        arguments: Ordered, typed positional arguments
        type_arguments: Ordered type parameters (normalized type tags)
    """

    target: MoveTarget
    arguments: Tuple[MoveArg, ...] = field(default_factory=tuple)
    type_arguments: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if isinstance(self.target, str):
            object.__setattr__(self, "target", MoveTarget.parse(self.target))

        arguments = tuple(self.arguments)
        for arg in arguments:
            if not isinstance(arg, MoveArg):
                raise ActionBuildError(f"Untyped argument: {arg!r}")
        object.__setattr__(self, "arguments", arguments)

        object.__setattr__(
            self,
            "type_arguments",
            tuple(normalize_type_tag(t) for t in self.type_arguments),
        )

    @classmethod
    def move_call(
        cls,
        target: str,
        arguments: Iterable[MoveArg] = (),
        type_arguments: Iterable[str] = (),
    ) -> "Action":
        """Build an Action from a target string."""
        return cls(MoveTarget.parse(target), tuple(arguments), tuple(type_arguments))

    def json_arguments(self) -> list:
        """Arguments encoded for JSON-RPC."""
        return [arg.to_json() for arg in self.arguments]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "target": str(self.target),
            "arguments": [
                {"kind": arg.kind.value, "value": arg.to_json()} for arg in self.arguments
            ],
            "type_arguments": list(self.type_arguments),
        }
