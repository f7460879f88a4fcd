"""Fixed-size types, their ABI shapes and contract metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from yulgen.hashing import keccak_hex


class AbiDecodeLocation(Enum):
    """Where encoded data lives; values double as name suffixes and sort order."""

    CALLDATA = "calldata"
    MEMORY = "mem"


@dataclass(frozen=True)
class AbiUint:
    """An unsigned-integer-like ABI value."""

    data_size: int
    padded_size: int


@dataclass(frozen=True)
class AbiArray:
    """An ABI array; a size of None means dynamically sized."""

    inner: "AbiType"
    size: Optional[int] = None

    @property
    def is_dynamic(self) -> bool:
        return self.size is None


@dataclass(frozen=True)
class AbiTuple:
    """An ABI tuple of elements."""

    elems: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elems", tuple(self.elems))


AbiType = Union[AbiUint, AbiArray, AbiTuple]


def _unsupported(typ) -> TypeError:
    return TypeError(f"unsupported type: {typ!r}")


class FixedSize:
    """A type whose size is known at compile time."""

    def size(self) -> int:
        """Return the size in bytes."""
        match self:
            case Integer():
                return self.bits // 8
            case Base.BOOL | Base.BYTE:
                return 1
            case Base.ADDRESS:
                return 20
            case Base.UNIT:
                return 0
            case Array(inner=inner, length=length):
                return inner.size() * length
            case FeString(max_size=max_size):
                return max_size + 32
            case Tuple(items=items):
                return len(items) * 32
            case Struct(fields=fields):
                return len(fields) * 32
            case Contract():
                return 20
        raise _unsupported(self)

    def lower_snake(self) -> str:
        """Return the name used inside generated identifiers."""
        match self:
            case Integer() | Base():
                return self.value
            case Array(inner=inner, length=length):
                return f"array_{inner.lower_snake()}_{length}"
            case FeString(max_size=max_size):
                return f"string_{max_size}"
            case Tuple(items=items):
                return "tuple_" + "_".join(item.lower_snake() for item in items)
            case Struct(name=name):
                return f"struct_{name}"
            case Contract():
                return "address"
        raise _unsupported(self)

    def abi_type(self) -> AbiType:
        """Return the ABI shape of the type."""
        match self:
            case Integer():
                return AbiUint(self.size(), 32)
            case Base.BOOL | Base.BYTE:
                return AbiUint(1, 32)
            case Base.ADDRESS | Contract():
                return AbiUint(20, 32)
            case Base.UNIT:
                raise ValueError("the unit type has no ABI encoding")
            case Array(inner=Base.BYTE):
                return AbiArray(AbiUint(1, 1), None)
            case Array(inner=inner, length=length):
                return AbiArray(inner.abi_type(), length)
            case FeString():
                return AbiArray(AbiUint(1, 1), None)
            case Tuple(items=items):
                return AbiTuple(tuple(item.abi_type() for item in items))
            case Struct(fields=fields):
                return AbiTuple(tuple(typ.abi_type() for _, typ in fields))
        raise _unsupported(self)

    def abi_selector_name(self) -> str:
        """Return the type name used in function signatures."""
        match self:
            case Integer():
                return ("int" if self.is_signed() else "uint") + str(self.bits)
            case Base.UNIT:
                raise ValueError("the unit type has no ABI name")
            case Base():
                return self.value
            case Array(inner=Base.BYTE):
                return "bytes"
            case Array(inner=inner, length=length):
                return f"{inner.abi_selector_name()}[{length}]"
            case FeString():
                return "string"
            case Tuple(items=items):
                return "(" + ",".join(i.abi_selector_name() for i in items) + ")"
            case Struct(fields=fields):
                return "(" + ",".join(t.abi_selector_name() for _, t in fields) + ")"
            case Contract():
                return "address"
        raise _unsupported(self)

    def is_unit(self) -> bool:
        """Return True for the unit type."""
        return self is Base.UNIT

    def sort_key(self) -> tuple:
        """Return a key giving all fixed-size types a total order."""
        match self:
            case Integer():
                return (0, 0, list(Integer).index(self))
            case Base():
                return (0, 1 + list(Base).index(self))
            case Array(inner=inner, length=length):
                return (1, inner.sort_key(), length)
            case Tuple(items=items):
                return (2, tuple(item.sort_key() for item in items))
            case FeString(max_size=max_size):
                return (3, max_size)
            case Contract(name=name):
                return (4, name)
            case Struct(name=name, fields=fields):
                return (5, name, tuple((n, t.sort_key()) for n, t in fields))
        raise _unsupported(self)


class Integer(FixedSize, Enum):
    """Numeric types."""

    U256 = "u256"
    U128 = "u128"
    U64 = "u64"
    U32 = "u32"
    U16 = "u16"
    U8 = "u8"
    I256 = "i256"
    I128 = "i128"
    I64 = "i64"
    I32 = "i32"
    I16 = "i16"
    I8 = "i8"

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    def is_signed(self) -> bool:
        return self.value.startswith("i")


class Base(FixedSize, Enum):
    """Non-numeric primitive types."""

    BOOL = "bool"
    BYTE = "byte"
    ADDRESS = "address"
    UNIT = "unit"


@dataclass(frozen=True)
class Array(FixedSize):
    """A fixed-length array of a primitive type."""

    inner: Union[Integer, Base]
    length: int


@dataclass(frozen=True)
class FeString(FixedSize):
    """A string with a maximum length."""

    max_size: int


@dataclass(frozen=True)
class Tuple(FixedSize):
    """A tuple of fixed-size items."""

    items: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass
class Struct(FixedSize):
    """A named struct with ordered fields."""

    name: str
    fields: list = field(default_factory=list)

    def add_field(self, name: str, typ: FixedSize) -> None:
        """Append a field; raises ValueError if the name is taken."""
        if self.get_field_index(name) is not None:
            raise ValueError(f"duplicate field {name!r} in struct {self.name}")
        self.fields.append((name, typ))

    def get_field_index(self, name: str) -> Optional[int]:
        return next((i for i, (n, _) in enumerate(self.fields) if n == name), None)

    def get_field_type(self, name: str) -> Optional[FixedSize]:
        return next((typ for n, typ in self.fields if n == name), None)

    def is_empty(self) -> bool:
        return not self.fields


@dataclass
class FunctionAttributes:
    """A function's name, parameters and return type."""

    name: str
    params: list = field(default_factory=list)
    return_type: FixedSize = Base.UNIT

    def param_types(self) -> list:
        return [typ for _, typ in self.params]


@dataclass
class Contract(FixedSize):
    """A contract type with its public functions."""

    name: str
    functions: list = field(default_factory=list)


@dataclass
class EventDef:
    """An event with fields, some of which are indexed."""

    name: str
    fields: list
    indexed_fields: list = field(default_factory=list)
    topic: str = field(init=False)

    def __post_init__(self) -> None:
        signature = ",".join(typ.abi_selector_name() for _, typ in self.fields)
        self.topic = keccak_hex(f"{self.name}({signature})".encode())

    def indexed_field_types_with_index(self) -> list:
        return [
            (i, typ)
            for i, (_, typ) in enumerate(self.fields)
            if i in self.indexed_fields
        ]

    def non_indexed_field_types_with_index(self) -> list:
        return [
            (i, typ)
            for i, (_, typ) in enumerate(self.fields)
            if i not in self.indexed_fields
        ]

    def non_indexed_field_types(self) -> list:
        return [typ for _, typ in self.non_indexed_field_types_with_index()]


@dataclass
class ContractAttributes:
    """What analysis found out about a contract."""

    public_functions: list = field(default_factory=list)
    init_function: Optional[FunctionAttributes] = None
    events: list = field(default_factory=list)
    structs: list = field(default_factory=list)
    external_contracts: list = field(default_factory=list)
    created_contracts: list = field(default_factory=list)
    string_literals: set = field(default_factory=set)