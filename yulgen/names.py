"""Names of generated Yul functions and variables."""

from __future__ import annotations

from typing import Sequence

from yulgen.types import AbiDecodeLocation, FixedSize, Integer
from yulgen.yul import Identifier


def checked_add(size: Integer) -> Identifier:
    """Name of the checked addition function for an integer type."""
    return Identifier(f"checked_add_{size.value.lower()}")


def checked_div(size: Integer) -> Identifier:
    """Name of the checked division function for an integer type."""
    suffix = size.value if size.is_signed() else "unsigned"
    return Identifier(f"checked_div_{suffix.lower()}")


def checked_mod(size: Integer) -> Identifier:
    """Name of the checked modulo function for an integer type."""
    sign = "signed" if size.is_signed() else "unsigned"
    return Identifier(f"checked_mod_{sign}")


def checked_exp(size: Integer) -> Identifier:
    """Name of the checked exponentiation function for an integer type."""
    return Identifier(f"checked_exp_{size.value.lower()}")


def checked_mul(size: Integer) -> Identifier:
    """Name of the checked multiplication function for an integer type."""
    return Identifier(f"checked_mul_{size.value.lower()}")


def checked_sub(size: Integer) -> Identifier:
    """Name of the checked subtraction function for an integer type."""
    suffix = size.value if size.is_signed() else "unsigned"
    return Identifier(f"checked_sub_{suffix.lower()}")


def func_name(name: str) -> Identifier:
    """Safe name for a user-defined function."""
    return Identifier(f"$${name}")


def var_name(name: str) -> Identifier:
    """Safe name for a user-defined variable."""
    return Identifier(f"${name}")


def encode_name(types: Sequence[FixedSize]) -> Identifier:
    """Name of the ABI encoding function for a list of types."""
    return Identifier("abi_encode_" + "_".join(t.lower_snake() for t in types))


def decode_name(typ: FixedSize, location: AbiDecodeLocation) -> Identifier:
    """Name of the ABI decoding function for a type and location."""
    return Identifier(f"abi_decode_{typ.lower_snake()}_{location.value}")


def contract_call(contract_name: str, func_name: str) -> Identifier:
    """Name of the function calling another contract's function."""
    return Identifier(f"{contract_name}_{func_name}")


def struct_function_name(struct_name: str, func_name: str) -> Identifier:
    """Name of a function working on a struct type."""
    return Identifier(f"struct_{struct_name}_{func_name}")


def struct_new_call(struct_name: str) -> Identifier:
    """Name of the function creating a struct."""
    return struct_function_name(struct_name, "new")


def struct_getter_call(struct_name: str, field_name: str) -> Identifier:
    """Name of the function returning a pointer to a struct field."""
    return struct_function_name(struct_name, f"get_{field_name}_ptr")