"""Integer bounds as Yul literals."""

from __future__ import annotations

from yulgen.types import Integer
from yulgen.yul import Literal

_BOUNDS = {
    Integer.U256: (
        "0x0",
        "0xffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",
    ),
    Integer.U128: ("0x0", "0xffffffffffffffffffffffffffffffff"),
    Integer.U64: ("0x0", "0xffffffffffffffff"),
    Integer.U32: ("0x0", "0xffffffff"),
    Integer.U16: ("0x0", "0xffff"),
    Integer.U8: ("0x0", "0xff"),
    Integer.I256: (
        "0x8000000000000000000000000000000000000000000000000000000000000000",
        "0x7fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",
    ),
    Integer.I128: (
        "0xffffffffffffffffffffffffffffffff80000000000000000000000000000000",
        "0x7fffffffffffffffffffffffffffffff",
    ),
    Integer.I64: (
        "0xffffffffffffffffffffffffffffffffffffffffffffffff8000000000000000",
        "0x7fffffffffffffff",
    ),
    Integer.I32: (
        "0xffffffffffffffffffffffffffffffffffffffffffffffffffffffff80000000",
        "0x7fffffff",
    ),
    Integer.I16: (
        "0xffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff8000",
        "0x7fff",
    ),
    Integer.I8: (
        "0xffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff80",
        "0x7f",
    ),
}


def numeric_min_max() -> dict:
    """Map each integer type to its (min, max) Yul literals."""
    return {
        integer: (Literal(low), Literal(high))
        for integer, (low, high) in _BOUNDS.items()
    }