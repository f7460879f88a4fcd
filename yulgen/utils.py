"""ABI layout helpers."""

from __future__ import annotations

from typing import Sequence

from yulgen.types import AbiArray, AbiTuple, AbiUint


def ceil_32(n: int) -> int:
    """Round up to the nearest multiple of 32."""
    return (n + 31) // 32 * 32


def abi_head_offsets(types: Sequence) -> tuple:
    """Return the head offset of each type and the size of the static section."""
    offsets = []
    current = 0
    for typ in types:
        offsets.append(current)
        match typ.abi_type():
            case AbiArray(size=None):
                current += 32
            case AbiArray(inner=AbiUint(padded_size=padded), size=size):
                current += ceil_32(padded * size)
            case AbiArray():
                raise ValueError("nested arrays and tuples in arrays are unsupported")
            case AbiTuple(elems=elems):
                current += len(elems) * 32
            case AbiUint(padded_size=padded):
                current += padded
    return offsets, current