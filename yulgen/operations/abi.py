"""Expressions that encode and decode values following the ABI."""

from __future__ import annotations

from typing import Sequence

from yulgen import names, utils, yul
from yulgen.operations import data as data_operations
from yulgen.types import AbiArray, AbiDecodeLocation, AbiTuple, AbiUint


def encode(types: Sequence, vals: Sequence) -> yul.FunctionCall:
    """Return an expression encoding the values and yielding a pointer to the encoding."""
    return yul.call(names.encode_name(types), *vals)


def encode_size(types: Sequence, vals: Sequence) -> yul.FunctionCall:
    """Return an expression giving the size of the encoded values."""
    static_size = 0
    dyn_sizes = []

    for typ, val in zip(types, vals):
        match typ.abi_type():
            case AbiUint():
                static_size += 32
            case AbiArray(inner=inner, size=size):
                if not isinstance(inner, AbiUint):
                    raise NotImplementedError(
                        "encoding of nested arrays and tuples is not supported"
                    )
                if size is None:
                    static_size += 64
                    array_size = yul.call("mload", val)
                    dyn_sizes.append(
                        yul.call(
                            "ceil32",
                            yul.call("mul", array_size, yul.literal(inner.padded_size)),
                        )
                    )
                else:
                    static_size += utils.ceil_32(inner.padded_size * size)
            case AbiTuple(elems=elems):
                static_size += len(elems) * 32

    return yul.call(
        "add", yul.literal(static_size), data_operations.sum_expressions(dyn_sizes)
    )


def decode(types: Sequence, start, location: AbiDecodeLocation) -> list:
    """Return one decoding expression per type for an encoding starting at `start`."""
    offsets, _ = utils.abi_head_offsets(types)
    return [
        yul.call(names.decode_name(typ, location), start, yul.literal(offset))
        for typ, offset in zip(types, offsets)
    ]