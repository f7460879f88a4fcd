"""Runtime functions that encode and decode values following the ABI."""

from __future__ import annotations

from typing import Sequence

from yulgen import names, utils, yul
from yulgen.operations import data as data_operations
from yulgen.types import AbiArray, AbiDecodeLocation, AbiTuple, AbiUint


def all_functions() -> list:
    """Return all ABI runtime functions."""
    return [
        unpack(),
        pack(AbiDecodeLocation.CALLDATA),
        pack(AbiDecodeLocation.MEMORY),
    ]


def _location_rank(location: AbiDecodeLocation) -> int:
    return list(AbiDecodeLocation).index(location)


def _sorted_unique(items: list, key) -> list:
    unique = []
    for item in sorted(items, key=key):
        if not unique or unique[-1] != item:
            unique.append(item)
    return unique


def batch_encode(batch: Sequence) -> list:
    """Build encoding functions for lists of types, sorted and without duplicates."""
    types_lists = [list(types) for types in batch]
    unique = _sorted_unique(
        types_lists, key=lambda types: tuple(t.sort_key() for t in types)
    )
    return [encode(types) for types in unique]


def batch_decode(batch: Sequence) -> list:
    """Build decoding functions for (type, location) pairs, sorted and without duplicates."""
    pairs = [(typ, location) for typ, location in batch]
    unique = _sorted_unique(
        pairs, key=lambda pair: (pair[0].sort_key(), _location_rank(pair[1]))
    )
    return [decode(typ, location) for typ, location in unique]


def _require_uint(inner, what: str) -> AbiUint:
    if not isinstance(inner, AbiUint):
        raise NotImplementedError(f"{what} of nested arrays and tuples")
    return inner


def encode(types: Sequence) -> yul.FunctionDefinition:
    """Generate an encoding function for a list of types."""
    types = list(types)
    func_name = names.encode_name(types)
    params = [yul.Identifier(f"val_{i}") for i in range(len(types))]

    _, static_size = utils.abi_head_offsets(types)
    static_size = yul.literal(static_size)

    dyn_sizes = []
    dyn_array_params = []
    static_stmts = []

    for param, typ in zip(params, types):
        match typ.abi_type():
            case AbiArray(inner=inner, size=None):
                dyn_offset = yul.call(
                    "add", static_size, data_operations.sum_expressions(list(dyn_sizes))
                )
                dyn_sizes.append(_dyn_array_data_size(param, inner))
                dyn_array_params.append((param, inner))
                static_stmts.append(_encode_uint(dyn_offset))
            case AbiArray(inner=inner, size=size):
                static_stmts.append(_encode_static_array(param, inner, size))
            case AbiTuple(elems=elems):
                static_stmts.append(_encode_tuple(param, elems))
            case AbiUint():
                static_stmts.append(_encode_uint(param))

    dyn_stmts = [_encode_dyn_array(param, inner) for param, inner in dyn_array_params]

    return yul.function(
        func_name,
        params,
        ["ptr"],
        [yul.assign("ptr", yul.call("avail")), *static_stmts, *dyn_stmts],
    )


def decode(typ, location: AbiDecodeLocation) -> yul.FunctionDefinition:
    """Generate a decoding function for one type in calldata or memory."""
    func_name = names.decode_name(typ, location)

    match typ.abi_type():
        case AbiUint():
            decode_expr = _decode_uint(location)
        case AbiArray(inner=inner, size=None):
            decode_expr = _decode_dyn_array(inner, location)
        case AbiArray(inner=inner, size=size):
            decode_expr = _decode_static_array(inner, size, location)
        case AbiTuple(elems=elems):
            decode_expr = _decode_tuple(elems, location)

    return yul.function(
        func_name,
        ["start_ptr", "offset"],
        ["decoded_ptr"],
        [
            yul.declare("head_ptr", yul.call("add", "start_ptr", "offset")),
            yul.assign("decoded_ptr", decode_expr),
        ],
    )


def _counting_loop(limit: str, body: list) -> yul.ForLoop:
    return yul.ForLoop(
        yul.Block([yul.declare("i", 0)]),
        yul.call("lt", "i", limit),
        yul.Block([yul.assign("i", yul.call("add", "i", 1))]),
        yul.Block(body),
    )


def unpack() -> yul.FunctionDefinition:
    """Pad array elements to full words as the ABI requires."""
    loop = _counting_loop(
        "array_size",
        [
            yul.declare(
                "val_ptr", yul.call("add", "mptr", yul.call("mul", "i", "inner_data_size"))
            ),
            yul.declare("val", yul.call("mloadn", "val_ptr", "inner_data_size")),
            yul.call("pop", yul.call("alloc_mstoren", "val", 32)),
        ],
    )
    return yul.function(
        "abi_unpack", ["mptr", "array_size", "inner_data_size"], [], [loop]
    )


def pack(location: AbiDecodeLocation) -> yul.FunctionDefinition:
    """Strip padding from array elements so they can be stored compactly."""
    if location is AbiDecodeLocation.CALLDATA:
        name, load = "abi_pack_calldata", "calldataload"
    else:
        name, load = "abi_pack_mem", "mload"

    loop = _counting_loop(
        "array_size",
        [
            yul.declare("val_ptr", yul.call("add", "mptr", yul.call("mul", "i", 32))),
            yul.declare("val", yul.call(load, "val_ptr")),
            yul.call("pop", yul.call("alloc_mstoren", "val", "inner_data_size")),
        ],
    )
    return yul.function(
        name,
        ["mptr", "array_size", "inner_data_size"],
        ["packed_ptr"],
        [yul.assign("packed_ptr", yul.call("avail")), loop],
    )


def _dyn_array_data_size(val, inner) -> yul.FunctionCall:
    inner = _require_uint(inner, "encoding")
    array_size = yul.call("mload", val)
    elements_size = yul.call("mul", array_size, yul.literal(inner.padded_size))
    return yul.call("add", 32, yul.call("ceil32", elements_size))


def _encode_tuple(val, elems) -> yul.FunctionCall:
    return yul.call("pop", yul.call("mcopym", val, yul.literal(len(elems) * 32)))


def _encode_uint(val) -> yul.FunctionCall:
    return yul.call("pop", yul.call("alloc_mstoren", val, 32))


def _encode_dyn_array(val, inner) -> yul.Block:
    array_size = yul.call("mload", val)
    array_start = yul.call("add", val, 32)
    return yul.Block(
        [_encode_uint(array_size), _encode_array(array_start, inner, array_size)]
    )


def _encode_static_array(val, inner, size: int):
    return _encode_array(val, inner, yul.literal(size))


def _encode_array(val, inner, array_size):
    inner = _require_uint(inner, "encoding")
    inner_data_size = yul.literal(inner.data_size)

    if inner.data_size == inner.padded_size:
        # no padding on the elements, so a plain copy will do
        right_padding = yul.call(
            "sub", yul.call("ceil32", "array_data_size"), "array_data_size"
        )
        return yul.Block(
            [
                yul.declare(
                    "array_data_size", yul.call("mul", array_size, inner_data_size)
                ),
                yul.call("pop", yul.call("mcopym", val, "array_data_size")),
                yul.call("pop", yul.call("alloc", right_padding)),
            ]
        )
    return yul.call("abi_unpack", val, array_size, inner_data_size)


def _decode_uint(location: AbiDecodeLocation) -> yul.FunctionCall:
    if location is AbiDecodeLocation.MEMORY:
        return yul.call("mload", "head_ptr")
    return yul.call("calldataload", "head_ptr")


def _decode_dyn_array(inner, location: AbiDecodeLocation):
    load = "calldataload" if location is AbiDecodeLocation.CALLDATA else "mload"
    encoding_start = yul.call("add", "start_ptr", yul.call(load, "head_ptr"))
    array_size = yul.call(load, encoding_start)

    inner = _require_uint(inner, "decoding")
    if inner.padded_size != inner.data_size:
        raise NotImplementedError("packing of dynamically sized arrays")

    if location is AbiDecodeLocation.CALLDATA:
        array_data_size = yul.call("mul", array_size, yul.literal(inner.data_size))
        return yul.call("ccopym", encoding_start, yul.call("add", array_data_size, 32))
    return encoding_start


def _decode_static_array(inner, size: int, location: AbiDecodeLocation):
    array_size = yul.literal(size)
    array_start = yul.Identifier("head_ptr")

    inner = _require_uint(inner, "decoding")
    inner_data_size = yul.literal(inner.data_size)

    if inner.padded_size == inner.data_size:
        if location is AbiDecodeLocation.CALLDATA:
            return yul.call(
                "ccopym", array_start, yul.call("mul", array_size, inner_data_size)
            )
        return array_start

    packer = (
        "abi_pack_calldata"
        if location is AbiDecodeLocation.CALLDATA
        else "abi_pack_mem"
    )
    return yul.call(packer, array_start, array_size, inner_data_size)


def _decode_tuple(elems, location: AbiDecodeLocation):
    if location is AbiDecodeLocation.MEMORY:
        return yul.Identifier("head_ptr")
    return yul.call("ccopym", "head_ptr", yul.literal(len(elems) * 32))