"""Expressions and statements that move data between memory and storage."""

from __future__ import annotations

from functools import reduce
from typing import Sequence

from yulgen import yul
from yulgen.operations import abi as abi_operations
from yulgen.types import Array, EventDef


def _size(typ) -> yul.Literal:
    return yul.literal(typ.size())


def sload(typ, sptr) -> yul.FunctionCall:
    """Load a value of the given type from storage."""
    return yul.call("bytes_sloadn", sptr, _size(typ))


def sstore(typ, sptr, value) -> yul.FunctionCall:
    """Store a value of the given type in storage."""
    return yul.call("bytes_sstoren", sptr, _size(typ), value)


def mload(typ, mptr) -> yul.FunctionCall:
    """Load a value of the given type from memory."""
    return yul.call("mloadn", mptr, _size(typ))


def mstore(typ, mptr, value) -> yul.FunctionCall:
    """Store a value of the given type in memory."""
    return yul.call("mstoren", mptr, _size(typ), value)


def mcopys(typ, sptr, mptr) -> yul.FunctionCall:
    """Copy a segment of memory into storage."""
    return yul.call("mcopys", mptr, yul.call("div", sptr, 32), _size(typ))


def scopym(typ, sptr) -> yul.FunctionCall:
    """Copy a segment of storage into newly allocated memory, yielding its address."""
    return yul.call("scopym", yul.call("div", sptr, 32), _size(typ))


def scopys(typ, dest_ptr, origin_ptr) -> yul.FunctionCall:
    """Copy a segment of storage to another segment of storage."""
    return yul.call(
        "scopys",
        yul.call("div", origin_ptr, 32),
        yul.call("div", dest_ptr, 32),
        _size(typ),
    )


def mcopym(typ, ptr) -> yul.FunctionCall:
    """Copy a segment of memory to newly allocated memory."""
    return yul.call("mcopym", ptr, _size(typ))


def emit_event(event: EventDef, vals: Sequence) -> yul.FunctionCall:
    """Return a statement logging the event with the given field values."""
    non_indexed = event.non_indexed_field_types_with_index()
    field_vals = [vals[index] for index, _ in non_indexed]
    field_types = [typ for _, typ in non_indexed]
    indexed_vals = [vals[index] for index, _ in event.indexed_field_types_with_index()]

    encoding = abi_operations.encode(field_types, field_vals)
    encoding_size = abi_operations.encode_size(field_types, vals)

    # Indexed values are taken to be base types, so they are used unhashed.
    topics = [yul.literal(event.topic), *indexed_vals]
    return yul.call(f"log{len(topics)}", encoding, encoding_size, *topics)


def sum_expressions(vals: Sequence) -> yul.Expression:
    """Sum expressions with nested `add` calls; an empty list sums to 0."""
    if not vals:
        return yul.literal(0)
    return reduce(lambda left, right: yul.call("add", left, right), vals)


def keyed_map(map_ptr, key) -> yul.FunctionCall:
    """Return the storage location of a map's value for a key."""
    return yul.call("map_value_ptr", map_ptr, key)


def indexed_array(typ: Array, array, index) -> yul.FunctionCall:
    """Return the location of an array element."""
    return yul.call("add", array, yul.call("mul", index, yul.literal(typ.inner.size())))