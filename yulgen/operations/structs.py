"""Expressions that create structs and reach their fields."""

from __future__ import annotations

from typing import Sequence

from yulgen import names, yul
from yulgen.types import Struct


def new(struct_type: Struct, params: Sequence) -> yul.FunctionCall:
    """Return an expression creating an instance of the struct."""
    return yul.call(names.struct_new_call(struct_type.name), *params)


def get_attribute(struct_type: Struct, field_name: str, val) -> yul.FunctionCall:
    """Return an expression yielding a pointer to a field of the struct value."""
    return yul.call(names.struct_getter_call(struct_type.name, field_name), val)