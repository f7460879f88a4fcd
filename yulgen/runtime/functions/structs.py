"""Runtime functions that create structs and reach their fields."""

from __future__ import annotations

from yulgen import names, yul
from yulgen.types import Struct


def generate_new_fn(struct_type: Struct) -> yul.FunctionDefinition:
    """Generate the function that creates an instance of the struct."""
    function_name = names.struct_new_call(struct_type.name)

    if struct_type.is_empty():
        # Empty structs are never written to, so a null pointer is safe.
        return yul.function(
            function_name, [], ["return_val"], [yul.assign("return_val", 0)]
        )

    params = [name for name, _ in struct_type.fields]
    body = []
    for index, name in enumerate(params):
        if index == 0:
            body.append(yul.assign("return_val", yul.call("alloc", 32)))
            body.append(yul.call("mstore", "return_val", name))
        else:
            ptr = f"{name}_ptr"
            body.append(yul.declare(ptr, yul.call("alloc", 32)))
            body.append(yul.call("mstore", ptr, name))

    return yul.function(function_name, params, ["return_val"], body)


def generate_get_fn(struct_type: Struct, field_name: str) -> yul.FunctionDefinition:
    """Generate the function returning a pointer to a field of the struct."""
    function_name = names.struct_getter_call(struct_type.name, field_name)
    field_index = struct_type.get_field_index(field_name)
    field_type = struct_type.get_field_type(field_name)
    if field_index is None or field_type is None:
        raise ValueError(f"No field {field_name} in {struct_type.name}")

    # Each field takes a full word, with smaller values left-padded, so the
    # pointer is the word offset plus the padding.
    field_offset = field_index * 32 + (32 - field_type.size())

    return yul.function(
        function_name,
        ["ptr"],
        ["return_val"],
        [yul.assign("return_val", yul.call("add", "ptr", field_offset))],
    )


def struct_apis(struct_type: Struct) -> list:
    """Build the creation function and one getter per field of the struct."""
    return [
        generate_new_fn(struct_type),
        *(generate_get_fn(struct_type, name) for name, _ in struct_type.fields),
    ]