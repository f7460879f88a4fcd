import pytest

from yulgen.runtime.functions.structs import (
    generate_get_fn,
    generate_new_fn,
    struct_apis,
)
from yulgen.types import Base, Integer, Struct


def _foo() -> Struct:
    val = Struct("Foo")
    val.add_field("bar", Base.BOOL)
    val.add_field("bar2", Base.BOOL)
    return val


def test_empty_struct():
    assert (
        str(generate_new_fn(Struct("Foo")))
        == "function struct_Foo_new() -> return_val { return_val := 0 }"
    )


def test_struct_api_generation():
    assert str(generate_new_fn(_foo())) == (
        "function struct_Foo_new(bar, bar2) -> return_val { "
        "return_val := alloc(32) mstore(return_val, bar) "
        "let bar2_ptr := alloc(32) mstore(bar2_ptr, bar2) }"
    )


def test_struct_getter_generation():
    val = _foo()
    assert (
        str(generate_get_fn(val, val.fields[0][0]))
        == "function struct_Foo_get_bar_ptr(ptr) -> return_val { return_val := add(ptr, 31) }"
    )
    assert (
        str(generate_get_fn(val, val.fields[1][0]))
        == "function struct_Foo_get_bar2_ptr(ptr) -> return_val { return_val := add(ptr, 63) }"
    )


def test_getter_accounts_for_field_size():
    val = Struct("Pair")
    val.add_field("amount", Integer.U256)
    val.add_field("owner", Base.ADDRESS)
    assert "return_val := add(ptr, 0)" in str(generate_get_fn(val, "amount"))
    assert "return_val := add(ptr, 44)" in str(generate_get_fn(val, "owner"))


def test_getter_missing_field_raises():
    with pytest.raises(ValueError, match="No field missing in Foo"):
        generate_get_fn(_foo(), "missing")


def test_struct_apis():
    functions = struct_apis(_foo())
    assert [str(f.name) for f in functions] == [
        "struct_Foo_new",
        "struct_Foo_get_bar_ptr",
        "struct_Foo_get_bar2_ptr",
    ]


def test_struct_apis_empty_struct_has_only_constructor():
    functions = struct_apis(Struct("Empty"))
    assert [str(f.name) for f in functions] == ["struct_Empty_new"]