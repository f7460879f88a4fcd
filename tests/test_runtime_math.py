import pytest

from yulgen.constants import numeric_min_max
from yulgen.runtime.functions import math
from yulgen.types import Integer


def _names(functions):
    return [str(f.name) for f in functions]


SIZES = ["u256", "u128", "u64", "u32", "u16", "u8", "i256", "i128", "i64", "i32", "i16", "i8"]


def test_checked_add_names():
    assert _names(math.checked_add_fns()) == [f"checked_add_{s}" for s in SIZES]


def test_checked_mul_names():
    assert _names(math.checked_mul_fns()) == [f"checked_mul_{s}" for s in SIZES]


def test_checked_div_names():
    expected = ["checked_div_unsigned"] + [f"checked_div_{s}" for s in SIZES[6:]]
    assert _names(math.checked_div_fns()) == expected


def test_checked_sub_names():
    expected = ["checked_sub_unsigned"] + [f"checked_sub_{s}" for s in SIZES[6:]]
    assert _names(math.checked_sub_fns()) == expected


def test_checked_exp_names():
    expected = [
        "checked_exp_unsigned",
        "checked_exp_signed",
        "checked_exp_helper",
    ] + [f"checked_exp_{s}" for s in SIZES]
    assert _names(math.checked_exp_fns()) == expected


def test_checked_mod_names():
    assert _names(math.checked_mod_fns()) == ["checked_mod_unsigned", "checked_mod_signed"]


def test_all_functions_concatenates_groups_in_order():
    groups = [
        math.checked_add_fns(),
        math.checked_div_fns(),
        math.checked_exp_fns(),
        math.checked_mod_fns(),
        math.checked_mul_fns(),
        math.checked_sub_fns(),
    ]
    combined = [str(f) for group in groups for f in group]
    assert [str(f) for f in math.all_functions()] == combined
    names = _names(math.all_functions())
    assert len(names) == len(set(names))


def test_checked_mod_unsigned_text():
    assert str(math.checked_mod_fns()[0]) == (
        "function checked_mod_unsigned(val1, val2) -> result "
        "{ if iszero(val2) { revert(0, 0) } result := mod(val1, val2) }"
    )


def test_checked_sub_unsigned_text():
    assert str(math.checked_sub_fns()[0]) == (
        "function checked_sub_unsigned(val1, val2) -> diff "
        "{ if lt(val1, val2) { revert(0, 0) } diff := sub(val1, val2) }"
    )


def test_checked_add_u8_uses_max_bound():
    add_u8 = math.checked_add_fns()[5]
    assert str(add_u8.name) == "checked_add_u8"
    assert "gt(val1, sub(0xff, val2))" in str(add_u8)
    assert [str(p) for p in add_u8.parameters] == ["val1", "val2"]
    assert [str(r) for r in add_u8.returns] == ["sum"]


def test_signed_mul_uses_both_bounds():
    mul_i8 = math.checked_mul_fns()[-1]
    low, high = numeric_min_max()[Integer.I8]
    text = str(mul_i8)
    assert f"sdiv({low}, val1)" in text
    assert f"sdiv({high}, val2)" in text
    assert text.endswith("product := mul(val1, val2) }")


def test_signed_div_checks_min_over_minus_one():
    div_i256 = math.checked_div_fns()[1]
    low, _ = numeric_min_max()[Integer.I256]
    assert f"and(eq(val1, {low}), eq(val2, sub(0, 1)))" in str(div_i256)


def test_sized_exp_wrappers_call_generic_functions():
    exps = {str(f.name): str(f) for f in math.checked_exp_fns()}
    low, high = numeric_min_max()[Integer.I16]
    assert f"checked_exp_signed(base, exponent, {low}, {high})" in exps["checked_exp_i16"]
    _, umax = numeric_min_max()[Integer.U32]
    assert f"checked_exp_unsigned(base, exponent, {umax})" in exps["checked_exp_u32"]


def test_exp_helper_signature_and_multi_assignment():
    exps = {str(f.name): f for f in math.checked_exp_fns()}
    helper = exps["checked_exp_helper"]
    assert [str(p) for p in helper.parameters] == ["_power", "_base", "exponent", "max"]
    assert [str(r) for r in helper.returns] == ["power", "base"]
    assert "power, base := checked_exp_helper(1, base, exponent, max)" in str(
        exps["checked_exp_unsigned"]
    )
    assert "power, base := checked_exp_helper(power, base, exponent, max)" in str(
        exps["checked_exp_signed"]
    )


def test_exp_signed_switches_on_small_exponents():
    exp_signed = str(math.checked_exp_fns()[1])
    assert "switch exponent case 0 { power := 1 leave } case 1 { power := base leave }" in exp_signed


@pytest.mark.parametrize("size", [Integer.I8, Integer.I256])
def test_unsigned_builder_rejects_signed(size):
    with pytest.raises(ValueError, match="Expected unsigned integer"):
        math._checked_add_unsigned(size)


@pytest.mark.parametrize("size", [Integer.U8, Integer.U256])
def test_signed_builder_rejects_unsigned(size):
    with pytest.raises(ValueError, match="Expected signed integer"):
        math._checked_mul_signed(size)