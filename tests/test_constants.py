import pytest

from yulgen.constants import numeric_min_max
from yulgen.types import Integer
from yulgen.yul import Literal


def test_every_integer_present():
    assert set(numeric_min_max()) == set(Integer)


def test_u256_max():
    assert numeric_min_max()[Integer.U256] == (
        Literal("0x0"),
        Literal("0xffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"),
    )


@pytest.mark.parametrize("integer", list(Integer))
def test_bounds_match_bit_width(integer):
    low, high = numeric_min_max()[integer]
    bits = integer.size() * 8
    if integer.is_signed():
        assert int(low.value, 16) == (1 << 256) - (1 << (bits - 1))
        assert int(high.value, 16) == (1 << (bits - 1)) - 1
    else:
        assert int(low.value, 16) == 0
        assert int(high.value, 16) == (1 << bits) - 1


def test_signed_min_is_full_word():
    for integer, (low, _) in numeric_min_max().items():
        if integer.is_signed():
            assert len(low.value) == 66


def test_returns_fresh_mapping():
    first = numeric_min_max()
    first.pop(Integer.U8)
    assert Integer.U8 in numeric_min_max()