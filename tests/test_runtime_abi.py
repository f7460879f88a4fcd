import pytest

from yulgen.runtime.functions.abi import (
    all_functions,
    batch_decode,
    batch_encode,
    decode,
    encode,
    pack,
    unpack,
)
from yulgen.types import AbiDecodeLocation, Array, Base, FeString, Integer, Tuple


def test_encode():
    assert str(encode([Integer.U256, Base.ADDRESS])) == (
        "function abi_encode_u256_address(val_0, val_1) -> ptr { ptr := avail() "
        "pop(alloc_mstoren(val_0, 32)) pop(alloc_mstoren(val_1, 32)) }"
    )


def test_decode_string_mem():
    assert str(decode(FeString(100), AbiDecodeLocation.MEMORY)) == (
        "function abi_decode_string_100_mem(start_ptr, offset) -> decoded_ptr "
        "{ let head_ptr := add(start_ptr, offset) "
        "decoded_ptr := add(start_ptr, mload(head_ptr)) }"
    )


def test_decode_string_calldata():
    assert str(decode(FeString(100), AbiDecodeLocation.CALLDATA)) == (
        "function abi_decode_string_100_calldata(start_ptr, offset) -> decoded_ptr "
        "{ let head_ptr := add(start_ptr, offset) "
        "decoded_ptr := ccopym(add(start_ptr, calldataload(head_ptr)), "
        "add(mul(calldataload(add(start_ptr, calldataload(head_ptr))), 1), 32)) }"
    )


def test_decode_u256_mem():
    assert str(decode(Integer.U256, AbiDecodeLocation.MEMORY)) == (
        "function abi_decode_u256_mem(start_ptr, offset) -> decoded_ptr "
        "{ let head_ptr := add(start_ptr, offset) decoded_ptr := mload(head_ptr) }"
    )


def test_decode_u256_calldata():
    text = str(decode(Integer.U256, AbiDecodeLocation.CALLDATA))
    assert text.endswith("decoded_ptr := calldataload(head_ptr) }")


def test_encode_string_places_dynamic_data_after_head():
    assert str(encode([FeString(26)])) == (
        "function abi_encode_string_26(val_0) -> ptr { ptr := avail() "
        "pop(alloc_mstoren(add(32, 0), 32)) "
        "{ pop(alloc_mstoren(mload(val_0), 32)) "
        "{ let array_data_size := mul(mload(val_0), 1) "
        "pop(mcopym(add(val_0, 32), array_data_size)) "
        "pop(alloc(sub(ceil32(array_data_size), array_data_size))) } } }"
    )


def test_encode_two_strings_offsets_second_by_first():
    text = str(encode([FeString(26), FeString(26)]))
    assert "pop(alloc_mstoren(add(64, 0), 32))" in text
    assert (
        "pop(alloc_mstoren(add(64, add(32, ceil32(mul(mload(val_0), 1)))), 32))"
        in text
    )


def test_encode_static_u256_array_copies():
    assert str(encode([Array(Integer.U256, 3)])) == (
        "function abi_encode_array_u256_3(val_0) -> ptr { ptr := avail() "
        "{ let array_data_size := mul(3, 32) "
        "pop(mcopym(val_0, array_data_size)) "
        "pop(alloc(sub(ceil32(array_data_size), array_data_size))) } }"
    )


def test_encode_padded_array_unpacks():
    text = str(encode([Array(Base.BOOL, 10)]))
    assert "abi_unpack(val_0, 10, 1)" in text


def test_encode_tuple_copies_words():
    text = str(encode([Tuple((Integer.U256, Base.BOOL))]))
    assert "pop(mcopym(val_0, 64))" in text


def test_decode_padded_static_array():
    calldata = str(decode(Array(Base.BOOL, 10), AbiDecodeLocation.CALLDATA))
    memory = str(decode(Array(Base.BOOL, 10), AbiDecodeLocation.MEMORY))
    assert "decoded_ptr := abi_pack_calldata(head_ptr, 10, 1)" in calldata
    assert "decoded_ptr := abi_pack_mem(head_ptr, 10, 1)" in memory


def test_decode_unpadded_static_array():
    calldata = str(decode(Array(Integer.U256, 4), AbiDecodeLocation.CALLDATA))
    memory = str(decode(Array(Integer.U256, 4), AbiDecodeLocation.MEMORY))
    assert "decoded_ptr := ccopym(head_ptr, mul(4, 32))" in calldata
    assert memory.endswith("decoded_ptr := head_ptr }")


def test_decode_tuple():
    typ = Tuple((Integer.U256, Base.BOOL))
    assert "decoded_ptr := ccopym(head_ptr, 64)" in str(
        decode(typ, AbiDecodeLocation.CALLDATA)
    )
    assert str(decode(typ, AbiDecodeLocation.MEMORY)).endswith(
        "decoded_ptr := head_ptr }"
    )


def test_decode_unit_raises():
    with pytest.raises(ValueError):
        decode(Base.UNIT, AbiDecodeLocation.MEMORY)


def test_unpack():
    assert str(unpack()) == (
        "function abi_unpack(mptr, array_size, inner_data_size) "
        "{ for { let i := 0 } lt(i, array_size) { i := add(i, 1) } "
        "{ let val_ptr := add(mptr, mul(i, inner_data_size)) "
        "let val := mloadn(val_ptr, inner_data_size) "
        "pop(alloc_mstoren(val, 32)) } }"
    )


@pytest.mark.parametrize(
    "location, name, load",
    [
        (AbiDecodeLocation.CALLDATA, "abi_pack_calldata", "calldataload"),
        (AbiDecodeLocation.MEMORY, "abi_pack_mem", "mload"),
    ],
)
def test_pack(location, name, load):
    assert str(pack(location)) == (
        f"function {name}(mptr, array_size, inner_data_size) -> packed_ptr "
        "{ packed_ptr := avail() "
        "for { let i := 0 } lt(i, array_size) { i := add(i, 1) } "
        "{ let val_ptr := add(mptr, mul(i, 32)) "
        f"let val := {load}(val_ptr) "
        "pop(alloc_mstoren(val, inner_data_size)) } }"
    )


def test_all_functions_names():
    assert [str(f.name) for f in all_functions()] == [
        "abi_unpack",
        "abi_pack_calldata",
        "abi_pack_mem",
    ]


def test_batch_encode_sorts_and_dedups():
    functions = batch_encode([[Integer.U256], [Base.ADDRESS], [Integer.U256]])
    assert [str(f.name) for f in functions] == [
        "abi_encode_u256",
        "abi_encode_address",
    ]


def test_batch_decode_sorts_and_dedups():
    functions = batch_decode(
        [
            (Integer.U256, AbiDecodeLocation.MEMORY),
            (Integer.U256, AbiDecodeLocation.CALLDATA),
            (Integer.U256, AbiDecodeLocation.MEMORY),
        ]
    )
    assert [str(f.name) for f in functions] == [
        "abi_decode_u256_calldata",
        "abi_decode_u256_mem",
    ]


def test_batch_encode_empty():
    assert batch_encode([]) == []