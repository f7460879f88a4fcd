"""Runtime functions that allocate, load, store and copy data."""

from __future__ import annotations

from yulgen import yul

_ZERO = yul.Literal("0x00")


def _if(condition, *statements) -> yul.If:
    return yul.If(condition, yul.Block(statements))


def _while(condition, *statements) -> yul.ForLoop:
    return yul.ForLoop(yul.Block(), condition, yul.Block(), yul.Block(statements))


def all_functions() -> list:
    """Return all data runtime functions."""
    return [
        alloc_mstoren(),
        alloc(),
        avail(),
        bytes_mcopys(),
        bytes_scopym(),
        bytes_scopys(),
        bytes_sloadn(),
        bytes_sstoren(),
        ccopym(),
        ceil32(),
        cloadn(),
        free(),
        load_data_string(),
        map_value_ptr(),
        mcopym(),
        mcopys(),
        mloadn(),
        mstoren(),
        revert_with_reason_string(),
        scopym(),
        scopys(),
        set_zero(),
        sloadn(),
        sstoren(),
        ternary(),
    ]


def avail() -> yul.FunctionDefinition:
    """Return the highest available pointer."""
    return yul.function(
        "avail",
        [],
        ["ptr"],
        [
            yul.assign("ptr", yul.call("mload", _ZERO)),
            _if(yul.call("eq", "ptr", _ZERO), yul.assign("ptr", yul.Literal("0x20"))),
        ],
    )


def alloc() -> yul.FunctionDefinition:
    """Allocate a given number of bytes."""
    return yul.function(
        "alloc",
        ["size"],
        ["ptr"],
        [
            yul.assign("ptr", yul.call("mload", _ZERO)),
            _if(yul.call("eq", "ptr", _ZERO), yul.assign("ptr", yul.Literal("0x20"))),
            yul.call("mstore", _ZERO, yul.call("add", "ptr", "size")),
        ],
    )


def free() -> yul.FunctionDefinition:
    """Set the highest available pointer."""
    return yul.function("free", ["ptr"], [], [yul.call("mstore", _ZERO, "ptr")])


def set_zero() -> yul.FunctionDefinition:
    """Set the bit segment [start_bit, end_bit) of a value to zero."""
    return yul.function(
        "set_zero",
        ["start_bit", "end_bit", "val"],
        ["result"],
        [
            yul.declare("left_shift_dist", yul.call("sub", 256, "start_bit")),
            yul.declare("right_shift_dist", "end_bit"),
            yul.declare(
                "left",
                yul.call(
                    "shl", "left_shift_dist", yul.call("shr", "left_shift_dist", "val")
                ),
            ),
            yul.declare(
                "right",
                yul.call(
                    "shr", "right_shift_dist", yul.call("shl", "right_shift_dist", "val")
                ),
            ),
            yul.assign("result", yul.call("or", "left", "right")),
        ],
    )


def ceil32() -> yul.FunctionDefinition:
    """Round a 256 bit value up to the nearest multiple of 32."""
    return yul.function(
        "ceil32",
        ["n"],
        ["return_val"],
        [
            yul.assign(
                "return_val",
                yul.call("mul", yul.call("div", yul.call("add", "n", 31), 32), 32),
            )
        ],
    )


def ccopym() -> yul.FunctionDefinition:
    """Copy calldata to a newly allocated segment of memory."""
    return yul.function(
        "ccopym",
        ["cptr", "size"],
        ["mptr"],
        [
            yul.assign("mptr", yul.call("alloc", "size")),
            yul.call("calldatacopy", "mptr", "cptr", "size"),
        ],
    )


def mcopys() -> yul.FunctionDefinition:
    """Copy memory to storage; the storage pointer addresses a word."""
    return yul.function(
        "mcopys",
        ["mptr", "sptr", "size"],
        [],
        [
            yul.declare("mptr_offset", 0),
            yul.declare("sptr_offset", 0),
            _while(
                yul.call("lt", yul.call("add", "mptr_offset", 32), "size"),
                yul.declare("_mptr", yul.call("add", "mptr", "mptr_offset")),
                yul.declare("_sptr", yul.call("add", "sptr", "sptr_offset")),
                yul.call("sstore", "_sptr", yul.call("mload", "_mptr")),
                yul.assign("mptr_offset", yul.call("add", "mptr_offset", 32)),
                yul.assign("sptr_offset", yul.call("add", "sptr_offset", 1)),
            ),
            yul.declare("rem", yul.call("sub", "size", "mptr_offset")),
            _if(
                yul.call("gt", "rem", 0),
                yul.declare("_mptr", yul.call("add", "mptr", "mptr_offset")),
                yul.declare("_sptr", yul.call("add", "sptr", "sptr_offset")),
                yul.declare(
                    "zeroed_val",
                    yul.call(
                        "set_zero",
                        yul.call("mul", "rem", 8),
                        256,
                        yul.call("mload", "_mptr"),
                    ),
                ),
                yul.call("sstore", "_sptr", "zeroed_val"),
            ),
        ],
    )


def scopym() -> yul.FunctionDefinition:
    """Copy storage to newly allocated memory; the storage pointer addresses a word."""
    return yul.function(
        "scopym",
        ["sptr", "size"],
        ["mptr"],
        [
            yul.assign("mptr", yul.call("alloc", "size")),
            yul.declare("mptr_offset", 0),
            yul.declare("sptr_offset", 0),
            _while(
                yul.call("lt", yul.call("add", "mptr_offset", 32), "size"),
                yul.declare("_mptr", yul.call("add", "mptr", "mptr_offset")),
                yul.declare("_sptr", yul.call("add", "sptr", "sptr_offset")),
                yul.call("mstore", "_mptr", yul.call("sload", "_sptr")),
                yul.assign("mptr_offset", yul.call("add", "mptr_offset", 32)),
                yul.assign("sptr_offset", yul.call("add", "sptr_offset", 1)),
            ),
            yul.declare("rem", yul.call("sub", "size", "mptr_offset")),
            _if(
                yul.call("gt", "rem", 0),
                yul.declare("_mptr", yul.call("add", "mptr", "mptr_offset")),
                yul.declare("_sptr", yul.call("add", "sptr", "sptr_offset")),
                yul.call(
                    "mstoren", "_mptr", "rem", yul.call("sloadn", "_sptr", 0, "rem")
                ),
            ),
        ],
    )


def scopys() -> yul.FunctionDefinition:
    """Copy storage to storage; the pointers address words."""
    return yul.function(
        "scopys",
        ["ptr1", "ptr2", "size"],
        [],
        [
            yul.declare("word_size", yul.call("div", yul.call("add", "size", 31), 32)),
            yul.declare("offset", 0),
            _while(
                yul.call("lt", yul.call("add", "offset", 1), "size"),
                yul.declare("_ptr1", yul.call("add", "ptr1", "offset")),
                yul.declare("_ptr2", yul.call("add", "ptr2", "offset")),
                yul.call("sstore", "_ptr2", yul.call("sload", "_ptr1")),
                yul.assign("offset", yul.call("add", "offset", 1)),
            ),
        ],
    )


def mcopym() -> yul.FunctionDefinition:
    """Copy a segment of memory to newly allocated memory."""
    return yul.function(
        "mcopym",
        ["ptr1", "size"],
        ["ptr2"],
        [
            yul.assign("ptr2", yul.call("alloc", "size")),
            yul.declare("offset", 0),
            _while(
                yul.call("lt", yul.call("add", "offset", 32), "size"),
                yul.declare("_ptr1", yul.call("add", "ptr1", "offset")),
                yul.declare("_ptr2", yul.call("add", "ptr2", "offset")),
                yul.call("mstore", "_ptr2", yul.call("mload", "_ptr1")),
                yul.assign("offset", yul.call("add", "offset", 32)),
            ),
            yul.declare("rem", yul.call("sub", "size", "offset")),
            _if(
                yul.call("gt", "rem", 0),
                yul.declare("_ptr1", yul.call("add", "ptr1", "offset")),
                yul.declare("_ptr2", yul.call("add", "ptr2", "offset")),
                yul.call(
                    "mstoren", "_ptr2", "rem", yul.call("mloadn", "_ptr1", "rem")
                ),
            ),
        ],
    )


def mloadn() -> yul.FunctionDefinition:
    """Read a value of n bytes from memory at the given address."""
    return yul.function(
        "mloadn",
        ["ptr", "size"],
        ["val"],
        [
            yul.assign(
                "val",
                yul.call(
                    "shr",
                    yul.call("sub", 256, yul.call("mul", 8, "size")),
                    yul.call("mload", "ptr"),
                ),
            )
        ],
    )


def sloadn() -> yul.FunctionDefinition:
    """Read n bytes at a word address and byte offset; offset + size must stay within the word."""
    return yul.function(
        "sloadn",
        ["word_ptr", "bytes_offset", "bytes_size"],
        ["val"],
        [
            yul.declare("bits_offset", yul.call("mul", "bytes_offset", 8)),
            yul.declare("bits_size", yul.call("mul", "bytes_size", 8)),
            yul.declare("bits_padding", yul.call("sub", 256, "bits_size")),
            yul.declare("word", yul.call("sload", "word_ptr")),
            yul.declare("word_shl", yul.call("shl", "bits_offset", "word")),
            yul.assign("val", yul.call("shr", "bits_padding", "word_shl")),
        ],
    )


def cloadn() -> yul.FunctionDefinition:
    """Read a value of n bytes from calldata at the given address."""
    return yul.function(
        "cloadn",
        ["ptr", "size"],
        ["val"],
        [
            yul.assign(
                "val",
                yul.call(
                    "shr",
                    yul.call("sub", 256, yul.call("mul", 8, "size")),
                    yul.call("calldataload", "ptr"),
                ),
            )
        ],
    )


def mstoren() -> yul.FunctionDefinition:
    """Store a value in memory, modifying only `size` bytes (0 < size <= 32)."""
    return yul.function(
        "mstoren",
        ["ptr", "size", "val"],
        [],
        [
            yul.declare("size_bits", yul.call("mul", 8, "size")),
            yul.declare(
                "left", yul.call("shl", yul.call("sub", 256, "size_bits"), "val")
            ),
            yul.declare(
                "right",
                yul.call(
                    "shr", "size_bits", yul.call("mload", yul.call("add", "ptr", "size"))
                ),
            ),
            yul.call("mstore", "ptr", yul.call("or", "left", "right")),
        ],
    )


def sstoren() -> yul.FunctionDefinition:
    """Store a value in storage, modifying only `bytes_size` bytes of the word."""
    return yul.function(
        "sstoren",
        ["word_ptr", "bytes_offset", "bytes_size", "val"],
        [],
        [
            yul.declare("bits_offset", yul.call("mul", "bytes_offset", 8)),
            yul.declare("bits_size", yul.call("mul", "bytes_size", 8)),
            yul.declare("old_word", yul.call("sload", "word_ptr")),
            yul.declare(
                "zeroed_word",
                yul.call(
                    "set_zero",
                    "bits_offset",
                    yul.call("add", "bits_offset", "bits_size"),
                    "old_word",
                ),
            ),
            yul.declare(
                "left_shift_dist",
                yul.call("sub", yul.call("sub", 256, "bits_size"), "bits_offset"),
            ),
            yul.declare("offset_val", yul.call("shl", "left_shift_dist", "val")),
            yul.declare("new_word", yul.call("or", "zeroed_word", "offset_val")),
            yul.call("sstore", "word_ptr", "new_word"),
        ],
    )


def bytes_mcopys() -> yul.FunctionDefinition:
    """Copy memory to storage; the storage pointer addresses a byte."""
    return yul.function(
        "bytes_mcopys",
        ["mptr", "sptr", "size"],
        [],
        [
            yul.declare("word_ptr", yul.call("div", "sptr", 32)),
            yul.call("mcopys", "mptr", "word_ptr", "size"),
        ],
    )


def bytes_scopym() -> yul.FunctionDefinition:
    """Copy storage to newly allocated memory; the storage pointer addresses a byte."""
    return yul.function(
        "bytes_scopym",
        ["sptr", "size"],
        ["mptr"],
        [
            yul.declare("word_ptr", yul.call("div", "sptr", 32)),
            yul.assign("mptr", yul.call("scopym", "word_ptr", "size")),
        ],
    )


def bytes_scopys() -> yul.FunctionDefinition:
    """Copy storage to storage; the pointers address bytes."""
    return yul.function(
        "bytes_scopys",
        ["ptr1", "ptr2", "size"],
        [],
        [
            yul.declare("word_ptr1", yul.call("div", "ptr1", 32)),
            yul.declare("word_ptr2", yul.call("div", "ptr2", 32)),
            yul.call("scopys", "word_ptr1", "word_ptr2", "size"),
        ],
    )


def bytes_sloadn() -> yul.FunctionDefinition:
    """Read n bytes at a byte address; the value must not span words."""
    return yul.function(
        "bytes_sloadn",
        ["sptr", "size"],
        ["val"],
        [
            yul.declare("word_ptr", yul.call("div", "sptr", 32)),
            yul.declare("bytes_offset", yul.call("mod", "sptr", 32)),
            yul.assign("val", yul.call("sloadn", "word_ptr", "bytes_offset", "size")),
        ],
    )


def bytes_sstoren() -> yul.FunctionDefinition:
    """Store n bytes at a byte address; the segment must not span words."""
    return yul.function(
        "bytes_sstoren",
        ["sptr", "size", "val"],
        [],
        [
            yul.declare("word_ptr", yul.call("div", "sptr", 32)),
            yul.declare("bytes_offset", yul.call("mod", "sptr", 32)),
            yul.call("sstoren", "word_ptr", "bytes_offset", "size", "val"),
        ],
    )


def alloc_mstoren() -> yul.FunctionDefinition:
    """Store a value in a newly allocated memory segment."""
    return yul.function(
        "alloc_mstoren",
        ["val", "size"],
        ["ptr"],
        [
            yul.assign("ptr", yul.call("alloc", "size")),
            yul.call("mstoren", "ptr", "size", "val"),
        ],
    )


def map_value_ptr() -> yul.FunctionDefinition:
    """Derive the word-aligned storage address of a map value from its key."""
    return yul.function(
        "map_value_ptr",
        ["a", "b"],
        ["return_val"],
        [
            yul.declare("ptr", yul.call("avail")),
            yul.call("mstore", "ptr", "a"),
            yul.call("mstore", yul.call("add", "ptr", 32), "b"),
            yul.declare("hash", yul.call("keccak256", "ptr", 64)),
            yul.assign("return_val", yul.call("set_zero", 248, 256, "hash")),
        ],
    )


def ternary() -> yul.FunctionDefinition:
    """Evaluate a ternary expression."""
    switch = yul.Switch(
        yul.Identifier("test"),
        [
            yul.Case(yul.literal(1), yul.Block([yul.assign("result", "if_expr")])),
            yul.Case(yul.literal(0), yul.Block([yul.assign("result", "else_expr")])),
        ],
    )
    return yul.function(
        "ternary", ["test", "if_expr", "else_expr"], ["result"], [switch]
    )


def load_data_string() -> yul.FunctionDefinition:
    """Load a static string from data into newly allocated memory."""
    return yul.function(
        "load_data_string",
        ["code_ptr", "size"],
        ["mptr"],
        [
            yul.assign("mptr", yul.call("alloc", 32)),
            yul.call("mstore", "mptr", "size"),
            yul.declare("content_ptr", yul.call("alloc", "size")),
            yul.call("datacopy", "content_ptr", "code_ptr", "size"),
        ],
    )


def revert_with_reason_string() -> yul.FunctionDefinition:
    """Revert with an ABI-encoded `Error(string)` reason."""
    data_offset = yul.Literal(
        "0x0000000000000000000000000000000000000000000000000000000000000020"
    )
    return yul.function(
        "revert_with_reason_string",
        ["reason"],
        [],
        [
            # selector of Error(string)
            yul.declare("ptr", yul.call("alloc_mstoren", yul.Literal("0x08C379A0"), 4)),
            yul.call("pop", yul.call("alloc_mstoren", data_offset, 32)),
            yul.declare("reason_size", yul.call("mloadn", "reason", 32)),
            yul.call(
                "pop", yul.call("mcopym", "reason", yul.call("add", "reason_size", 32))
            ),
            yul.declare(
                "padding",
                yul.call("sub", yul.call("ceil32", "reason_size"), "reason_size"),
            ),
            yul.call("pop", yul.call("alloc", "padding")),
            yul.call(
                "revert",
                "ptr",
                yul.call("add", 68, yul.call("add", "reason_size", "padding")),
            ),
        ],
    )