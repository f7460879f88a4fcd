"""Runtime functions for arithmetic with over- and underflow protection."""

from __future__ import annotations

from yulgen import names, yul
from yulgen.constants import numeric_min_max
from yulgen.types import Integer

_UNSIGNED = (
    Integer.U256,
    Integer.U128,
    Integer.U64,
    Integer.U32,
    Integer.U16,
    Integer.U8,
)
_SIGNED = (
    Integer.I256,
    Integer.I128,
    Integer.I64,
    Integer.I32,
    Integer.I16,
    Integer.I8,
)


def _revert_if(condition) -> yul.If:
    return yul.If(condition, yul.Block([yul.call("revert", 0, 0)]))


def _block(*statements) -> yul.Block:
    return yul.Block(statements)


def _require_unsigned(size: Integer) -> None:
    if size.is_signed():
        raise ValueError("Expected unsigned integer")


def _require_signed(size: Integer) -> None:
    if not size.is_signed():
        raise ValueError("Expected signed integer")


def _min_max(integer: Integer) -> tuple:
    return numeric_min_max()[integer]


def _max(integer: Integer) -> yul.Literal:
    return _min_max(integer)[1]


def checked_add_fns() -> list:
    """Return the addition functions with over-/underflow protection."""
    return [*map(_checked_add_unsigned, _UNSIGNED), *map(_checked_add_signed, _SIGNED)]


def checked_div_fns() -> list:
    """Return the division functions with over-/underflow protection."""
    return [_checked_div_unsigned(), *map(_checked_div_signed, _SIGNED)]


def checked_exp_fns() -> list:
    """Return the exponentiation functions with over-/underflow protection."""
    return [
        _checked_exp_unsigned(),
        _checked_exp_signed(),
        _checked_exp_helper(),
        *map(_exp_unsigned_for, _UNSIGNED),
        *map(_exp_signed_for, _SIGNED),
    ]


def checked_mod_fns() -> list:
    """Return the checked modulo functions."""
    return [_checked_mod_unsigned(), _checked_mod_signed()]


def checked_mul_fns() -> list:
    """Return the multiplication functions with over-/underflow protection."""
    return [*map(_checked_mul_unsigned, _UNSIGNED), *map(_checked_mul_signed, _SIGNED)]


def checked_sub_fns() -> list:
    """Return the subtraction functions with over-/underflow protection."""
    return [_checked_sub_unsigned(), *map(_checked_sub_signed, _SIGNED)]


def all_functions() -> list:
    """Return all math runtime functions."""
    return [
        *checked_add_fns(),
        *checked_div_fns(),
        *checked_exp_fns(),
        *checked_mod_fns(),
        *checked_mul_fns(),
        *checked_sub_fns(),
    ]


def _checked_mod_unsigned() -> yul.FunctionDefinition:
    return yul.function(
        "checked_mod_unsigned",
        ["val1", "val2"],
        ["result"],
        [
            _revert_if(yul.call("iszero", "val2")),
            yul.assign("result", yul.call("mod", "val1", "val2")),
        ],
    )


def _checked_mod_signed() -> yul.FunctionDefinition:
    return yul.function(
        "checked_mod_signed",
        ["val1", "val2"],
        ["result"],
        [
            _revert_if(yul.call("iszero", "val2")),
            yul.assign("result", yul.call("smod", "val1", "val2")),
        ],
    )


def _checked_mul_unsigned(size: Integer) -> yul.FunctionDefinition:
    _require_unsigned(size)
    max_value = _max(size)
    return yul.function(
        names.checked_mul(size),
        ["val1", "val2"],
        ["product"],
        [
            # overflow, if val1 != 0 and val2 > (max_value / val1)
            _revert_if(
                yul.call(
                    "and",
                    yul.call("iszero", yul.call("iszero", "val1")),
                    yul.call("gt", "val2", yul.call("div", max_value, "val1")),
                )
            ),
            yul.assign("product", yul.call("mul", "val1", "val2")),
        ],
    )


def _checked_mul_signed(size: Integer) -> yul.FunctionDefinition:
    _require_signed(size)
    min_value, max_value = _min_max(size)

    def both(first, second):
        return yul.call("and", first, second)

    pos1 = yul.call("sgt", "val1", 0)
    neg1 = yul.call("slt", "val1", 0)
    pos2 = yul.call("sgt", "val2", 0)
    neg2 = yul.call("slt", "val2", 0)

    return yul.function(
        names.checked_mul(size),
        ["val1", "val2"],
        ["product"],
        [
            # overflow, if val1 > 0, val2 > 0 and val1 > (max_value / val2)
            _revert_if(
                both(
                    both(pos1, pos2),
                    yul.call("gt", "val1", yul.call("div", max_value, "val2")),
                )
            ),
            # underflow, if val1 > 0, val2 < 0 and val2 < (min_value / val1)
            _revert_if(
                both(
                    both(pos1, neg2),
                    yul.call("slt", "val2", yul.call("sdiv", min_value, "val1")),
                )
            ),
            # underflow, if val1 < 0, val2 > 0 and val1 < (min_value / val2)
            _revert_if(
                both(
                    both(neg1, pos2),
                    yul.call("slt", "val1", yul.call("sdiv", min_value, "val2")),
                )
            ),
            # overflow, if val1 < 0, val2 < 0 and val1 < (max_value / val2)
            _revert_if(
                both(
                    both(neg1, neg2),
                    yul.call("slt", "val1", yul.call("sdiv", max_value, "val2")),
                )
            ),
            yul.assign("product", yul.call("mul", "val1", "val2")),
        ],
    )


def _checked_add_unsigned(size: Integer) -> yul.FunctionDefinition:
    _require_unsigned(size)
    max_value = _max(size)
    return yul.function(
        names.checked_add(size),
        ["val1", "val2"],
        ["sum"],
        [
            # overflow, if val1 > (max_value - val2)
            _revert_if(yul.call("gt", "val1", yul.call("sub", max_value, "val2"))),
            yul.assign("sum", yul.call("add", "val1", "val2")),
        ],
    )


def _checked_add_signed(size: Integer) -> yul.FunctionDefinition:
    _require_signed(size)
    min_value, max_value = _min_max(size)
    return yul.function(
        names.checked_add(size),
        ["val1", "val2"],
        ["sum"],
        [
            # overflow, if val1 >= 0 and val2 > (max_value - val1)
            _revert_if(
                yul.call(
                    "and",
                    yul.call("iszero", yul.call("slt", "val1", 0)),
                    yul.call("sgt", "val2", yul.call("sub", max_value, "val1")),
                )
            ),
            # underflow, if val1 < 0 and val2 < (min_value - val1)
            _revert_if(
                yul.call(
                    "and",
                    yul.call("slt", "val1", 0),
                    yul.call("slt", "val2", yul.call("sub", min_value, "val1")),
                )
            ),
            yul.assign("sum", yul.call("add", "val1", "val2")),
        ],
    )


def _checked_div_unsigned() -> yul.FunctionDefinition:
    return yul.function(
        "checked_div_unsigned",
        ["val1", "val2"],
        ["result"],
        [
            _revert_if(yul.call("iszero", "val2")),
            yul.assign("result", yul.call("div", "val1", "val2")),
        ],
    )


def _checked_div_signed(size: Integer) -> yul.FunctionDefinition:
    _require_signed(size)
    min_value, _ = _min_max(size)
    return yul.function(
        names.checked_div(size),
        ["val1", "val2"],
        ["result"],
        [
            _revert_if(yul.call("iszero", "val2")),
            # overflow for min_value / -1
            _revert_if(
                yul.call(
                    "and",
                    yul.call("eq", "val1", min_value),
                    yul.call("eq", "val2", yul.call("sub", 0, 1)),
                )
            ),
            yul.assign("result", yul.call("sdiv", "val1", "val2")),
        ],
    )


def _checked_sub_unsigned() -> yul.FunctionDefinition:
    return yul.function(
        "checked_sub_unsigned",
        ["val1", "val2"],
        ["diff"],
        [
            # underflow, if val2 > val1
            _revert_if(yul.call("lt", "val1", "val2")),
            yul.assign("diff", yul.call("sub", "val1", "val2")),
        ],
    )


def _checked_sub_signed(size: Integer) -> yul.FunctionDefinition:
    _require_signed(size)
    min_value, max_value = _min_max(size)
    return yul.function(
        names.checked_sub(size),
        ["val1", "val2"],
        ["diff"],
        [
            # underflow, if val2 >= 0 and val1 < (min_value + val2)
            _revert_if(
                yul.call(
                    "and",
                    yul.call("iszero", yul.call("slt", "val2", 0)),
                    yul.call("slt", "val1", yul.call("add", min_value, "val2")),
                )
            ),
            # overflow, if val2 < 0 and val1 > (max_value + val2)
            _revert_if(
                yul.call(
                    "and",
                    yul.call("slt", "val2", 0),
                    yul.call("sgt", "val1", yul.call("add", max_value, "val2")),
                )
            ),
            yul.assign("diff", yul.call("sub", "val1", "val2")),
        ],
    )


def _exp_signed_for(size: Integer) -> yul.FunctionDefinition:
    _require_signed(size)
    min_value, max_value = _min_max(size)
    return yul.function(
        names.checked_exp(size),
        ["base", "exponent"],
        ["power"],
        [
            yul.assign(
                "power",
                yul.call("checked_exp_signed", "base", "exponent", min_value, max_value),
            )
        ],
    )


def _exp_unsigned_for(size: Integer) -> yul.FunctionDefinition:
    _require_unsigned(size)
    max_value = _max(size)
    return yul.function(
        names.checked_exp(size),
        ["base", "exponent"],
        ["power"],
        [
            yul.assign(
                "power",
                yul.call("checked_exp_unsigned", "base", "exponent", max_value),
            )
        ],
    )


def _checked_exp_helper() -> yul.FunctionDefinition:
    loop = yul.ForLoop(
        yul.Block(),
        yul.call("gt", "exponent", 1),
        yul.Block(),
        _block(
            # overflow check for base * base
            _revert_if(yul.call("gt", "base", yul.call("div", "max", "base"))),
            # |power| <= base, so the check on base * base also covers power * base
            yul.If(
                yul.call("and", "exponent", 1),
                _block(yul.assign("power", yul.call("mul", "power", "base"))),
            ),
            yul.assign("base", yul.call("mul", "base", "base")),
            yul.assign("exponent", yul.call("shr", 1, "exponent")),
        ),
    )
    return yul.function(
        "checked_exp_helper",
        ["_power", "_base", "exponent", "max"],
        ["power", "base"],
        [
            yul.assign("power", "_power"),
            yul.assign("base", "_base"),
            loop,
        ],
    )


def _checked_exp_signed() -> yul.FunctionDefinition:
    helper_call = yul.assign(
        ["power", "base"],
        yul.call("checked_exp_helper", "power", "base", "exponent", "max"),
    )
    # 0 ** 0 == 1
    small_exponents = yul.Switch(
        yul.Identifier("exponent"),
        [
            yul.Case(yul.literal(0), _block(yul.assign("power", 1), yul.Leave())),
            yul.Case(yul.literal(1), _block(yul.assign("power", "base"), yul.Leave())),
        ],
    )
    # the first iteration is the only one in which base can be negative
    first_square_check = yul.Switch(
        yul.call("sgt", "base", 0),
        [
            yul.Case(
                yul.literal(1),
                _block(_revert_if(yul.call("gt", "base", yul.call("div", "max", "base")))),
            ),
            yul.Case(
                yul.literal(0),
                _block(
                    _revert_if(yul.call("slt", "base", yul.call("sdiv", "max", "base")))
                ),
            ),
        ],
    )
    return yul.function(
        "checked_exp_signed",
        ["base", "exponent", "min", "max"],
        ["power"],
        [
            small_exponents,
            yul.If(
                yul.call("iszero", "base"),
                _block(yul.assign("power", 0), yul.Leave()),
            ),
            yul.assign("power", 1),
            first_square_check,
            yul.If(yul.call("and", "exponent", 1), _block(yul.assign("power", "base"))),
            yul.assign("base", yul.call("mul", "base", "base")),
            yul.assign("exponent", yul.call("shr", 1, "exponent")),
            helper_call,
            _revert_if(
                yul.call(
                    "and",
                    yul.call("sgt", "power", 0),
                    yul.call("gt", "power", yul.call("div", "max", "base")),
                )
            ),
            _revert_if(
                yul.call(
                    "and",
                    yul.call("slt", "power", 0),
                    yul.call("slt", "power", yul.call("sdiv", "min", "base")),
                )
            ),
            yul.assign("power", yul.call("mul", "power", "base")),
        ],
    )


def _checked_exp_unsigned() -> yul.FunctionDefinition:
    helper_call = yul.assign(
        ["power", "base"],
        yul.call("checked_exp_helper", 1, "base", "exponent", "max"),
    )
    small_bases = yul.Switch(
        yul.Identifier("base"),
        [
            yul.Case(yul.literal(1), _block(yul.assign("power", 1), yul.Leave())),
            yul.Case(
                yul.literal(2),
                _block(
                    _revert_if(yul.call("gt", "exponent", 255)),
                    yul.assign("power", yul.call("exp", 2, "exponent")),
                    _revert_if(yul.call("gt", "power", "max")),
                    yul.Leave(),
                ),
            ),
        ],
    )
    return yul.function(
        "checked_exp_unsigned",
        ["base", "exponent", "max"],
        ["power"],
        [
            # 0 ** 0 == 1
            yul.If(
                yul.call("iszero", "exponent"),
                _block(yul.assign("power", 1), yul.Leave()),
            ),
            yul.If(
                yul.call("iszero", "base"),
                _block(yul.assign("power", 0), yul.Leave()),
            ),
            small_bases,
            _revert_if(
                yul.call(
                    "and",
                    yul.call("sgt", "power", 0),
                    yul.call("gt", "power", yul.call("div", "max", "base")),
                )
            ),
            yul.If(
                yul.call(
                    "or",
                    yul.call(
                        "and",
                        yul.call("lt", "base", 11),
                        yul.call("lt", "exponent", 78),
                    ),
                    yul.call(
                        "and",
                        yul.call("lt", "base", 307),
                        yul.call("lt", "exponent", 32),
                    ),
                ),
                _block(
                    yul.assign("power", yul.call("exp", "base", "exponent")),
                    _revert_if(yul.call("gt", "power", "max")),
                    yul.Leave(),
                ),
            ),
            helper_call,
            _revert_if(yul.call("gt", "power", yul.call("div", "max", "base"))),
            yul.assign("power", yul.call("mul", "power", "base")),
        ],
    )