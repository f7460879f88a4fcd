"""The ABI dispatcher that routes incoming calls to public functions."""

from __future__ import annotations

from typing import Sequence

from yulgen import names, yul
from yulgen.hashing import func_selector
from yulgen.operations import abi as abi_operations
from yulgen.types import AbiDecodeLocation


def dispatcher(functions: Sequence):
    """Build a switch statement that dispatches calls to the contract's functions."""
    arms = [_dispatch_arm(function) for function in functions]
    if not arms:
        return yul.call("pop", 0)
    return yul.Switch(yul.call("cloadn", 0, 4), arms)


def selector(name: str, params: Sequence) -> yul.Literal:
    """Return the selector literal of a function with the given parameter types."""
    return yul.Literal(func_selector(name, [param.abi_selector_name() for param in params]))


def _selection(name: str, params: Sequence) -> yul.FunctionCall:
    decoded_params = abi_operations.decode(
        list(params), yul.literal(4), AbiDecodeLocation.CALLDATA
    )
    return yul.call(names.func_name(name), *decoded_params)


def _dispatch_arm(function) -> yul.Case:
    param_types = function.param_types()
    case_selector = selector(function.name, param_types)

    if function.return_type.is_unit():
        # every user-defined function returns a value, so a unit result is popped
        body = [yul.call("pop", _selection(function.name, param_types))]
        return yul.Case(case_selector, yul.Block(body))

    raw_return = yul.Identifier("raw_return")
    return_data = abi_operations.encode([function.return_type], [raw_return])
    return_size = abi_operations.encode_size([function.return_type], [raw_return])
    body = [
        yul.declare("raw_return", _selection(function.name, param_types)),
        yul.call("return", return_data, return_size),
    ]
    return yul.Case(case_selector, yul.Block(body))