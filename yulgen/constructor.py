"""Constructor code for deploying contracts."""

from __future__ import annotations

from typing import Sequence

from yulgen import yul
from yulgen.operations import abi as abi_operations
from yulgen.types import AbiDecodeLocation


def _deployment() -> list:
    runtime = yul.Literal('"runtime"')
    return [
        yul.declare("size", yul.call("datasize", runtime)),
        yul.call("datacopy", 0, yul.call("dataoffset", runtime), "size"),
        yul.call("return", 0, "size"),
    ]


def build() -> yul.Code:
    """Build a constructor for a contract with no init function."""
    return yul.Code(yul.Block(_deployment()))


def build_with_init(
    contract_name: str,
    init_func,
    init_params: Sequence,
    runtime: Sequence,
) -> yul.Code:
    """Build a constructor that runs the init function before deploying.

    Init parameters are appended to the init code; they are copied to memory,
    decoded there and passed to the init function.
    """
    decoded_params = abi_operations.decode(
        list(init_params), yul.Identifier("params_start_mem"), AbiDecodeLocation.MEMORY
    )
    init_func_name = yul.Identifier("$$__init__")
    name = yul.Literal(f'"{contract_name}"')

    statements = [
        yul.declare("params_start_code", yul.call("datasize", name)),
        yul.declare("params_end_code", yul.call("codesize")),
        yul.declare(
            "params_size", yul.call("sub", "params_end_code", "params_start_code")
        ),
        yul.declare("params_start_mem", yul.call("alloc", "params_size")),
        yul.call("codecopy", "params_start_mem", "params_start_code", "params_size"),
        init_func,
        # init returns a unit value, which must be popped
        yul.call("pop", yul.call(init_func_name, *decoded_params)),
        *runtime,
        *_deployment(),
    ]
    return yul.Code(yul.Block(statements))