"""Runtime functions that call and create other contracts."""

from __future__ import annotations

from yulgen import names, yul
from yulgen.hashing import func_selector
from yulgen.operations import abi as abi_operations
from yulgen.types import AbiDecodeLocation, Contract


def all_functions() -> list:
    """Return all contract runtime functions."""
    return [create2(), create()]


def calls(contract: Contract) -> list:
    """Build functions calling each of the contract's public functions."""
    definitions = []
    for function in contract.functions:
        function_name = names.contract_call(contract.name, function.name)
        param_types = function.param_types()
        param_names = [typ.abi_selector_name() for typ in param_types]

        param_idents = [yul.Identifier(f"val_{n}") for n in range(len(function.params))]
        # the selector fills the first 4 bytes of the calldata
        selector = yul.literal(func_selector(function.name, param_names))
        encoding = abi_operations.encode(param_types, param_idents)
        encoding_size = abi_operations.encode_size(param_types, param_idents)

        body = [
            yul.declare("instart", yul.call("alloc_mstoren", selector, 4)),
            yul.declare("insize", yul.call("add", 4, encoding_size)),
            yul.call("pop", encoding),
            yul.call(
                "pop",
                yul.call(
                    "call", yul.call("gas"), "addr", 0, "instart", "insize", 0, 0
                ),
            ),
        ]

        if not function.return_type.is_unit():
            decoding = abi_operations.decode(
                [function.return_type],
                yul.Identifier("outstart"),
                AbiDecodeLocation.MEMORY,
            )[0]
            body += [
                yul.declare("outsize", yul.call("returndatasize")),
                yul.declare("outstart", yul.call("alloc", "outsize")),
                yul.call("returndatacopy", "outstart", 0, "outsize"),
                yul.assign("return_val", decoding),
            ]

        definitions.append(
            yul.function(function_name, ["addr", *param_idents], ["return_val"], body)
        )
    return definitions


def create2() -> yul.FunctionDefinition:
    """Function that runs the `create2` operation."""
    return yul.function(
        "contract_create2",
        ["data_ptr", "data_size", "value", "salt"],
        ["return_address"],
        [
            yul.declare("mptr", yul.call("alloc", "data_size")),
            yul.call("datacopy", "mptr", "data_ptr", "data_size"),
            yul.assign(
                "return_address",
                yul.call("create2", "value", "mptr", "data_size", "salt"),
            ),
        ],
    )


def create() -> yul.FunctionDefinition:
    """Function that runs the `create` operation."""
    return yul.function(
        "contract_create",
        ["data_ptr", "data_size", "value"],
        ["return_address"],
        [
            yul.declare("mptr", yul.call("alloc", "data_size")),
            yul.call("datacopy", "mptr", "data_ptr", "data_size"),
            yul.assign(
                "return_address", yul.call("create", "value", "mptr", "data_size")
            ),
        ],
    )