"""Assembly of the runtime functions a contract needs."""

from __future__ import annotations

from yulgen.runtime.dispatcher import dispatcher
from yulgen.runtime.functions import abi as abi_functions
from yulgen.runtime.functions import contracts as contract_functions
from yulgen.runtime.functions import data as data_functions
from yulgen.runtime.functions import math as math_functions
from yulgen.runtime.functions import structs as struct_functions
from yulgen.types import AbiDecodeLocation


def std() -> list:
    """Return all functions that are always available at runtime."""
    return [
        *contract_functions.all_functions(),
        *abi_functions.all_functions(),
        *data_functions.all_functions(),
        *math_functions.all_functions(),
    ]


def build(attributes) -> list:
    """Build the function statements a contract needs at runtime."""
    external_functions = [
        function
        for contract in attributes.external_contracts
        for function in contract.functions
    ]

    encode_batch = [
        *(
            [function.return_type]
            for function in attributes.public_functions
            if not function.return_type.is_unit()
        ),
        *(list(event.non_indexed_field_types()) for event in attributes.events),
        *(list(function.param_types()) for function in external_functions),
        *([struct_] for struct_ in attributes.structs),
    ]
    encoding = abi_functions.batch_encode(encode_batch)

    init_params = (
        attributes.init_function.param_types()
        if attributes.init_function is not None
        else []
    )
    decode_batch = [
        *(
            (typ, AbiDecodeLocation.CALLDATA)
            for function in attributes.public_functions
            for typ in function.param_types()
        ),
        *((typ, AbiDecodeLocation.MEMORY) for typ in init_params),
        *(
            (function.return_type, AbiDecodeLocation.MEMORY)
            for function in external_functions
            if not function.return_type.is_unit()
        ),
    ]
    decoding = abi_functions.batch_decode(decode_batch)

    contract_calls = [
        statement
        for contract in attributes.external_contracts
        for statement in contract_functions.calls(contract)
    ]
    struct_apis = [
        statement
        for struct_ in attributes.structs
        for statement in struct_functions.struct_apis(struct_)
    ]

    return [*std(), *encoding, *decoding, *contract_calls, *struct_apis]


def build_with_abi_dispatcher(attributes) -> list:
    """Build the runtime functions followed by the ABI dispatcher."""
    return [*build(attributes), dispatcher(list(attributes.public_functions))]