from yulgen import yul
from yulgen.runtime.functions import contracts
from yulgen.types import Base, Contract, FunctionAttributes, Integer


def _contract(return_type):
    return Contract(
        name="Foo",
        functions=[
            FunctionAttributes(
                name="bar", params=[("x", Integer.U256)], return_type=return_type
            )
        ],
    )


def test_all_functions_names():
    assert [str(f.name) for f in contracts.all_functions()] == [
        "contract_create2",
        "contract_create",
    ]


def test_create2_signature():
    definition = contracts.create2()
    assert [str(p) for p in definition.parameters] == [
        "data_ptr",
        "data_size",
        "value",
        "salt",
    ]
    assert str(definition.body.statements[-1]) == (
        "return_address := create2(value, mptr, data_size, salt)"
    )


def test_create_text():
    assert str(contracts.create()) == (
        "function contract_create(data_ptr, data_size, value) -> return_address "
        "{ let mptr := alloc(data_size) datacopy(mptr, data_ptr, data_size) "
        "return_address := create(value, mptr, data_size) }"
    )


def test_calls_without_functions_is_empty():
    assert contracts.calls(Contract(name="Empty")) == []


def test_call_with_unit_return():
    (definition,) = contracts.calls(_contract(Base.UNIT))
    assert str(definition.name) == "Foo_bar"
    assert [str(p) for p in definition.parameters] == ["addr", "val_0"]
    assert [str(r) for r in definition.returns] == ["return_val"]
    assert len(definition.body.statements) == 4
    assert str(definition.body.statements[0]) == (
        "let instart := alloc_mstoren(0x0423a132, 4)"
    )
    assert str(definition.body.statements[2]) == "pop(abi_encode_u256(val_0))"


def test_call_with_return_value_decodes_output():
    (definition,) = contracts.calls(_contract(Integer.U256))
    statements = definition.body.statements
    assert len(statements) == 8
    assert isinstance(statements[-1], yul.Assignment)
    assert str(statements[-1]) == "return_val := abi_decode_u256_mem(outstart, 0)"


def test_call_issues_external_call():
    (definition,) = contracts.calls(_contract(Base.UNIT))
    assert str(definition.body.statements[3]) == (
        "pop(call(gas(), addr, 0, instart, insize, 0, 0))"
    )


def test_one_call_function_per_contract_function():
    contract = Contract(
        name="Foo",
        functions=[
            FunctionAttributes(name="a"),
            FunctionAttributes(name="b", params=[("x", Base.ADDRESS), ("y", Base.BOOL)]),
        ],
    )
    definitions = contracts.calls(contract)
    assert [str(d.name) for d in definitions] == ["Foo_a", "Foo_b"]
    assert [str(p) for p in definitions[1].parameters] == ["addr", "val_0", "val_1"]