from yulgen.constructor import build, build_with_init
from yulgen.types import FeString, Integer
from yulgen.yul import Identifier, assign, call, function

DEPLOYMENT = (
    'let size := datasize("runtime") '
    'datacopy(0, dataoffset("runtime"), size) '
    "return(0, size)"
)


def test_constructor_without_func():
    assert str(build()) == f"code {{ {DEPLOYMENT} }}"


def _init():
    return function("$$__init__", ["$x"], ["return_val"], [assign("return_val", 0)])


def test_constructor_with_init_layout():
    runtime = [call("pop", 0)]
    code = build_with_init("Foo", _init(), [Integer.U256], runtime)
    assert str(code) == (
        "code { "
        'let params_start_code := datasize("Foo") '
        "let params_end_code := codesize() "
        "let params_size := sub(params_end_code, params_start_code) "
        "let params_start_mem := alloc(params_size) "
        "codecopy(params_start_mem, params_start_code, params_size) "
        f"{_init()} "
        "pop($$__init__(abi_decode_u256_mem(params_start_mem, 0))) "
        "pop(0) "
        f"{DEPLOYMENT} "
        "}"
    )


def test_constructor_with_init_decodes_each_param():
    code = build_with_init("Bar", _init(), [Integer.U256, FeString(26)], [])
    pop_init = code.block.statements[6]
    init_call = pop_init.arguments[0]
    assert init_call.name == Identifier("$$__init__")
    assert [str(arg) for arg in init_call.arguments] == [
        "abi_decode_u256_mem(params_start_mem, 0)",
        "abi_decode_string_26_mem(params_start_mem, 32)",
    ]


def test_constructor_with_init_ends_with_deployment():
    code = build_with_init("Bar", _init(), [], [])
    tail = " ".join(str(stmt) for stmt in code.block.statements[-3:])
    assert tail == DEPLOYMENT
    assert str(code.block.statements[6]) == "pop($$__init__())"