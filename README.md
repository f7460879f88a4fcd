# yulgen

`yulgen` builds Yul source for EVM contracts. It is a library: you describe
types, functions and contracts in Python, and it returns Yul syntax tree nodes
that print as Yul source with `str()`.

## What is in the package

- `yulgen.yul` – the syntax tree (`Identifier`, `Literal`, `FunctionCall`,
  `Block`, `VariableDeclaration`, `Assignment`, `If`, `Switch`, `Case`,
  `ForLoop`, `Leave`, `FunctionDefinition`, `Code`, `Data`, `Object`) and the
  builders `identifier`, `literal`, `call`, `declare`, `assign` and `function`.
- `yulgen.types` – fixed-size types (`Integer`, `Base`, `Array`, `FeString`,
  `Tuple`, `Struct`, `Contract`), their ABI shapes (`AbiUint`, `AbiArray`,
  `AbiTuple`), `AbiDecodeLocation`, and the metadata classes
  `FunctionAttributes`, `EventDef` and `ContractAttributes`.
- `yulgen.hashing` – `keccak256`, `keccak_hex` and `func_selector`.
- `yulgen.names` – names of generated functions and variables
  (checked arithmetic, ABI encoders and decoders, struct helpers, contract calls).
- `yulgen.utils` – `abi_head_offsets` and `ceil_32`.
- `yulgen.constants` – `numeric_min_max`, the bounds of every integer type as
  Yul literals.
- `yulgen.constructor` – `build` and `build_with_init`, constructor code for
  contracts without and with an `__init__` function.
- `yulgen.operations.abi`, `.data`, `.structs`, `.contracts` – expressions and
  statements for encoding, decoding, loading, storing and copying data,
  emitting events, struct creation and field access, and calling or creating
  contracts.
- `yulgen.runtime.functions.abi`, `.data`, `.math`, `.structs`, `.contracts` –
  the Yul helper functions these operations call at runtime, including
  overflow-checked arithmetic for every integer width.
- `yulgen.runtime.dispatcher` – `dispatcher`, the switch that routes calls by
  function selector, and `selector`.
- `yulgen.runtime.builder` – `std`, `build` and `build_with_abi_dispatcher`,
  which assemble every runtime function a contract described by a
  `ContractAttributes` value needs.

## Installation

```
pip install yulgen
```

## Examples

Every node prints as Yul source:

```python
from yulgen import constructor

print(constructor.build())
# code { let size := datasize("runtime") datacopy(0, dataoffset("runtime"), size) return(0, size) }
```

Building Yul by hand; string arguments become identifiers, numbers become
literals:

```python
from yulgen import yul

print(yul.function("inc", ["a"], ["r"], [yul.assign("r", yul.call("add", "a", 1))]))
# function inc(a) -> r { r := add(a, 1) }
```

Names for ABI helpers follow the types involved:

```python
from yulgen import names
from yulgen.types import AbiDecodeLocation, FeString

print(names.decode_name(FeString(max_size=42), AbiDecodeLocation.MEMORY))
# abi_decode_string_42_mem
```

Struct field getters account for left padding within each 32-byte word:

```python
from yulgen.runtime.functions import structs
from yulgen.types import Base, Struct

foo = Struct("Foo")
foo.add_field("bar", Base.BOOL)
print(structs.generate_get_fn(foo, "bar"))
# function struct_Foo_get_bar_ptr(ptr) -> return_val { return_val := add(ptr, 31) }
```

Function selectors are the first four bytes of the Keccak-256 hash of the
signature:

```python
from yulgen.runtime.dispatcher import selector

print(selector("foo", []))
# 0xc2985578
```

## Errors

- ABI encoding and decoding of arrays whose elements are arrays or tuples
  raises `NotImplementedError` (`ValueError` from `utils.abi_head_offsets`).
- `Struct.add_field` raises `ValueError` for a duplicate field name, and
  `generate_get_fn` raises `ValueError` for an unknown field.
- The unit type has no ABI encoding or name; asking for one raises `ValueError`.

## What the package does not do

`yulgen` generates Yul from descriptions you build in Python. It does not
parse or analyse contract source code, so it does not turn function bodies,
expressions or assignments into Yul, and it does not produce complete
contract `Object`s by itself: you supply the `ContractAttributes`, the user
functions and the constructor pieces. It does not compile Yul to bytecode and
has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```