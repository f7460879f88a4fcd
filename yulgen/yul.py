"""Yul syntax tree nodes and their canonical textual form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class Identifier:
    """A Yul identifier."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Literal:
    """A Yul literal, kept exactly as written."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FunctionCall:
    """A call expression, also usable as an expression statement."""

    name: Identifier
    arguments: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.name}({args})"


Expression = Union[Identifier, Literal, FunctionCall]


@dataclass(frozen=True)
class Block:
    """A sequence of statements between braces."""

    statements: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def __str__(self) -> str:
        inner = "".join(f" {stmt}" for stmt in self.statements)
        return f"{{{inner} }}"


@dataclass(frozen=True)
class VariableDeclaration:
    """`let a, b := value`, the value being optional."""

    identifiers: tuple
    value: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))

    def __str__(self) -> str:
        names = ", ".join(str(name) for name in self.identifiers)
        if self.value is None:
            return f"let {names}"
        return f"let {names} := {self.value}"


@dataclass(frozen=True)
class Assignment:
    """`a, b := value`."""

    identifiers: tuple
    value: Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))

    def __str__(self) -> str:
        names = ", ".join(str(name) for name in self.identifiers)
        return f"{names} := {self.value}"


@dataclass(frozen=True)
class If:
    """A conditional block."""

    condition: Expression
    body: Block

    def __str__(self) -> str:
        return f"if {self.condition} {self.body}"


@dataclass(frozen=True)
class Case:
    """A switch arm; a missing literal makes it the default arm."""

    literal: Optional[Literal]
    body: Block

    def __str__(self) -> str:
        if self.literal is None:
            return f"default {self.body}"
        return f"case {self.literal} {self.body}"


@dataclass(frozen=True)
class Switch:
    """A switch statement over an expression."""

    expression: Expression
    cases: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cases", tuple(self.cases))

    def __str__(self) -> str:
        arms = "".join(f" {case}" for case in self.cases)
        return f"switch {self.expression}{arms}"


@dataclass(frozen=True)
class ForLoop:
    """A `for` loop with init, condition, post and body parts."""

    init: Block
    condition: Expression
    post: Block
    body: Block

    def __str__(self) -> str:
        return f"for {self.init} {self.condition} {self.post} {self.body}"


@dataclass(frozen=True)
class Leave:
    """Leaves the current function."""

    def __str__(self) -> str:
        return "leave"


@dataclass(frozen=True)
class FunctionDefinition:
    """A Yul function definition."""

    name: Identifier
    parameters: tuple = ()
    returns: tuple = ()
    body: Block = field(default_factory=Block)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "returns", tuple(self.returns))

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        text = f"function {self.name}({params})"
        if self.returns:
            text += " -> " + ", ".join(str(r) for r in self.returns)
        return f"{text} {self.body}"


Statement = Union[
    Block,
    VariableDeclaration,
    Assignment,
    If,
    Switch,
    ForLoop,
    Leave,
    FunctionDefinition,
    FunctionCall,
]


@dataclass(frozen=True)
class Data:
    """A named data section of an object."""

    name: str
    value: str

    def __str__(self) -> str:
        return f'data "{self.name}" "{self.value}"'


@dataclass(frozen=True)
class Code:
    """The code section of an object."""

    block: Block

    def __str__(self) -> str:
        return f"code {self.block}"


@dataclass(frozen=True)
class Object:
    """A Yul object holding code, nested objects and data."""

    name: Identifier
    code: Code
    objects: tuple = ()
    data: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "data", tuple(self.data))

    def __str__(self) -> str:
        parts = [str(self.code), *map(str, self.objects), *map(str, self.data)]
        return f'object "{self.name}" {{ {" ".join(parts)} }}'


def identifier(name: Union[str, Identifier]) -> Identifier:
    """Return an identifier for the given name."""
    if isinstance(name, Identifier):
        return name
    return Identifier(name)


def literal(value: Union[str, int, bool, Literal]) -> Literal:
    """Return a literal; integers render in decimal, booleans as true/false."""
    if isinstance(value, Literal):
        return value
    if isinstance(value, bool):
        return Literal("true" if value else "false")
    return Literal(str(value))


def _expression(value) -> Expression:
    if isinstance(value, (Identifier, Literal, FunctionCall)):
        return value
    if isinstance(value, (bool, int)):
        return literal(value)
    if isinstance(value, str):
        return Identifier(value)
    raise TypeError(f"cannot use {value!r} as a Yul expression")


def _identifiers(names) -> tuple:
    if isinstance(names, (str, Identifier)):
        return (identifier(names),)
    return tuple(identifier(name) for name in names)


def call(name: Union[str, Identifier], *args) -> FunctionCall:
    """Build a call; string arguments are identifiers, numbers are literals."""
    return FunctionCall(identifier(name), tuple(_expression(arg) for arg in args))


def declare(name, value=None) -> VariableDeclaration:
    """Declare one or several variables, optionally initialised."""
    return VariableDeclaration(
        _identifiers(name), None if value is None else _expression(value)
    )


def assign(name, value) -> Assignment:
    """Assign a value to one or several variables."""
    return Assignment(_identifiers(name), _expression(value))


def function(
    name: Union[str, Identifier],
    params: Iterable,
    returns: Iterable,
    statements: Iterable,
) -> FunctionDefinition:
    """Build a function definition from names and body statements."""
    return FunctionDefinition(
        identifier(name),
        _identifiers(params),
        _identifiers(returns),
        Block(tuple(statements)),
    )