"""Expressions that call and create other contracts."""

from __future__ import annotations

from typing import Sequence

from yulgen import names, yul
from yulgen.types import Contract


def _name_literal(contract: Contract) -> yul.Literal:
    return yul.Literal(f'"{contract.name}"')


def call(contract: Contract, func_name: str, address, params: Sequence) -> yul.FunctionCall:
    """Return an expression calling a function of the contract at `address`."""
    return yul.call(names.contract_call(contract.name, func_name), address, *params)


def create2(contract: Contract, value, salt) -> yul.FunctionCall:
    """Return an expression deploying the contract with `create2`."""
    name = _name_literal(contract)
    return yul.call(
        "contract_create2",
        yul.call("dataoffset", name),
        yul.call("datasize", name),
        value,
        salt,
    )


def create(contract: Contract, value) -> yul.FunctionCall:
    """Return an expression deploying the contract with `create`."""
    name = _name_literal(contract)
    return yul.call(
        "contract_create",
        yul.call("dataoffset", name),
        yul.call("datasize", name),
        value,
    )