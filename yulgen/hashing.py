"""Keccak-256 helpers and ABI function selectors."""

from __future__ import annotations

from typing import Iterable, Union

from Crypto.Hash import keccak


def keccak256(data: Union[bytes, str]) -> bytes:
    """Return the 32-byte Keccak-256 digest; strings are hashed as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return keccak.new(digest_bits=256, data=data).digest()


def keccak_hex(data: Union[bytes, str]) -> str:
    """Return the Keccak-256 digest as a 0x-prefixed hex string."""
    return "0x" + keccak256(data).hex()


def func_selector(name: str, params: Iterable[str]) -> str:
    """Return the 4-byte selector of `name(params...)` as 0x-prefixed hex."""
    signature = f"{name}({','.join(params)})"
    return "0x" + keccak256(signature)[:4].hex()