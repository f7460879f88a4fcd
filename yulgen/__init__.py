"""Yul syntax trees and generators for EVM contract code."""

__version__ = "0.1.0"