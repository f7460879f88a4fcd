"""Yul expressions and statements for ABI, data, struct and contract operations."""