"""Generators for Yul runtime helper functions."""