# errors.py
from __future__ import annotations


class EnigmaError(Exception):
    """Root of every failure the machine raises on purpose."""


class ConfigError(EnigmaError, ValueError):
    """Bad static configuration: alphabet, cycles, wheels or settings."""


class UnknownSymbolError(EnigmaError, ValueError):
    """A symbol was used against an alphabet that does not contain it."""


class RotorStateError(EnigmaError, RuntimeError):
    """Illegal mutation of a reflector."""


__all__ = [
    "EnigmaError",
    "ConfigError",
    "UnknownSymbolError",
    "RotorStateError",
]
