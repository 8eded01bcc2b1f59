# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import ConfigError, UnknownSymbolError

debug = Debug()

RESERVED = "()*"
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet:
    """Ordered, duplicate-free symbols; a symbol's index is its position."""

    def __init__(self, symbols: str = UPPER) -> None:
        self._install(symbols)

    def _install(self, symbols: str) -> None:
        seen: set[str] = set()
        for ch in symbols:
            if ch in RESERVED:
                raise ConfigError(f"Alphabet cannot contain {RESERVED!r}: got {ch!r}")
            if ch in seen:
                raise ConfigError(f"Symbol {ch!r} repeated in alphabet")
            seen.add(ch)

        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(symbols)
        }
        debug.log("alphabet", f"installed {len(symbols)} symbols")

    def replace(self, symbols: str) -> None:
        """Swap the whole alphabet; only meant for configuration time.

        Permutations and rotors built on the old symbols keep lookup tables
        sized for them and must be rebuilt afterwards.
        """
        self._install(symbols)

    # ── queries ──────────────────────────────────────────────────
    def size(self) -> int:
        return len(self.symbols)

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise UnknownSymbolError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise IndexError(f"Signal {index} out of range 0–{hi}")
        return self.symbols[index]

    __len__ = size
    __contains__ = contains

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols!r}>"
