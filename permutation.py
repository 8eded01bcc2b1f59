# permutation.py
from __future__ import annotations

from typing import List

from alphabet import Alphabet, RESERVED
from debug import Debug
from errors import ConfigError, UnknownSymbolError

debug = Debug()


class Permutation:
    """A permutation of an alphabet's index space in cycle notation.

    ``cycles`` looks like ``"(ABC) (DE)"``: A→B, B→C, C→A, D↔E. Symbols
    left out of every cycle map to themselves. Whitespace between cycles is
    ignored, whitespace inside one is an error.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self.cycles: List[str] = []

        n = alphabet.size()
        # integer lookup tables, identity until a cycle says otherwise
        self._fwd = list(range(n))
        self._rev = list(range(n))
        self._used: set[str] = set()

        for cycle in self._split(cycles):
            self._add_cycle(cycle)

        debug.log("permutation", f"built {self!r}")

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a classic wiring string (symbol *i* → ``wiring[i]``)."""
        if sorted(wiring) != sorted(alphabet.symbols):
            raise ConfigError("wiring must be a permutation of alphabet")

        seen: set[str] = set()
        groups: List[str] = []
        for start in alphabet.symbols:
            if start in seen:
                continue
            cycle = ""
            ch = start
            while ch not in seen:
                seen.add(ch)
                cycle += ch
                ch = wiring[alphabet.to_index(ch)]
            groups.append(f"({cycle})")
        return cls(" ".join(groups), alphabet)

    # ── parsing ──────────────────────────────────────────────────
    def _split(self, text: str) -> List[str]:
        """Break cycle notation into bare cycle strings, checking shape."""
        result: List[str] = []
        current: str | None = None

        for ch in text:
            if ch == "(":
                if current is not None:
                    raise ConfigError(f"Cycle opened inside a cycle in {text!r}")
                current = ""
            elif ch == ")":
                if current is None:
                    raise ConfigError(f"Cycle closed before it was opened in {text!r}")
                if not current:
                    raise ConfigError(f"Empty cycle in {text!r}")
                result.append(current)
                current = None
            elif ch.isspace():
                if current:
                    raise ConfigError(f"Whitespace inside a cycle in {text!r}")
            elif ch in RESERVED:
                raise ConfigError(f"Character {ch!r} does not belong in cycles")
            elif current is None:
                raise ConfigError(f"Symbol {ch!r} outside of any cycle in {text!r}")
            else:
                current += ch

        if current is not None:
            raise ConfigError(f"Unclosed cycle in {text!r}")
        return result

    def _add_cycle(self, cycle: str) -> None:
        """Add c0→c1→…→cm→c0, rejecting any symbol already in a cycle."""
        for ch in cycle:
            if ch in self._used:
                raise ConfigError(f"Symbol {ch!r} appears in more than one cycle")
            self._used.add(ch)

        idx = [self._alphabet.to_index(ch) for ch in cycle]
        for a, b in zip(idx, idx[1:] + idx[:1]):
            self._fwd[a] = b
            self._rev[b] = a
        self.cycles.append(cycle)

    # ── accessors ────────────────────────────────────────────────
    def size(self) -> int:
        return self._alphabet.size()

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def wrap(self, p: int) -> int:
        """Return *p* modulo the alphabet size."""
        return p % self.size()

    # ── evaluation ───────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        """Apply the permutation once; symbols in, symbols out."""
        if isinstance(p, str):
            return self._alphabet.to_symbol(self._fwd[self._alphabet.to_index(p)])
        return self._fwd[self._check(p)]

    def invert(self, c: int | str) -> int | str:
        if isinstance(c, str):
            return self._alphabet.to_symbol(self._rev[self._alphabet.to_index(c)])
        return self._rev[self._check(c)]

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(self._fwd[i] != i for i in range(self.size()))

    def _check(self, index: int) -> int:
        if not (0 <= index < self.size()):
            raise UnknownSymbolError(
                f"Index {index} not in alphabet of size {self.size()}"
            )
        return index

    def __repr__(self) -> str:
        body = " ".join(f"({c})" for c in self.cycles)
        return f"<Permutation {body or 'identity'}>"
