# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, RotorStateError
from permutation import Permutation

debug = Debug()


class RotorKind(Enum):
    PLAIN = "plain"           # structural base, never inserted by config
    FIXED = "N"               # static rewiring
    MOVING = "M"              # pawl-driven, carries notches
    REFLECTOR = "R"           # slot 0 only, never set


class Rotor:
    """One wheel of the machine.

    Every kind shares the same signal algebra; the kind only decides
    whether the wheel may rotate, be set, or be stepped by a notch.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.PLAIN,
        notches: str = "",
    ) -> None:
        if notches and kind is not RotorKind.MOVING:
            raise ConfigError(f"Rotor {name}: only moving rotors have notches")
        for ch in notches:
            if not perm.alphabet().contains(ch):
                raise ConfigError(f"Rotor {name}: notch {ch!r} not in alphabet")

        self.name = name
        self.kind = kind
        self.notches = set(notches)
        self._perm = perm
        self._setting = 0
        self.ring_offset = 0

    # ── factories ────────────────────────────────────────────────
    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTOR)

    # ── accessors ────────────────────────────────────────────────
    def permutation(self) -> Permutation:
        return self._perm

    def alphabet(self) -> Alphabet:
        return self._perm.alphabet()

    def size(self) -> int:
        return self._perm.size()

    def setting(self) -> int:
        return self._setting

    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    # ── ring & setting ───────────────────────────────────────────
    def set(self, posn: int | str) -> None:
        """Turn the wheel so *posn* shows in the window."""
        if self.reflecting():
            raise RotorStateError(f"Reflector {self.name} cannot be set")
        if isinstance(posn, str):
            posn = self.alphabet().to_index(posn)
        self._setting = self._perm.wrap(posn)

    def set_ring_offset(self, posn: int | str) -> None:
        """Make *posn* the ring's reference point (Ringstellung).

        The window setting is left alone, so notches keep firing on the
        window symbol while the wiring core is shifted by the offset.
        Apply before the first keypress of a message group.
        """
        if self.reflecting():
            raise RotorStateError(f"Reflector {self.name} has no ring")
        if isinstance(posn, str):
            posn = self.alphabet().to_index(posn)
        self.ring_offset = self._perm.wrap(posn)

    # ── stepping ─────────────────────────────────────────────────
    def at_notch(self) -> bool:
        if not self.rotates():
            return False
        return self.alphabet().to_symbol(self._setting) in self.notches

    def advance(self) -> None:
        if self.reflecting():
            raise RotorStateError(f"Reflector {self.name} cannot advance")
        if not self.rotates():
            return
        self._setting = self._perm.wrap(self._setting + 1)
        debug.log("stepping", f"{self.name} -> {self._setting}")

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        shift = self._perm.wrap(p + self._setting - self.ring_offset)
        mapped = self._perm.permute(shift)
        result = self._perm.wrap(mapped - self._setting + self.ring_offset)
        debug.log("rotor", f"{self.name} fwd {p}->{result}")
        return result

    def convert_backward(self, e: int) -> int:
        shift = self._perm.wrap(e + self._setting - self.ring_offset)
        mapped = self._perm.invert(shift)
        result = self._perm.wrap(mapped - self._setting + self.ring_offset)
        debug.log("rotor", f"{self.name} bwd {e}->{result}")
        return result

    # ── niceties ─────────────────────────────────────────────────
    def __repr__(self) -> str:
        return (f"<Rotor {self.name} {self.kind.name.lower()} "
                f"pos={self._setting} ring={self.ring_offset}>")
