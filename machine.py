# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A rotor machine with ``num_rotors`` slots and ``pawls`` pawls.

    Slot 0 holds the reflector; the rightmost ``pawls`` slots hold the
    moving rotors. Inserted rotors are the catalogue objects themselves,
    so their settings change as the machine runs.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise ConfigError("num_rotors must be more than 1")
        if pawls < 0:
            raise ConfigError("pawls cannot be negative")
        if pawls >= num_rotors:
            raise ConfigError("pawls must be less than num_rotors")

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls

        self.all_rotors: Dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in self.all_rotors:
                raise ConfigError(f"Rotor name {rotor.name!r} used twice")
            self.all_rotors[rotor.name] = rotor
        if not self.all_rotors:
            raise ConfigError("all_rotors cannot be empty")

        self.rotors: List[Rotor] = []
        self.plugboard = Permutation("", alphabet)

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    # ── configuration ───────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Put the catalogue rotors *names* into the slots, reflector first."""
        if len(names) != self._num_rotors:
            raise ConfigError(
                f"Need exactly {self._num_rotors} rotors, got {len(names)}"
            )
        if len(set(names)) != len(names):
            raise ConfigError("cannot repeat rotors used")

        slots: List[Rotor] = []
        for name in names:
            try:
                slots.append(self.all_rotors[name])
            except KeyError:
                raise ConfigError(f"Unknown rotor {name!r}") from None

        if not slots[0].reflecting():
            raise ConfigError("leftmost rotor must be reflector")
        for rotor in slots[1:]:
            if rotor.reflecting():
                raise ConfigError(f"reflector {rotor.name} only fits slot 0")
        for k in range(self._num_rotors - self._pawls, self._num_rotors):
            if not slots[k].rotates():
                raise ConfigError(f"rotor at slot {k} must have a pawl")
        moving = sum(1 for r in slots if r.rotates())
        if moving != self._pawls:
            raise ConfigError(
                f"{moving} moving rotors inserted, machine has {self._pawls} pawls"
            )

        self.rotors = slots
        debug.log("machine", f"inserted {[r.name for r in slots]}")

    def set_rotors(self, setting: str, ring: str | None = None) -> None:
        """Set slots 1..N-1 from *setting*; optional *ring* gives ring offsets."""
        self._require_rotors()
        need = self._num_rotors - 1
        self._check_letters("setting", setting, need)
        if ring is not None:
            self._check_letters("ring setting", ring, need)

        for i, rotor in enumerate(self.rotors[1:]):
            rotor.set(setting[i])
            rotor.set_ring_offset(ring[i] if ring is not None else 0)

        debug.log("machine", f"window {setting} ring {ring or '-'}")

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet().symbols != self.alphabet.symbols:
            raise ConfigError("plugboard alphabet differs from machine alphabet")
        self.plugboard = plugboard
        debug.log("plugboard", f"{plugboard!r}")

    def settings(self) -> str:
        """Window symbols of slots 1..N-1."""
        self._require_rotors()
        return "".join(
            self.alphabet.to_symbol(r.setting()) for r in self.rotors[1:]
        )

    # ── helpers ─────────────────────────────────────────────────

    def _require_rotors(self) -> None:
        if not self.rotors:
            raise ConfigError("no rotors inserted")

    def _check_letters(self, what: str, letters: str, need: int) -> None:
        if len(letters) != need:
            raise ConfigError(f"{what} {letters!r} must have {need} symbols")
        for ch in letters:
            if not self.alphabet.contains(ch):
                raise ConfigError(f"{what} symbol {ch!r} not in alphabet")

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press (with the double step).

        A rotor sitting at its notch drags its left neighbour along and,
        through the same pawl, steps itself. Decisions are all made
        before any rotor moves.
        """
        slots = self.rotors
        last = len(slots) - 1

        to_advance = {last}
        for i in range(last, 0, -1):
            if slots[i].at_notch() and slots[i - 1].rotates():
                to_advance.update((i - 1, i))

        for i in sorted(to_advance):
            slots[i].advance()

        debug.log("stepping", f"Rotor pos {[r.setting() for r in slots[1:]]}")

    # ── encipher one symbol  ────────────────────────────────────

    def convert(self, c: int) -> int:
        """Advance the rotors, then send signal *c* through the machine."""
        self._require_rotors()
        self._step_rotors()

        signal = self.plugboard.permute(c)

        for rotor in reversed(self.rotors):
            signal = rotor.convert_forward(signal)

        for rotor in self.rotors[1:]:
            signal = rotor.convert_backward(signal)

        out = self.plugboard.permute(signal)
        debug.log("machine", f"{c}->{out}")
        return out

    def convert_message(self, msg: str) -> str:
        """Encode/decode *msg*, moving the rotors as it goes."""
        return "".join(
            self.alphabet.to_symbol(self.convert(self.alphabet.to_index(ch)))
            for ch in msg
        )
