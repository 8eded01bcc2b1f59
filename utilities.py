# utilities.py
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

from alphabet import Alphabet, UPPER
from config_reader import MachineConfig, WheelSpec, apply_settings, parse_settings
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import RotorKind

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Text preprocessing & display
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alphabet: Alphabet) -> str:
    """Drop whitespace; every other symbol must belong to *alphabet*."""
    text = "".join(msg.split())
    for ch in text:
        alphabet.to_index(ch)
    return text


def group_blocks(text: str, block: int = 5) -> str:
    """Split *text* into space-separated groups of *block* symbols."""
    if block < 1:
        raise ConfigError(f"block size must be at least 1, got {block}")
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Message stream
# ────────────────────────────────────────────────────────────────────────


def process_stream(
    config: MachineConfig,
    lines: Iterable[str],
    *,
    block: int = 5,
) -> Iterator[str]:
    """Yield one output line per message line of *lines*.

    Lines starting with ``*`` reconfigure the machine; the first
    non-blank line must be one of them.
    """
    machine: Machine = config.build()
    configured = False

    for raw in lines:
        line = raw.rstrip("\r\n")
        stripped = line.lstrip()

        if stripped.startswith("*"):
            apply_settings(machine, parse_settings(stripped, machine.num_rotors()))
            configured = True
            debug.log("config", f"settings -> {machine.settings()}")
            continue

        if not configured:
            if not stripped:
                continue
            raise ConfigError("settings line not found")
        if "*" in stripped:
            raise ConfigError("message cannot contain *")

        msg = preprocess_message(stripped, machine.alphabet)
        yield group_blocks(machine.convert_message(msg), block)

    if not configured:
        raise ConfigError("settings line not found")


# ────────────────────────────────────────────────────────────────────────
#  2. Wheel database
# ────────────────────────────────────────────────────────────────────────

# name -> (kind, notches, wiring over A–Z)
WHEELS: Dict[str, Tuple[RotorKind, str, str]] = {
    "I":     (RotorKind.MOVING, "Q",  "EKMFLGDQVZNTOWYHXUSPAIBRCJ"),
    "II":    (RotorKind.MOVING, "E",  "AJDKSIRUXBLHWTMCQGZNPYFVOE"),
    "III":   (RotorKind.MOVING, "V",  "BDFHJLCPRTXVZNYEIWGAKMUSQO"),
    "IV":    (RotorKind.MOVING, "J",  "ESOVPZJAYQUIRHXLNFTGKDCMWB"),
    "V":     (RotorKind.MOVING, "Z",  "VZBRGITYUPSDNHLXAWMJQOFECK"),
    "VI":    (RotorKind.MOVING, "ZM", "JPGVOUMFYQBENHZRDKASXLICTW"),
    "VII":   (RotorKind.MOVING, "ZM", "NZJHGRCXMYSWBOUFAIVLPEKQDT"),
    "VIII":  (RotorKind.MOVING, "ZM", "FKQHTLXOCBJSPDZRAMEWNIUYGV"),
    "Beta":  (RotorKind.FIXED,  "",   "LEYJVCNIXWPBQMDRTAKZGFUHOS"),
    "Gamma": (RotorKind.FIXED,  "",   "FSOKANUERHMBTIYCWLQPZXVGJD"),
    "B":     (RotorKind.REFLECTOR, "", "ENKQAUYWJICOPBLMDXZVFTHRGS"),
    "C":     (RotorKind.REFLECTOR, "", "RDOBJNTKVEHMLFCWZAXGYIPSUQ"),
}


def standard_config() -> MachineConfig:
    """The four-rotor naval machine: 5 slots, 3 pawls, wheels above."""
    alpha = Alphabet(UPPER)
    wheels = [
        WheelSpec(
            name,
            kind,
            notches,
            " ".join(f"({c})" for c in Permutation.from_wiring(wiring, alpha).cycles),
        )
        for name, (kind, notches, wiring) in WHEELS.items()
    ]
    return MachineConfig(UPPER, 5, 3, wheels)


__all__ = [
    "preprocess_message",
    "group_blocks",
    "process_stream",
    "standard_config",
    "WHEELS",
]
