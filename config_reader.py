# config_reader.py
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & typed records
# ────────────────────────────────────────────────────────────────────────

_cycles_re = re.compile(r"^(\([^()*]+\))+$")
_KINDS = {k.value: k for k in (RotorKind.MOVING, RotorKind.FIXED, RotorKind.REFLECTOR)}
_KIND_NAMES = {
    **_KINDS,
    "MOVING": RotorKind.MOVING, "STEPPING": RotorKind.MOVING,
    "FIXED": RotorKind.FIXED,
    "REFLECTOR": RotorKind.REFLECTOR, "REFLECTING": RotorKind.REFLECTOR,
}


@dataclass(slots=True)
class WheelSpec:
    """One catalogue entry: ``name``, kind, notches and cycle notation."""

    name: str
    kind: RotorKind
    notches: str = ""
    cycles: str = ""

    def build(self, alphabet: Alphabet) -> Rotor:
        return Rotor(self.name, Permutation(self.cycles, alphabet), self.kind, self.notches)


@dataclass(slots=True)
class MachineConfig:
    """Everything needed to build a machine before any settings line."""

    alphabet: str
    num_rotors: int
    pawls: int
    wheels: List[WheelSpec] = field(default_factory=list)

    def build(self) -> Machine:
        """Return a fresh machine; rotors are never shared between builds."""
        alpha = Alphabet(self.alphabet)
        rotors = [w.build(alpha) for w in self.wheels]
        debug.log("config", f"built {len(rotors)} wheels over {self.alphabet!r}")
        return Machine(alpha, self.num_rotors, self.pawls, rotors)


@dataclass(slots=True)
class Settings:
    """One ``*`` line: rotor order, window letters, rings and plug cycles."""

    names: List[str]
    setting: str
    ring: str | None = None
    plugboard: str = ""


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


def _int_token(tokens: List[str], pos: int, what: str) -> int:
    if pos >= len(tokens):
        raise ConfigError("configuration file truncated")
    try:
        return int(tokens[pos])
    except ValueError:
        raise ConfigError(f"need int for {what}, got {tokens[pos]!r}") from None


def read_config(text: str) -> MachineConfig:
    """Parse the text machine description.

    Layout (whitespace-separated, newlines insignificant)::

        ABCDEFGHIJKLMNOPQRSTUVWXYZ
        5 3
        I   MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
        B   R   (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
                (RX) (SZ) (TV)
    """
    tokens = text.split()
    if not tokens:
        raise ConfigError("configuration file truncated")

    alphabet = tokens[0]
    num_rotors = _int_token(tokens, 1, "number of rotors")
    pawls = _int_token(tokens, 2, "number of pawls")

    wheels: List[WheelSpec] = []
    seen: set[str] = set()
    pos = 3
    while pos < len(tokens):
        name = tokens[pos]
        if pos + 1 >= len(tokens):
            raise ConfigError(f"bad rotor description for {name!r}")
        type_tok = tokens[pos + 1]
        pos += 2

        kind = _KINDS.get(type_tok[0])
        if kind is None:
            raise ConfigError(f"rotor {name!r}: unknown type {type_tok[0]!r}")
        if name in seen:
            raise ConfigError(f"rotor {name!r} described twice")
        seen.add(name)

        cycles: List[str] = []
        while pos < len(tokens) and _cycles_re.match(tokens[pos]):
            cycles.append(tokens[pos])
            pos += 1

        wheels.append(WheelSpec(name, kind, type_tok[1:], " ".join(cycles)))

    debug.log("config", f"{len(wheels)} wheels, {num_rotors} slots, {pawls} pawls")
    return MachineConfig(alphabet, num_rotors, pawls, wheels)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


def _json_int(data: dict, key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None


def load_config(path: str | Path) -> MachineConfig:
    """Read a machine description from *path* (``.json`` or text).

    JSON names the slot count ``slots`` (``rotors`` is accepted too).
    """
    path = Path(path)
    raw = _read_text(path)
    if path.suffix.lower() != ".json":
        return read_config(raw)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be an object")

    if "slots" not in data and "rotors" in data:
        data["slots"] = data["rotors"]
    required = {"alphabet", "slots", "pawls", "wheels"}
    missing = required - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")
    if not isinstance(data["alphabet"], str):
        raise ConfigError(f"alphabet must be a string, got {data['alphabet']!r}")
    if not isinstance(data["wheels"], list):
        raise ConfigError("wheels must be a list")

    wheels = []
    for entry in data["wheels"]:
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigError(f"wheel without a name: {entry!r}")
        kind = _KIND_NAMES.get(str(entry.get("kind", "")).upper())
        if kind is None:
            raise ConfigError(f"wheel {entry.get('name')!r}: unknown kind {entry.get('kind')!r}")
        fields = (entry["name"], entry.get("notches", ""), entry.get("cycles", ""))
        if not all(isinstance(f, str) for f in fields):
            raise ConfigError(f"wheel {entry['name']!r}: name, notches and cycles must be strings")
        wheels.append(WheelSpec(fields[0], kind, fields[1], fields[2]))
    return MachineConfig(
        data["alphabet"], _json_int(data, "slots"), _json_int(data, "pawls"), wheels
    )


# ────────────────────────────────────────────────────────────────────────
#  2. Settings lines
# ────────────────────────────────────────────────────────────────────────


def parse_settings(line: str, num_rotors: int) -> Settings:
    """Split ``* B Beta III IV I AXLE [ring] (YF) (ZH)`` into its parts."""
    line = line.strip()
    if not line.startswith("*"):
        raise ConfigError("settings line must start with '*'")
    body = line[1:]

    cut = body.find("(")
    head, plugs = (body, "") if cut == -1 else (body[:cut], body[cut:])
    tokens = head.split()

    names = tokens[:num_rotors]
    rest = tokens[num_rotors:]
    if len(names) != num_rotors:
        raise ConfigError(f"must have {num_rotors} rotors in settings line")
    if len(set(names)) != len(names):
        raise ConfigError("cannot repeat rotors used")
    if len(rest) not in (1, 2):
        raise ConfigError("settings line needs a rotor setting and at most one ring setting")

    if len(rest) == 1 and len(rest[0]) == 2 * (num_rotors - 1):
        # window and ring letters written as one token
        rest = [rest[0][: num_rotors - 1], rest[0][num_rotors - 1 :]]

    ring = rest[1] if len(rest) == 2 else None
    return Settings(names, rest[0], ring, plugs.strip())


def apply_settings(machine: Machine, settings: Settings) -> None:
    """Insert, set and plug *machine* per one settings line."""
    machine.insert_rotors(settings.names)
    machine.set_rotors(settings.setting, settings.ring)
    machine.set_plugboard(Permutation(settings.plugboard, machine.alphabet))
