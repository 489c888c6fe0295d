"""Named historical machine parts.

Wiring tables for the Enigma I / M3 service rotors (I-V), the naval
rotors VI-VIII, the A/B/C reflectors (UKW) and the identity entry disk.
Lookups always hand out a fresh part because rotors carry mutable state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from .entry_disk import EntryDisk
from .errors import UnknownPart
from .reflector import Reflector
from .rotor import Rotor

# ============================================================================
# ROTORS (Walzen) -- wiring, turnover letters
# ============================================================================

ROTOR_I = ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q")
ROTOR_II = ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E")
ROTOR_III = ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V")
ROTOR_IV = ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J")
ROTOR_V = ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z")
ROTOR_VI = ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM")
ROTOR_VII = ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM")
ROTOR_VIII = ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM")

# ============================================================================
# REFLECTORS (UKW)
# ============================================================================

REFLECTOR_A = "EJMZALYXVBWFCRQUONTSPIKHGD"
REFLECTOR_B = "YRUHQSLDPXNGOKMIEBFZCWVJAT"
REFLECTOR_C = "FVPJIAOYEDRZXWGCTKUQSBNMHL"


@dataclass(frozen=True)
class PartModel:
    """A named part design; `create()` builds a new instance of it."""
    name: str
    kind: str  # ROTOR, REFLECTOR, ENTRY_DISK
    description: str
    factory: Callable[[], object]

    def create(self):
        return self.factory()


def _rotor_model(name: str, wiring_turnover, description: str) -> PartModel:
    wiring, turnover = wiring_turnover
    return PartModel(
        name=name,
        kind="ROTOR",
        description=description,
        factory=lambda: Rotor(wiring, turnover, name=name),
    )


def _reflector_model(name: str, wiring: str, description: str) -> PartModel:
    return PartModel(
        name=name,
        kind="REFLECTOR",
        description=description,
        factory=lambda: Reflector(wiring, name=name),
    )


def builtin_parts() -> Dict[str, Dict[str, PartModel]]:
    """Return all built-in part designs keyed by kind, then by name."""
    rotors = [
        _rotor_model("I", ROTOR_I, "Enigma I (Wehrmacht) rotor I, 1930"),
        _rotor_model("II", ROTOR_II, "Enigma I (Wehrmacht) rotor II, 1930"),
        _rotor_model("III", ROTOR_III, "Enigma I (Wehrmacht) rotor III, 1930"),
        _rotor_model("IV", ROTOR_IV, "M3 (Wehrmacht) rotor IV, 1938"),
        _rotor_model("V", ROTOR_V, "M3 (Wehrmacht) rotor V, 1938"),
        _rotor_model("VI", ROTOR_VI, "M3 / M4 (Kriegsmarine) rotor VI, two notches"),
        _rotor_model("VII", ROTOR_VII, "M3 / M4 (Kriegsmarine) rotor VII, two notches"),
        _rotor_model("VIII", ROTOR_VIII, "M3 / M4 (Kriegsmarine) rotor VIII, two notches"),
    ]
    reflectors = [
        _reflector_model("A", REFLECTOR_A, "UKW-A"),
        _reflector_model("B", REFLECTOR_B, "UKW-B (wide)"),
        _reflector_model("C", REFLECTOR_C, "UKW-C (wide)"),
    ]
    entry_disks = [
        PartModel(
            name="identity",
            kind="ENTRY_DISK",
            description="ETW wired A->A ... Z->Z (Enigma I, M3)",
            factory=EntryDisk.identity,
        ),
    ]
    return {
        "ROTOR": {m.name: m for m in rotors},
        "REFLECTOR": {m.name: m for m in reflectors},
        "ENTRY_DISK": {m.name: m for m in entry_disks},
    }


class PartRegistry:
    """Registry of named machine parts with querying capabilities."""

    def __init__(self):
        self._parts = builtin_parts()

    def _get(self, kind: str, name: str) -> PartModel:
        models = self._parts[kind]
        if name not in models:
            raise UnknownPart(kind.lower().replace("_", " "), name, list(models))
        return models[name]

    def rotor(self, name: str) -> Rotor:
        return self._get("ROTOR", name).create()

    def reflector(self, name: str) -> Reflector:
        return self._get("REFLECTOR", name).create()

    def entry_disk(self, name: str = "identity") -> EntryDisk:
        return self._get("ENTRY_DISK", name).create()

    def names(self, kind: str) -> List[str]:
        """Names of one kind of part in registration order."""
        return list(self._parts[kind.upper()])

    def rotor_names(self) -> List[str]:
        return self.names("ROTOR")

    def reflector_names(self) -> List[str]:
        return self.names("REFLECTOR")

    def describe(self, kind: str, name: str) -> str:
        return self._get(kind.upper(), name).description

    def exists(self, kind: str, name: str) -> bool:
        return name in self._parts.get(kind.upper(), {})

    def register(self, model: PartModel) -> None:
        """Register a custom part design (replaces one with the same name)."""
        self._parts.setdefault(model.kind, {})[model.name] = model

    def register_rotor(self, name: str, wiring: str, turnover: str, description: str = "") -> None:
        # validate now rather than at first use
        Rotor(wiring, turnover, name=name)
        self.register(_rotor_model(name, (wiring, turnover), description or f"Custom rotor {name}"))

    def register_reflector(self, name: str, wiring: str, description: str = "") -> None:
        Reflector(wiring, name=name)
        self.register(_reflector_model(name, wiring, description or f"Custom reflector {name}"))
