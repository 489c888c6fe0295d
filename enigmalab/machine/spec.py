from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import Settings
from .builder import EnigmaBuilder
from .enigma import Enigma
from .plugboard import PlugboardConnection
from .registry import PartRegistry


class MachineSpec(BaseModel):
    """A machine described by part names, e.g. for config files or the CLI.

    `rotors` is given left to right. `plugboard` holds two letter pairs.
    """

    reflector: str = Field(..., min_length=1, description="Reflector name, e.g. B")
    rotors: List[str] = Field(..., min_length=3, max_length=3, description="Left, middle, right")
    plugboard: List[str] = Field(default_factory=list, description="Pairs such as AE, BG")
    entry_disk: str = Field(default="identity")

    @field_validator("reflector")
    @classmethod
    def _upper_reflector(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("rotors")
    @classmethod
    def _upper_rotors(cls, v: List[str]) -> List[str]:
        return [r.strip().upper() for r in v]

    @field_validator("plugboard")
    @classmethod
    def _pairs(cls, v: List[str]) -> List[str]:
        out = [p.strip().upper() for p in v]
        for p in out:
            # raises InvalidFormat / InvalidSymbol, both ValueErrors
            PlugboardConnection.parse(p)
        return out

    @classmethod
    def sample(cls) -> "MachineSpec":
        """Enigma I with rotors I, II, III, reflector B and no cables."""
        return cls(reflector="B", rotors=["I", "II", "III"])

    def connections(self) -> List[PlugboardConnection]:
        return [PlugboardConnection.parse(p) for p in self.plugboard]


def builder_from_spec(
    spec: MachineSpec,
    registry: Optional[PartRegistry] = None,
    settings: Optional[Settings] = None,
) -> EnigmaBuilder:
    reg = registry or PartRegistry()
    left, middle, right = spec.rotors
    return (
        EnigmaBuilder(settings)
        .entry_disk(reg.entry_disk(spec.entry_disk))
        .reflector(reg.reflector(spec.reflector))
        .rotor_left(reg.rotor(left))
        .rotor_middle(reg.rotor(middle))
        .rotor_right(reg.rotor(right))
        .plugboard_connections(spec.connections())
    )


def build_enigma(
    spec: MachineSpec,
    registry: Optional[PartRegistry] = None,
    settings: Optional[Settings] = None,
) -> Enigma:
    return builder_from_spec(spec, registry, settings).build()
