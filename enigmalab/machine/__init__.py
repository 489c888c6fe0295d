"""The cipher machine: rotors, rotor chain, plugboard, reflector, entry disk.

Historical / education use only.
"""

from .alphabet import ALPHABET
from .builder import EnigmaBuilder
from .enigma import EncodingResult, Enigma
from .entry_disk import EntryDisk
from .errors import (
    BuildIncomplete,
    BuildPart,
    ConfigurationError,
    EnigmaError,
    InvalidCharacter,
    InvalidFormat,
    InvalidSetting,
    InvalidSymbol,
    LengthExceeded,
    UnknownPart,
)
from .message import RadioMessage, normalize_message, sanitize_message
from .plugboard import Plugboard, PlugboardConnection, parse_plugboard_connections
from .reflector import Reflector
from .registry import PartRegistry
from .rotor import Rotor
from .rotor_chain import RotorChain
from .spec import MachineSpec, build_enigma, builder_from_spec

__all__ = [
    "ALPHABET",
    "EnigmaBuilder",
    "EncodingResult",
    "Enigma",
    "EntryDisk",
    "BuildIncomplete",
    "BuildPart",
    "ConfigurationError",
    "EnigmaError",
    "InvalidCharacter",
    "InvalidFormat",
    "InvalidSetting",
    "InvalidSymbol",
    "LengthExceeded",
    "UnknownPart",
    "RadioMessage",
    "normalize_message",
    "sanitize_message",
    "Plugboard",
    "PlugboardConnection",
    "parse_plugboard_connections",
    "Reflector",
    "PartRegistry",
    "Rotor",
    "RotorChain",
    "MachineSpec",
    "build_enigma",
    "builder_from_spec",
]
