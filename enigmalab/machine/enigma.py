from __future__ import annotations

# GLOSSARY:
#   reflector = UKW (Umkehrwalze)
#   entry disk = ETW (Eintrittswalze)
#   basic position = Grundstellung
#   message key = Spruchschluessel

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from .alphabet import ALPHABET
from .entry_disk import EntryDisk
from .message import DEFAULT_MAX_MESSAGE_LENGTH, DEFAULT_WHITESPACE_FILLER, sanitize_message
from .plugboard import Plugboard
from .reflector import Reflector
from .rotor_chain import RotorChain

logger = logging.getLogger(__name__)


@dataclass
class EncodingResult:
    message_length: int
    basic_position: str
    encoded_message_key: str
    encoded_message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Enigma:
    """The complete machine: plugboard, entry disk, rotor chain, reflector.

    Use `EnigmaBuilder` to assemble one. The machine exclusively owns its
    parts; encoding is the only thing that changes their state.
    """

    def __init__(
        self,
        plugboard: Plugboard,
        entry_disk: EntryDisk,
        rotor_chain: RotorChain,
        reflector: Reflector,
        *,
        max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
        whitespace_filler: str = DEFAULT_WHITESPACE_FILLER,
    ):
        self._plugboard = plugboard
        self._entry_disk = entry_disk
        self._rotor_chain = rotor_chain
        self._reflector = reflector
        self.max_message_length = max_message_length
        self.whitespace_filler = whitespace_filler

    @property
    def plugboard(self) -> Plugboard:
        return self._plugboard

    @property
    def entry_disk(self) -> EntryDisk:
        return self._entry_disk

    @property
    def rotor_chain(self) -> RotorChain:
        return self._rotor_chain

    @property
    def reflector(self) -> Reflector:
        return self._reflector

    def encode(self, basic_position: str, message_key: str, message: str) -> EncodingResult:
        """Encode `message` with the two-pass keying procedure.

        1. rotors to `basic_position`, encode `message_key`
        2. rotors to `message_key`, encode the message

        Decoding is the same call with the decoded message key and the
        encoded body, because the machine is self-inverse.
        """
        sanitized = sanitize_message(
            message, max_length=self.max_message_length, filler=self.whitespace_filler,
        )
        # the key is also encoded letter by letter, so vet it before any rotor moves
        RotorChain.check_setting(basic_position)
        RotorChain.check_setting(message_key)

        self._rotor_chain.change_setting(basic_position)
        encoded_message_key = self.encode_for_current_setting(message_key)
        logger.debug("Message key %s encoded as %s", message_key, encoded_message_key)

        self._rotor_chain.change_setting(message_key)
        encoded_message = self.encode_for_current_setting(sanitized)
        logger.debug("Encoded %d characters, rotors now at %s", len(sanitized), self._rotor_chain.setting)

        return EncodingResult(
            message_length=len(message),
            basic_position=basic_position,
            encoded_message_key=encoded_message_key,
            encoded_message=encoded_message,
        )

    def encode_for_current_setting(self, text: str) -> str:
        """Encode alphabet-only `text` from wherever the rotors are now."""
        out: List[str] = []
        for c in text:
            out.append(self.encode_symbol(c))
        return "".join(out)

    def encode_symbol(self, symbol: str) -> str:
        self._rotor_chain.step()

        i = self._plugboard.encode_from_right(symbol)
        i = self._entry_disk.encode_from_right(i)
        i = self._rotor_chain.encode_from_right(i)
        i = self._reflector.encode(i)
        logger.debug("   --- reflected: %s", ALPHABET[i])
        i = self._rotor_chain.encode_from_left(i)
        i = self._entry_disk.encode_from_left(i)
        encoded = self._plugboard.encode_from_left(i)

        logger.debug("%s -> %s at %s", symbol, encoded, self._rotor_chain.setting)
        return encoded

    def __repr__(self) -> str:
        return (
            f"Enigma({self._reflector!r}, {self._rotor_chain!r}, "
            f"{self._plugboard!r}, {self._entry_disk!r})"
        )
