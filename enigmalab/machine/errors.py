"""Exception hierarchy for the Enigma machine.

Every error is an ordinary exception so an interactive caller can catch
it, ask for corrected input and try again.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple


class EnigmaError(Exception):
    """Base class for all machine errors."""


class ConfigurationError(EnigmaError, ValueError):
    """Static wiring or turnover data is malformed."""


class InvalidSymbol(EnigmaError, ValueError):
    def __init__(self, symbol, alphabet: Optional[str] = None):
        from .alphabet import ALPHABET

        self.symbol = symbol
        self.alphabet = alphabet or ALPHABET
        if isinstance(symbol, int) and not isinstance(symbol, bool):
            msg = f"Index {symbol} is outside the supported alphabet range 0..{len(self.alphabet) - 1}"
        else:
            msg = f"Character '{symbol}' is not in supported alphabet: {self.alphabet}"
        super().__init__(msg)


class InvalidSetting(EnigmaError, ValueError):
    """Rotor chain setting is not exactly three alphabet letters."""


class InvalidCharacter(EnigmaError, ValueError):
    """One or more message characters are unsupported (all are listed)."""

    def __init__(self, characters: Sequence[str]):
        self.characters: List[str] = list(characters)
        super().__init__(", ".join(f"Unsupported character '{c}'" for c in self.characters))


class LengthExceeded(EnigmaError, ValueError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Input length exceeded allowed limit of {limit}, as it contains {length} characters"
        )


class InvalidFormat(EnigmaError, ValueError):
    def __init__(self, message: str, errors: Optional[Sequence[Exception]] = None):
        self.errors: List[Exception] = list(errors or [])
        super().__init__(message)


class UnknownPart(EnigmaError, KeyError):
    def __init__(self, kind: str, name: str, available: Sequence[str]):
        self.kind = kind
        self.name = name
        self.available = list(available)
        super().__init__(f"Unsupported {kind} type: {name} (available: {', '.join(self.available)})")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class BuildPart(str, Enum):
    LEFT_ROTOR = "Left rotor"
    MIDDLE_ROTOR = "Middle rotor"
    RIGHT_ROTOR = "Right rotor"
    PLUGBOARD = "Plugboard"
    ENTRY_DISK = "Entry disk"
    REFLECTOR = "Reflector"

    def __str__(self) -> str:
        return self.value


class BuildIncomplete(EnigmaError):
    """The builder is missing (or holds an invalid) required part.

    `part` is the first offending part, `problems` lists all of them in
    build order as (part, message) tuples.
    """

    def __init__(self, problems: Sequence[Tuple[BuildPart, str]]):
        self.problems: List[Tuple[BuildPart, str]] = list(problems)
        self.part: BuildPart = self.problems[0][0]
        super().__init__("; ".join(msg for _, msg in self.problems))

    @property
    def parts(self) -> List[BuildPart]:
        return [part for part, _ in self.problems]
