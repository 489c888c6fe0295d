from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .alphabet import ALPHABET, index_of, is_symbol, symbol_at
from .errors import ConfigurationError, InvalidFormat, InvalidSymbol


class Plugboard:
    """Self-inverse pairwise substitution in front of the rotors.

    Each letter is either unplugged (maps to itself) or cabled to exactly
    one other letter, which maps back to it.
    """

    def __init__(self):
        self._mapping: Dict[str, str] = {c: c for c in ALPHABET}

    @classmethod
    def identity(cls) -> "Plugboard":
        return cls()

    @property
    def mapping(self) -> Dict[str, str]:
        return dict(self._mapping)

    def pairs(self) -> List[Tuple[str, str]]:
        """Connected pairs, each listed once in alphabetical order."""
        return [(a, b) for a, b in self._mapping.items() if a < b]

    def partner(self, symbol: str) -> str:
        index_of(symbol)
        return self._mapping[symbol]

    def connect(self, a: str, b: str) -> None:
        index_of(a)
        index_of(b)
        if a == b:
            self.disconnect(a)
            return
        self._unplug(a)
        self._unplug(b)
        self._mapping[a] = b
        self._mapping[b] = a
        self._verify()

    def disconnect(self, symbol: str) -> None:
        index_of(symbol)
        self._unplug(symbol)
        self._verify()

    def _unplug(self, symbol: str) -> None:
        other = self._mapping[symbol]
        self._mapping[symbol] = symbol
        self._mapping[other] = other

    def _verify(self) -> None:
        for a, b in self._mapping.items():
            if self._mapping[b] != a:
                raise ConfigurationError(f"Plugboard cable {a}->{b} has no matching {b}->{a}")

    def encode_from_right(self, symbol: str) -> int:
        index_of(symbol)
        return index_of(self._mapping[symbol])

    def encode_from_left(self, index: int) -> str:
        return self._mapping[symbol_at(index)]

    def __repr__(self) -> str:
        cables = " ".join(a + b for a, b in self.pairs())
        return f"Plugboard({cables or 'identity'})"


@dataclass(frozen=True)
class PlugboardConnection:
    left: str
    right: str

    @classmethod
    def parse(cls, pair: str) -> "PlugboardConnection":
        """Parse a two letter cable such as ``"AE"``."""
        if not isinstance(pair, str) or len(pair) != 2:
            raise InvalidFormat(
                f"Expected only pairs (2 values) split by comma character (,), but found: {pair}"
            )
        for c in pair:
            if not is_symbol(c):
                raise InvalidSymbol(c)
        return cls(pair[0], pair[1])

    def __str__(self) -> str:
        return self.left + self.right


def parse_plugboard_connections(text: str) -> List[PlugboardConnection]:
    """Parse comma separated pairs, e.g. ``"AE,BG,GH"``.

    Empty items are skipped. All bad pairs are reported in a single
    InvalidFormat whose `errors` holds the individual failures.
    """
    connections: List[PlugboardConnection] = []
    errors: List[Exception] = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            connections.append(PlugboardConnection.parse(item))
        except (InvalidFormat, InvalidSymbol) as exc:
            errors.append(exc)
    if errors:
        raise InvalidFormat(", ".join(str(e) for e in errors), errors)
    return connections
