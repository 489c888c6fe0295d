from __future__ import annotations

from .errors import ConfigurationError, InvalidSymbol

ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SIZE: int = len(ALPHABET)

_INDEX = {symbol: i for i, symbol in enumerate(ALPHABET)}


def index_of(symbol: str) -> int:
    """Position of `symbol` in the alphabet."""
    try:
        return _INDEX[symbol]
    except (KeyError, TypeError):
        raise InvalidSymbol(symbol) from None


def symbol_at(index: int) -> str:
    """Symbol at `index`; the index must be in 0..25."""
    return ALPHABET[check_index(index)]


def check_index(index: int) -> int:
    if not isinstance(index, int) or not 0 <= index < SIZE:
        raise InvalidSymbol(index)
    return index


def is_symbol(symbol: str) -> bool:
    return symbol in _INDEX


def validate_permutation(wiring: str, what: str) -> str:
    """Return `wiring` if it is a permutation of the alphabet.

    Raises ConfigurationError otherwise.
    """
    if not isinstance(wiring, str) or len(wiring) != SIZE:
        raise ConfigurationError(
            f"{what} wiring must be {SIZE} characters long, got {wiring!r}"
        )
    unknown = sorted({c for c in wiring if c not in _INDEX})
    if unknown:
        raise ConfigurationError(
            f"{what} wiring contains characters outside {ALPHABET}: {', '.join(unknown)}"
        )
    if len(set(wiring)) != SIZE:
        repeated = sorted({c for c in wiring if wiring.count(c) > 1})
        raise ConfigurationError(
            f"{what} wiring is not a permutation, repeated: {', '.join(repeated)}"
        )
    return wiring
