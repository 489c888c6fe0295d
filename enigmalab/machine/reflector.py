from __future__ import annotations

from typing import List

from .alphabet import ALPHABET, check_index, index_of, validate_permutation
from .errors import ConfigurationError


class Reflector:
    """Fixed involution (UKW) that sends the signal back through the rotors."""

    def __init__(self, wiring: str, *, name: str = ""):
        self.name = name
        self._wiring = validate_permutation(wiring, f"Reflector {name}".strip())
        self._table: List[int] = [index_of(c) for c in wiring]
        for i, out in enumerate(self._table):
            if self._table[out] != i:
                raise ConfigurationError(
                    f"Reflector {name} wiring is not an involution: "
                    f"{ALPHABET[i]}->{ALPHABET[out]} but {ALPHABET[out]}->{ALPHABET[self._table[out]]}"
                )

    @property
    def wiring(self) -> str:
        return self._wiring

    def encode(self, index: int) -> int:
        return self._table[check_index(index)]

    def __repr__(self) -> str:
        return f"Reflector(name={self.name!r})"
