from __future__ import annotations

from typing import List

from .alphabet import ALPHABET, SIZE, check_index, index_of, validate_permutation


class EntryDisk:
    """Static wiring (ETW) between the plugboard and the rotor chain.

    `encode_from_left` is the inverse of `encode_from_right`. The service
    machines used the identity wiring.
    """

    def __init__(self, wiring: str = ALPHABET, *, name: str = ""):
        self.name = name
        self._wiring = validate_permutation(wiring, f"Entry disk {name}".strip())
        # index i on the rotor side is wired to letter wiring[i] on the plugboard side
        self._to_rotor: List[int] = [0] * SIZE
        self._to_plugboard: List[int] = [index_of(c) for c in wiring]
        for i, out in enumerate(self._to_plugboard):
            self._to_rotor[out] = i

    @classmethod
    def identity(cls) -> "EntryDisk":
        return cls(ALPHABET, name="identity")

    @property
    def wiring(self) -> str:
        return self._wiring

    def encode_from_right(self, index: int) -> int:
        return self._to_rotor[check_index(index)]

    def encode_from_left(self, index: int) -> int:
        return self._to_plugboard[check_index(index)]

    def __repr__(self) -> str:
        return f"EntryDisk(name={self.name!r})"
