from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Union

from .alphabet import ALPHABET, SIZE, check_index, index_of, validate_permutation
from .errors import ConfigurationError, InvalidSymbol

logger = logging.getLogger(__name__)


class Rotor:
    """A single substitution wheel.

    The wiring is fixed at construction; only the rotational position
    changes, through `turn_to` (absolute) and `step` (one notch forward).
    Turnover positions are the positions from which a step also carries
    the next rotor in the chain.
    """

    def __init__(self, wiring: str, turnover: Iterable[Union[str, int]] = "", *, name: str = ""):
        self.name = name
        self._wiring = validate_permutation(wiring, f"Rotor {name}".strip())
        self._forward: List[int] = [index_of(c) for c in wiring]
        self._reverse: List[int] = [0] * SIZE
        for i, out in enumerate(self._forward):
            self._reverse[out] = i
        self._turnover: FrozenSet[int] = frozenset(self._turnover_index(t) for t in turnover)
        self._position = 0

    @staticmethod
    def _turnover_index(value: Union[str, int]) -> int:
        try:
            if isinstance(value, str):
                return index_of(value)
            return check_index(value)
        except InvalidSymbol as exc:
            raise ConfigurationError(f"Turnover error: {exc}") from None

    @property
    def wiring(self) -> str:
        return self._wiring

    @property
    def turnover_positions(self) -> FrozenSet[int]:
        return self._turnover

    @property
    def position(self) -> int:
        return self._position

    @property
    def position_symbol(self) -> str:
        return ALPHABET[self._position]

    def turn_to(self, symbol: str) -> None:
        self._position = index_of(symbol)

    def is_at_turnover(self) -> bool:
        return self._position in self._turnover

    def step(self) -> bool:
        """Advance one position; True if the position we left was a turnover."""
        carry = self._position in self._turnover
        before = self.position_symbol
        self._position = (self._position + 1) % SIZE
        logger.debug(
            "Rotor %s steps from '%s' to '%s'. Will rotate next rotor? %s",
            self.name, before, self.position_symbol, carry,
        )
        return carry

    def encode_from_right(self, index: int) -> int:
        entry = (check_index(index) + self._position) % SIZE
        return (self._forward[entry] - self._position) % SIZE

    def encode_from_left(self, index: int) -> int:
        entry = (check_index(index) + self._position) % SIZE
        return (self._reverse[entry] - self._position) % SIZE

    def __repr__(self) -> str:
        return f"Rotor(name={self.name!r}, position={self.position_symbol!r})"
