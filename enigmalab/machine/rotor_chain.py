from __future__ import annotations

import logging

from .alphabet import ALPHABET, is_symbol
from .errors import InvalidSetting
from .rotor import Rotor

logger = logging.getLogger(__name__)


class RotorChain:
    """Three rotors in fixed roles: left, middle and right.

    The signal enters from the right, so `encode_from_right` visits the
    right rotor first and `encode_from_left` is the mirror path taken
    after the reflector.
    """

    def __init__(self, left: Rotor, middle: Rotor, right: Rotor):
        self._left = left
        self._middle = middle
        self._right = right

    @property
    def left(self) -> Rotor:
        return self._left

    @property
    def middle(self) -> Rotor:
        return self._middle

    @property
    def right(self) -> Rotor:
        return self._right

    @property
    def setting(self) -> str:
        """Current window letters, left to right."""
        return self._left.position_symbol + self._middle.position_symbol + self._right.position_symbol

    @staticmethod
    def check_setting(setting: str) -> str:
        if not isinstance(setting, str) or len(setting) != 3:
            length = len(setting) if isinstance(setting, str) else type(setting).__name__
            raise InvalidSetting(
                f"New setting for rotor chain is unsupported. Required 3 characters, got {length}."
            )
        for c in setting:
            if not is_symbol(c):
                raise InvalidSetting(f"Character '{c}' is not in supported alphabet: {ALPHABET}.")
        return setting

    def change_setting(self, setting: str) -> None:
        self.check_setting(setting)
        self._left.turn_to(setting[0])
        self._middle.turn_to(setting[1])
        self._right.turn_to(setting[2])

    def step(self) -> None:
        # Both notches are sampled before anything moves; a middle rotor
        # parked on its notch steps itself and the left rotor.
        right_at_turnover = self._right.is_at_turnover()
        middle_at_turnover = self._middle.is_at_turnover()

        self._right.step()
        if right_at_turnover or middle_at_turnover:
            if middle_at_turnover and not right_at_turnover:
                logger.debug("Double step of middle rotor at %s", self.setting)
            self._middle.step()
        if middle_at_turnover:
            self._left.step()

    def encode_from_right(self, index: int) -> int:
        index = self._right.encode_from_right(index)
        index = self._middle.encode_from_right(index)
        return self._left.encode_from_right(index)

    def encode_from_left(self, index: int) -> int:
        index = self._left.encode_from_left(index)
        index = self._middle.encode_from_left(index)
        return self._right.encode_from_left(index)

    def __repr__(self) -> str:
        names = "/".join(r.name or "?" for r in (self._left, self._middle, self._right))
        return f"RotorChain({names} at {self.setting})"
