from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional, Tuple

from ..config import Settings
from .entry_disk import EntryDisk
from .enigma import Enigma
from .errors import BuildIncomplete, BuildPart, ConfigurationError
from .plugboard import Plugboard, PlugboardConnection
from .reflector import Reflector
from .rotor import Rotor
from .rotor_chain import RotorChain

logger = logging.getLogger(__name__)

_ROTOR_SLOTS = (BuildPart.LEFT_ROTOR, BuildPart.MIDDLE_ROTOR, BuildPart.RIGHT_ROTOR)


class EnigmaBuilder:
    """Collects machine parts in any order and validates them in `build()`.

    A failed build leaves every part in place, so the caller can supply
    just the reported part and call `build()` again. Rotors are copied
    into each machine; one builder can produce several independent
    machines.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._entry_disk: Optional[EntryDisk] = EntryDisk.identity()
        self._reflector: Optional[Reflector] = None
        self._rotors = {slot: None for slot in _ROTOR_SLOTS}
        self._connections: List[PlugboardConnection] = []

    def entry_disk(self, entry_disk: EntryDisk) -> "EnigmaBuilder":
        self._entry_disk = entry_disk
        return self

    def reflector(self, reflector: Reflector) -> "EnigmaBuilder":
        self._reflector = reflector
        return self

    def rotor_left(self, rotor: Rotor) -> "EnigmaBuilder":
        self._rotors[BuildPart.LEFT_ROTOR] = rotor
        return self

    def rotor_middle(self, rotor: Rotor) -> "EnigmaBuilder":
        self._rotors[BuildPart.MIDDLE_ROTOR] = rotor
        return self

    def rotor_right(self, rotor: Rotor) -> "EnigmaBuilder":
        self._rotors[BuildPart.RIGHT_ROTOR] = rotor
        return self

    def rotor(self, slot: BuildPart, rotor: Rotor) -> "EnigmaBuilder":
        if slot not in self._rotors:
            raise ConfigurationError(f"{slot} is not a rotor slot")
        self._rotors[slot] = rotor
        return self

    def plugboard_connections(self, connections: Iterable[PlugboardConnection]) -> "EnigmaBuilder":
        self._connections = list(connections)
        return self

    def validate(self) -> List[Tuple[BuildPart, str]]:
        """All problems with the current parts, in build order."""
        problems: List[Tuple[BuildPart, str]] = []

        seen = {}
        for slot in _ROTOR_SLOTS:
            rotor = self._rotors[slot]
            if rotor is None:
                problems.append((slot, f"{slot} is required"))
            elif id(rotor) in seen:
                problems.append((slot, f"{slot} is the same rotor instance as the {str(seen[id(rotor)]).lower()}"))
            else:
                seen[id(rotor)] = slot

        # a cable is the same whichever end is named first
        used = {}
        cables = set()
        for con in self._connections:
            cable = frozenset((con.left, con.right))
            if cable in cables:
                continue
            clash = next((c for c in (con.left, con.right) if c in used), None)
            if clash is not None:
                problems.append((
                    BuildPart.PLUGBOARD,
                    f"Plugboard letter '{clash}' is used by both {used[clash]} and {con}",
                ))
                continue
            cables.add(cable)
            used[con.left] = con
            used[con.right] = con

        if self._entry_disk is None:
            problems.append((BuildPart.ENTRY_DISK, "Entry disk is required"))
        if self._reflector is None:
            problems.append((BuildPart.REFLECTOR, "Reflector is required"))
        return problems

    def build(self) -> Enigma:
        problems = self.validate()
        if problems:
            raise BuildIncomplete(problems)

        plugboard = Plugboard.identity()
        for con in self._connections:
            plugboard.connect(con.left, con.right)

        left, middle, right = (copy.deepcopy(self._rotors[slot]) for slot in _ROTOR_SLOTS)
        enigma = Enigma(
            plugboard,
            self._entry_disk,
            RotorChain(left, middle, right),
            self._reflector,
            max_message_length=self._settings.max_message_length,
            whitespace_filler=self._settings.whitespace_filler,
        )
        logger.debug("Built %r", enigma)
        return enigma
