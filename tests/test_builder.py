import pytest

from enigmalab.config import Settings
from enigmalab.machine.builder import EnigmaBuilder
from enigmalab.machine.entry_disk import EntryDisk
from enigmalab.machine.errors import BuildIncomplete, BuildPart, ConfigurationError, EnigmaError, LengthExceeded
from enigmalab.machine.plugboard import PlugboardConnection, parse_plugboard_connections
from enigmalab.machine.registry import PartRegistry


@pytest.fixture
def registry():
    return PartRegistry()


def _sample_builder(registry):
    return (
        EnigmaBuilder()
        .reflector(registry.reflector("B"))
        .rotor_left(registry.rotor("I"))
        .rotor_middle(registry.rotor("II"))
        .rotor_right(registry.rotor("III"))
    )


def test_empty_builder_reports_every_missing_part():
    with pytest.raises(BuildIncomplete) as exc_info:
        EnigmaBuilder().build()
    err = exc_info.value
    assert err.part is BuildPart.LEFT_ROTOR
    assert err.parts == [
        BuildPart.LEFT_ROTOR,
        BuildPart.MIDDLE_ROTOR,
        BuildPart.RIGHT_ROTOR,
        BuildPart.REFLECTOR,
    ]


def test_missing_rotor_can_be_supplied_later(registry):
    builder = (
        EnigmaBuilder()
        .entry_disk(registry.entry_disk())
        .reflector(registry.reflector("B"))
        .rotor_left(registry.rotor("I"))
        .rotor_middle(registry.rotor("II"))
    )
    with pytest.raises(BuildIncomplete) as exc_info:
        builder.build()
    assert exc_info.value.part is BuildPart.RIGHT_ROTOR
    assert str(exc_info.value) == "Right rotor is required"

    enigma = builder.rotor_right(registry.rotor("III")).build()
    enigma.rotor_chain.change_setting("AAA")
    assert enigma.encode_for_current_setting("AAAAA") == "BDZGO"


def test_missing_reflector(registry):
    builder = (
        EnigmaBuilder()
        .rotor_left(registry.rotor("I"))
        .rotor_middle(registry.rotor("II"))
        .rotor_right(registry.rotor("III"))
    )
    with pytest.raises(BuildIncomplete) as exc_info:
        builder.build()
    assert exc_info.value.part is BuildPart.REFLECTOR
    assert str(exc_info.value.part) == "Reflector"


def test_parts_accepted_in_any_order(registry):
    enigma = (
        EnigmaBuilder()
        .plugboard_connections(parse_plugboard_connections("AE,GL,QX"))
        .rotor_right(registry.rotor("III"))
        .reflector(registry.reflector("B"))
        .rotor(BuildPart.MIDDLE_ROTOR, registry.rotor("II"))
        .rotor_left(registry.rotor("I"))
        .build()
    )
    assert enigma.plugboard.pairs() == [("A", "E"), ("G", "L"), ("Q", "X")]
    assert isinstance(enigma.entry_disk, EntryDisk)


def test_rotor_rejects_non_rotor_slot(registry):
    with pytest.raises(ConfigurationError, match="Reflector is not a rotor slot") as exc_info:
        EnigmaBuilder().rotor(BuildPart.REFLECTOR, registry.rotor("I"))
    assert isinstance(exc_info.value, EnigmaError)


def test_same_rotor_instance_in_two_slots(registry):
    rotor = registry.rotor("I")
    builder = _sample_builder(registry).rotor_middle(rotor).rotor_right(rotor)
    with pytest.raises(BuildIncomplete) as exc_info:
        builder.build()
    assert exc_info.value.part is BuildPart.RIGHT_ROTOR
    assert "same rotor instance as the middle rotor" in str(exc_info.value)


def test_plugboard_letter_in_two_pairs(registry):
    builder = _sample_builder(registry).plugboard_connections(
        [PlugboardConnection("A", "B"), PlugboardConnection("B", "C")]
    )
    with pytest.raises(BuildIncomplete) as exc_info:
        builder.build()
    assert exc_info.value.part is BuildPart.PLUGBOARD
    assert "Plugboard letter 'B' is used by both AB and BC" in str(exc_info.value)
    assert exc_info.value.parts == [BuildPart.PLUGBOARD]


def test_repeated_pair_is_not_a_conflict(registry):
    enigma = _sample_builder(registry).plugboard_connections(
        [PlugboardConnection("A", "B"), PlugboardConnection("A", "B")]
    ).build()
    assert enigma.plugboard.pairs() == [("A", "B")]


def test_machines_from_one_builder_are_independent(registry):
    builder = _sample_builder(registry)
    first = builder.build()
    second = builder.build()
    assert first.rotor_chain.left is not second.rotor_chain.left

    first.rotor_chain.change_setting("XYZ")
    first.encode_for_current_setting("HELLO")
    assert second.rotor_chain.setting == "AAA"


def test_builder_applies_settings(registry):
    enigma = (
        EnigmaBuilder(Settings(max_message_length=10, whitespace_filler="q"))
        .reflector(registry.reflector("B"))
        .rotor_left(registry.rotor("I"))
        .rotor_middle(registry.rotor("II"))
        .rotor_right(registry.rotor("III"))
        .build()
    )

    assert enigma.max_message_length == 10
    assert enigma.whitespace_filler == "Q"
    with pytest.raises(LengthExceeded):
        enigma.encode("AAA", "AAA", "A" * 11)


def test_builder_takes_settings_in_constructor(registry):
    builder = EnigmaBuilder(Settings(max_message_length=3))
    builder.reflector(registry.reflector("C"))
    for slot, name in zip(
        (BuildPart.LEFT_ROTOR, BuildPart.MIDDLE_ROTOR, BuildPart.RIGHT_ROTOR), ("IV", "V", "VI")
    ):
        builder.rotor(slot, registry.rotor(name))
    assert builder.validate() == []
    assert builder.build().max_message_length == 3


def test_reversed_pair_is_not_a_conflict(registry):
    builder = _sample_builder(registry).plugboard_connections(
        [PlugboardConnection("A", "B"), PlugboardConnection("B", "A")]
    )
    assert builder.validate() == []
    assert builder.build().plugboard.pairs() == [("A", "B")]


def test_conflicting_cable_reported_once(registry):
    # CA clashes with AB on A; CB would clash on both letters
    builder = _sample_builder(registry).plugboard_connections(
        [PlugboardConnection("A", "B"), PlugboardConnection("C", "A"), PlugboardConnection("C", "B")]
    )
    assert builder.validate() == [
        (BuildPart.PLUGBOARD, "Plugboard letter 'A' is used by both AB and CA"),
        (BuildPart.PLUGBOARD, "Plugboard letter 'B' is used by both AB and CB"),
    ]
