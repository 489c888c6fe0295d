import pytest
from pydantic import ValidationError

from enigmalab.machine.errors import ConfigurationError, UnknownPart
from enigmalab.machine.registry import PartModel, PartRegistry, REFLECTOR_B, ROTOR_I
from enigmalab.machine.reflector import Reflector
from enigmalab.machine.rotor import Rotor
from enigmalab.machine.spec import MachineSpec, build_enigma, builder_from_spec


@pytest.fixture
def registry():
    return PartRegistry()


def test_builtin_names(registry):
    assert registry.rotor_names() == ["I", "II", "III", "IV", "V", "VI", "VII", "VIII"]
    assert registry.reflector_names() == ["A", "B", "C"]
    assert registry.names("entry_disk") == ["identity"]


@pytest.mark.parametrize("name", ["I", "II", "III", "IV", "V", "VI", "VII", "VIII"])
def test_every_rotor_builds(registry, name):
    rotor = registry.rotor(name)
    assert rotor.name == name
    assert rotor.position_symbol == "A"


def test_historical_turnovers(registry):
    assert registry.rotor("I").turnover_positions == frozenset({16})
    assert registry.rotor("V").turnover_positions == frozenset({25})
    assert registry.rotor("VIII").turnover_positions == frozenset({12, 25})


def test_lookups_hand_out_fresh_parts(registry):
    first = registry.rotor("I")
    first.turn_to("Q")
    second = registry.rotor("I")
    assert first is not second
    assert second.position_symbol == "A"


def test_unknown_names(registry):
    with pytest.raises(UnknownPart) as exc_info:
        registry.rotor("IX")
    assert str(exc_info.value) == "Unsupported rotor type: IX (available: I, II, III, IV, V, VI, VII, VIII)"
    with pytest.raises(UnknownPart, match="Unsupported reflector type: D"):
        registry.reflector("D")
    with pytest.raises(UnknownPart, match="Unsupported entry disk type"):
        registry.entry_disk("qwertzu")
    # also usable as a KeyError
    with pytest.raises(KeyError):
        registry.rotor("")


def test_describe_and_exists(registry):
    assert "rotor I" in registry.describe("rotor", "I")
    assert registry.exists("ROTOR", "III")
    assert not registry.exists("ROTOR", "IX")
    assert not registry.exists("GEAR", "I")


def test_register_custom_parts(registry):
    registry.register_rotor("R", ROTOR_I[0], "AN", "test rotor")
    registry.register_reflector("X", REFLECTOR_B)
    assert isinstance(registry.rotor("R"), Rotor)
    assert registry.rotor("R").turnover_positions == frozenset({0, 13})
    assert isinstance(registry.reflector("X"), Reflector)
    assert registry.describe("reflector", "X") == "Custom reflector X"


def test_register_validates_eagerly(registry):
    with pytest.raises(ConfigurationError):
        registry.register_rotor("BAD", "ABC", "A")
    with pytest.raises(ConfigurationError):
        registry.register_reflector("BAD", ROTOR_I[0])
    assert not registry.exists("ROTOR", "BAD")


def test_register_model(registry):
    registry.register(PartModel("M", "ROTOR", "model", lambda: Rotor(ROTOR_I[0], "Q", name="M")))
    assert registry.rotor("M").name == "M"


def test_spec_normalizes_names():
    spec = MachineSpec(reflector=" b", rotors=["i", "ii ", "iii"], plugboard=["ae", " gl"])
    assert spec.reflector == "B"
    assert spec.rotors == ["I", "II", "III"]
    assert spec.plugboard == ["AE", "GL"]
    assert [str(c) for c in spec.connections()] == ["AE", "GL"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"reflector": "B", "rotors": ["I", "II"]},
        {"reflector": "B", "rotors": ["I", "II", "III", "IV"]},
        {"reflector": "", "rotors": ["I", "II", "III"]},
        {"reflector": "B", "rotors": ["I", "II", "III"], "plugboard": ["ABC"]},
        {"reflector": "B", "rotors": ["I", "II", "III"], "plugboard": ["A1"]},
    ],
)
def test_spec_rejects_bad_input(kwargs):
    with pytest.raises(ValidationError):
        MachineSpec(**kwargs)


def test_sample_machine():
    enigma = build_enigma(MachineSpec.sample())
    enigma.rotor_chain.change_setting("AAA")
    assert enigma.encode_for_current_setting("AAAAA") == "BDZGO"


def test_builder_from_spec_unknown_rotor():
    with pytest.raises(UnknownPart):
        builder_from_spec(MachineSpec(reflector="B", rotors=["I", "II", "IX"]))


def test_build_from_spec_with_plugboard():
    enigma = build_enigma(MachineSpec(reflector="B", rotors=["I", "II", "III"], plugboard=["AE", "GL", "QX"]))
    enigma.rotor_chain.change_setting("EJO")
    assert enigma.encode_for_current_setting("ABCDE") == "SQBZS"
