import random

import pytest

from enigmalab.evaluation.roundtrip import (
    RoundtripFailure,
    RoundtripResult,
    machine_name,
    run_all_rotor_orders,
    run_roundtrip_tests,
)
from enigmalab.machine.alphabet import ALPHABET
from enigmalab.machine.registry import PartRegistry
from enigmalab.machine.spec import MachineSpec, build_enigma


# ---------------------------------------------------------------------------
# Hand-written checks
# ---------------------------------------------------------------------------

def test_sample_roundtrip():
    result = run_roundtrip_tests(MachineSpec.sample(), num_vectors=50, message_length=40)
    assert result.is_perfect
    assert result.passed == 50
    assert result.success_rate == 1.0
    assert result.failures == []
    assert result.machine_name == "UKW-B I-II-III"


def test_roundtrip_with_plugboard():
    spec = MachineSpec(reflector="C", rotors=["VIII", "IV", "I"], plugboard=["AE", "GL", "QX"])
    result = run_roundtrip_tests(spec, num_vectors=30, seed=42)
    assert result.is_perfect, result.summary()
    assert result.machine_name == "UKW-C VIII-IV-I AE GL QX"
    assert result.plugboard == ["AE", "GL", "QX"]


def test_roundtrip_is_deterministic():
    a = run_roundtrip_tests(MachineSpec.sample(), num_vectors=5, seed=9)
    b = run_roundtrip_tests(MachineSpec.sample(), num_vectors=5, seed=9)
    assert a.passed == b.passed == 5
    assert a.seed == 9


def test_result_reporting():
    failure = RoundtripFailure(
        vector_index=3, setting="ABC", plaintext="HELLO",
        ciphertext="XXXXX", decrypted="HELLP", error=None,
    )
    result = RoundtripResult(
        machine_name="UKW-B I-II-III", reflector="B", rotors=["I", "II", "III"],
        plugboard=[], total_vectors=4, passed=3, failed=1, failures=[failure],
    )
    assert not result.is_perfect
    assert result.success_rate == 0.75
    assert result.summary().startswith("[FAIL] UKW-B I-II-III: 3/4 vectors passed")
    assert result.to_dict()["failures"][0]["setting"] == "ABC"

    empty = RoundtripResult(
        machine_name="m", reflector="B", rotors=[], plugboard=[],
        total_vectors=0, passed=0, failed=0,
    )
    assert empty.success_rate == 0.0


def test_machine_name():
    assert machine_name(MachineSpec(reflector="A", rotors=["V", "I", "II"])) == "UKW-A V-I-II"


# ---------------------------------------------------------------------------
# Parametrized: every reflector, every rotor order
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("reflector", PartRegistry().reflector_names())
def test_every_reflector_roundtrip(reflector):
    """Roundtrip M = E(E(M)) from the same setting for each reflector."""
    enigma = build_enigma(MachineSpec(reflector=reflector, rotors=["II", "V", "VII"], plugboard=["BZ"]))
    rng = random.Random(1337)

    for _ in range(25):
        setting = "".join(rng.choice(ALPHABET) for _ in range(3))
        pt = "".join(rng.choice(ALPHABET) for _ in range(50))
        enigma.rotor_chain.change_setting(setting)
        ct = enigma.encode_for_current_setting(pt)
        enigma.rotor_chain.change_setting(setting)
        rt = enigma.encode_for_current_setting(ct)
        assert rt == pt, f"{reflector}: roundtrip failed at {setting}. pt={pt}, ct={ct}, rt={rt}"


def test_all_rotor_orders():
    calls = []
    results = run_all_rotor_orders(
        rotor_names=["I", "II", "III"],
        num_vectors=5,
        message_length=20,
        progress_callback=lambda name, i, total: calls.append((name, i, total)),
    )
    assert len(results) == 6
    assert all(r.is_perfect for r in results)
    assert [c[1] for c in calls] == list(range(6))
    assert calls[0] == ("UKW-B I-II-III", 0, 6)
    assert {tuple(r.rotors) for r in results} == {
        ("I", "II", "III"), ("I", "III", "II"), ("II", "I", "III"),
        ("II", "III", "I"), ("III", "I", "II"), ("III", "II", "I"),
    }


def test_all_rotor_orders_default_set():
    results = run_all_rotor_orders(num_vectors=1, message_length=5)
    # ordered choices of 3 out of rotors I-V
    assert len(results) == 60
