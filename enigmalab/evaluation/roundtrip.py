"""Roundtrip verification: D(E(M)) == M for the self-inverse machine.

Encodes random messages from random rotor settings, resets the rotors to
the same setting and encodes the ciphertext again; the result must be the
original message for every vector.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import itertools
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from enigmalab.machine.alphabet import ALPHABET
from enigmalab.machine.registry import PartRegistry
from enigmalab.machine.spec import MachineSpec, build_enigma


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    setting: str
    plaintext: str
    ciphertext: str
    decrypted: str           # What the second pass returned (should equal plaintext)
    error: Optional[str]     # Exception message if encoding threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one machine."""
    machine_name: str
    reflector: str
    rotors: List[str]
    plugboard: List[str]
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.machine_name}: "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_letters(rng: random.Random, n: int) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(n))


def machine_name(spec: MachineSpec) -> str:
    name = f"UKW-{spec.reflector} {'-'.join(spec.rotors)}"
    if spec.plugboard:
        name += " " + " ".join(spec.plugboard)
    return name


def run_roundtrip_tests(
    spec: MachineSpec,
    *,
    num_vectors: int = 1000,
    message_length: int = 60,
    seed: int = 1337,
    max_failures_recorded: int = 10,
    registry: Optional[PartRegistry] = None,
) -> RoundtripResult:
    """Run roundtrip verification across many random (setting, message) pairs.

    Args:
        spec: Machine to test.
        num_vectors: Number of random vectors to test.
        message_length: Letters per random message.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.
        registry: Optional part registry; uses default if not provided.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    reg = registry or PartRegistry()
    enigma = build_enigma(spec, reg)

    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        setting = _rand_letters(rng, 3)
        pt = _rand_letters(rng, message_length)

        try:
            enigma.rotor_chain.change_setting(setting)
            ct = enigma.encode_for_current_setting(pt)
            enigma.rotor_chain.change_setting(setting)
            pt2 = enigma.encode_for_current_setting(ct)

            if pt == pt2:
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        setting=setting,
                        plaintext=pt,
                        ciphertext=ct,
                        decrypted=pt2,
                        error=None,
                    ))
        except Exception as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    setting=setting,
                    plaintext=pt,
                    ciphertext="<error>",
                    decrypted="<error>",
                    error=str(exc),
                ))

    elapsed = time.perf_counter() - start

    return RoundtripResult(
        machine_name=machine_name(spec),
        reflector=spec.reflector,
        rotors=list(spec.rotors),
        plugboard=list(spec.plugboard),
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_rotor_orders(
    *,
    reflector: str = "B",
    rotor_names: Optional[List[str]] = None,
    plugboard: Optional[List[str]] = None,
    num_vectors: int = 100,
    message_length: int = 60,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for every ordered choice of three distinct rotors.

    Args:
        reflector: Reflector name used for every machine.
        rotor_names: Rotors to choose from (default: I-V).
        plugboard: Plugboard pairs used for every machine.
        num_vectors: Number of test vectors per machine.
        message_length: Letters per random message.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(machine_name, current_index, total)
            for progress reporting.

    Returns:
        List of RoundtripResult in rotor-order sequence.
    """
    registry = PartRegistry()
    names = rotor_names or ["I", "II", "III", "IV", "V"]
    orders = list(itertools.permutations(names, 3))
    results: List[RoundtripResult] = []

    for idx, order in enumerate(orders):
        spec = MachineSpec(reflector=reflector, rotors=list(order), plugboard=plugboard or [])
        if progress_callback:
            progress_callback(machine_name(spec), idx, len(orders))

        result = run_roundtrip_tests(
            spec,
            num_vectors=num_vectors,
            message_length=message_length,
            seed=seed,
            registry=registry,
        )
        results.append(result)

    return results
