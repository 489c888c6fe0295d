"""Letter statistics of ciphertext.

A good rotor machine flattens the letter distribution: the index of
coincidence of its output drops from ~0.066 (German / English text)
towards 1/26 ~ 0.0385 (uniform).
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import numpy as np

from enigmalab.machine.alphabet import ALPHABET, SIZE

UNIFORM_IOC = 1.0 / SIZE


def letter_counts(text: str) -> np.ndarray:
    """Counts of A..Z in `text` (other characters are ignored)."""
    idx = np.frombuffer(text.encode("ascii", errors="ignore"), dtype=np.uint8).astype(np.int64) - ord("A")
    idx = idx[(idx >= 0) & (idx < SIZE)]
    return np.bincount(idx, minlength=SIZE)


def index_of_coincidence(text: str) -> float:
    counts = letter_counts(text)
    n = int(counts.sum())
    if n < 2:
        return 0.0
    return float(np.sum(counts * (counts - 1)) / (n * (n - 1)))


def self_encipherments(plaintext: str, ciphertext: str) -> int:
    """Positions where a letter was encoded to itself."""
    if len(plaintext) != len(ciphertext):
        raise ValueError("plaintext and ciphertext length mismatch")
    a = np.frombuffer(plaintext.encode("ascii"), dtype=np.uint8)
    b = np.frombuffer(ciphertext.encode("ascii"), dtype=np.uint8)
    return int(np.count_nonzero(a == b))


@dataclass
class CiphertextStats:
    length: int
    counts: Dict[str, int]
    index_of_coincidence: float
    most_common: str
    self_encipherments: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        line = (
            f"length={self.length}, IoC={self.index_of_coincidence:.4f} "
            f"(uniform {UNIFORM_IOC:.4f}), most common={self.most_common}"
        )
        if self.self_encipherments is not None:
            line += f", self-encipherments={self.self_encipherments}"
        return line


def ciphertext_stats(ciphertext: str, plaintext: Optional[str] = None) -> CiphertextStats:
    counts = letter_counts(ciphertext)
    return CiphertextStats(
        length=int(counts.sum()),
        counts={ALPHABET[i]: int(c) for i, c in enumerate(counts)},
        index_of_coincidence=round(index_of_coincidence(ciphertext), 6),
        most_common=ALPHABET[int(np.argmax(counts))] if counts.any() else "",
        self_encipherments=self_encipherments(plaintext, ciphertext) if plaintext is not None else None,
    )
