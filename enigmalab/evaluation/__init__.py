"""Machine evaluation: roundtrip verification and ciphertext statistics.

Research / education only. Do NOT use in production.
"""

from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests, run_all_rotor_orders
from .stats import CiphertextStats, ciphertext_stats, index_of_coincidence, letter_counts, self_encipherments

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "run_all_rotor_orders",
    "CiphertextStats",
    "ciphertext_stats",
    "index_of_coincidence",
    "letter_counts",
    "self_encipherments",
]
