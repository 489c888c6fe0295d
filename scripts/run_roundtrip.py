"""CLI entry point for roundtrip verification of every rotor order.

Usage:
    python scripts/run_roundtrip.py                                   # I-V, reflector B
    python scripts/run_roundtrip.py --reflector C --rotors I II III   # subset
    python scripts/run_roundtrip.py --vectors 20 --plugboard AE BG    # quick test with cables

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from enigmalab.config import load_settings
from enigmalab.evaluation.roundtrip import run_all_rotor_orders
from enigmalab.utils.repro import results_path, set_global_seed, write_json

logger = logging.getLogger(__name__)


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Roundtrip verification D(E(M)) == M over all rotor orders",
    )
    parser.add_argument(
        "--reflector", default="B",
        help="Reflector name (default: B)",
    )
    parser.add_argument(
        "--rotors", nargs="+", default=None,
        help="Rotor names to permute (default: I II III IV V)",
    )
    parser.add_argument(
        "--plugboard", nargs="*", default=[],
        help="Plugboard pairs applied to every machine, e.g. AE BG",
    )
    parser.add_argument(
        "--vectors", type=int, default=100,
        help="Random vectors per rotor order (default: 100)",
    )
    parser.add_argument(
        "--message-length", type=int, default=60,
        help="Letters per random message (default: 60)",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default="runs",
        help="Output directory (default: runs)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    set_global_seed(args.seed)

    results = run_all_rotor_orders(
        reflector=args.reflector.upper(),
        rotor_names=[r.upper() for r in args.rotors] if args.rotors else None,
        plugboard=[p.upper() for p in args.plugboard],
        num_vectors=args.vectors,
        message_length=args.message_length,
        seed=args.seed,
        progress_callback=_cli_progress,
    )

    for r in results:
        print(r.summary())
    failing = [r.machine_name for r in results if not r.is_perfect]
    print(f"\n{len(results) - len(failing)}/{len(results)} rotor orders pass.")

    out_path = write_json(results_path(args.output_dir, f"roundtrip_{args.reflector.upper()}"), {
        "seed": args.seed,
        "results": [r.to_dict() for r in results],
        "failing": failing,
    })
    logger.info("Results written to %s", out_path)
    print(f"Results saved to: {out_path}")

    if failing:
        sys.exit(1)


if __name__ == "__main__":
    main()
