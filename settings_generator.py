# settings_generator.py
from __future__ import annotations

import argparse
import json
import string
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List

from wheels import reflector_names, rotor_names

ALPHA26 = string.ascii_uppercase
MAX_PAIRS = len(ALPHA26) // 2

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = max(0, min(k, MAX_PAIRS))
    pool = list(ALPHA26)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(pairs: int = 10, seed: int | None = None) -> Dict:
    """Draw one daily key sheet."""
    rng = build_rng(seed)
    return {
        "reflector": rng.choice(reflector_names()),
        "rotors": rng.sample(rotor_names(), 3),
        "plugs": choose_pairs(pairs, rng),
        "position": "".join(rng.choices(ALPHA26, k=3)),
    }


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an Enigma M3 daily key sheet")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=10, help="Plugboard cables (default 10, max 13)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate_settings(args.pairs, args.seed)

    args.outfile.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {cfg['rotors']}\n"
        f"   reflector   : {cfg['reflector']}\n"
        f"   position    : {cfg['position']}\n"
        f"   plug pairs  : {len(cfg['plugs'])}")


if __name__ == "__main__":
    main()
