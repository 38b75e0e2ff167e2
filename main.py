# main.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from debug import Debug
from enigma import Enigma
from errors import EnigmaError
from keyboard_and_plugboard import Plugboard
from utilities import get_enigma_settings, group_blocks, parse_position

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

DEFAULT_CONFIG = Path("enigma_config.json")


@dataclass(slots=True)
class Config:
    """Runtime switches for the text wrapper around the machine."""

    preserve_unsupported: bool = True   # copy spaces/punctuation through
    preserve_case: bool = True          # keep the input's letter case
    block: int = 0                      # display groups; 0 = as typed


# ────────────────────────────────────────────────────────────────────────
#  1. JSON loading helpers
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")
    required = {"reflector", "rotors", "position"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    rotors = data["rotors"]
    if not isinstance(rotors, list) or len(rotors) != 3:
        raise ValueError(f"Config needs exactly 3 rotors, got {rotors!r}")
    for key in ("reflector", "position"):
        if not isinstance(data[key], str):
            raise ValueError(f"Config {key!r} must be a string, got {data[key]!r}")
    if not all(isinstance(name, str) for name in rotors):
        raise ValueError(f"Rotor names must be strings, got {rotors!r}")
    data.setdefault("plugs", [])
    if not isinstance(data["plugs"], (str, list)):
        raise ValueError(f"Config 'plugs' must be a string or list, got {data['plugs']!r}")
    return data


# ────────────────────────────────────────────────────────────────────────
#  2. MachineContext – wraps an Enigma & its start position
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """A thin wrapper so the start position travels with the machine."""

    def __init__(self, machine: Enigma, position: str, settings: dict) -> None:
        self.machine = machine
        self.position = position
        self.settings = settings
        self.rewind()

    @classmethod
    def from_config(cls, cfg: dict) -> "MachineContext":
        """Build a MachineContext from a key sheet dictionary."""
        left, middle, right = cfg["rotors"]
        machine = Enigma.standard(
            cfg["reflector"], left, middle, right, Plugboard(cfg.get("plugs") or None)
        )
        position = "".join(parse_position(cfg["position"]))
        return cls(machine, position, cfg)

    # ––– helpers ––––––––––––––––––––––––––––––––––––––––––––––––

    def rewind(self) -> None:
        """Reset the machine to the configured start position."""
        self.machine.set_position_str(self.position)

    def encipher_text(self, text: str, cfg: Config) -> str:
        """Encipher *text* from the start position."""
        self.rewind()
        return self.machine.encipher(
            text,
            preserve_unsupported=cfg.preserve_unsupported,
            preserve_case=cfg.preserve_case,
        )


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encipher or decipher with an Enigma M3")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help=f"Load machine settings from JSON (default: {DEFAULT_CONFIG} if present).")
    p.add_argument("--interactive", action="store_true", help="Ignore any JSON file and run the interactive prompt chain.")
    p.add_argument("--drop-unsupported", action="store_true", help="Drop spaces and punctuation instead of copying them through.")
    p.add_argument("--uppercase", action="store_true", help="Print every output letter in uppercase.")
    p.add_argument("--block", type=int, default=0, metavar="N", help="Show output in groups of N letters.")
    p.add_argument("--verbose", action="store_true", help="Log every component of the signal path.")
    return p.parse_args(argv)


def resolve_settings(args: argparse.Namespace, reader: Callable[[str], str] = input) -> dict:
    """Where do we get the machine settings?"""
    cfg_path = Path(args.config) if args.config else DEFAULT_CONFIG

    if not args.interactive:
        if args.config:                        # --config FILE  (no question)
            return load_config(cfg_path)
        if cfg_path.exists():                  # automatic file → ask first
            ans = reader(f"Found '{cfg_path}'.  Load it? (Y/n) ").strip().lower()
            if ans in {"", "y", "yes"}:
                return load_config(cfg_path)

    return get_enigma_settings(reader)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None, reader: Callable[[str], str] = input) -> None:
    args = parse_args(argv)
    if args.verbose:
        debug.enable_all()

    try:
        ctx = MachineContext.from_config(resolve_settings(args, reader))
    except (OSError, ValueError, KeyError) as e:
        sys.exit(f"Failed to load configuration: {e}")

    cfg = Config(
        preserve_unsupported=not args.drop_unsupported,
        preserve_case=not args.uppercase,
        block=args.block,
    )

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        try:
            cipher = ctx.encipher_text(args.message, cfg)
            plain = ctx.encipher_text(cipher, cfg)
        except EnigmaError as e:
            sys.exit(str(e))
        print("Enciphered:", group_blocks(cipher, cfg.block))
        print("Deciphered:", plain)
        return

    # interactive REPL ---------------------------------------------------
    s = ctx.settings
    print(f"\nRotors {' '.join(s['rotors'])}, reflector {s['reflector']}, start {ctx.position}.")
    print("Type blank line to quit.\n")
    while True:
        txt = reader("\nMessage > ")
        if not txt.strip():
            break
        print("\nOutput  >", group_blocks(ctx.encipher_text(txt, cfg), cfg.block))


if __name__ == "__main__":
    main()
