# utilities.py
from __future__ import annotations

from typing import Callable, List, Set, Tuple

from errors import EnigmaError, InvalidPosition
from keyboard_and_plugboard import EnigmaChar
from wheels import canonical_name, reflector_names, rotor_names

MAX_PAIRS = 13
ROTOR_COUNT = 3

# ────────────────────────────────────────────────────────────────────────
#  0. Trivial helpers
# ────────────────────────────────────────────────────────────────────────


def ask(prompt: str, reader: Callable[[str], str] = input) -> str:
    """Read & normalise an operator’s response (uppercase, trimmed)."""
    return reader(prompt).strip().upper()


def parse_position(position: str) -> Tuple[str, str, str]:
    """Split a window string like ``"AET"`` into three letters."""
    position = position.strip()
    if len(position) != ROTOR_COUNT:
        raise InvalidPosition(position)
    try:
        for ch in position:
            EnigmaChar.from_char(ch)
    except EnigmaError:
        raise InvalidPosition(position) from None
    left, middle, right = position.upper()
    return left, middle, right


def group_blocks(text: str, block: int) -> str:
    """Show *text* in groups of *block* letters (``block <= 0`` leaves it)."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Interactive question helpers
# ────────────────────────────────────────────────────────────────────────


def get_rotor_selection(reader: Callable[[str], str] = input) -> List[str]:
    names = rotor_names()
    print("\nAvailable Rotors:", " ".join(names))
    while True:
        sel = ask(f"Select {ROTOR_COUNT} rotors, left to right: ", reader).split()
        if len(sel) == ROTOR_COUNT and all(r in names for r in sel):
            return sel
        print(f"❌  Need exactly {ROTOR_COUNT} valid rotor names.")


def get_reflector_selection(reader: Callable[[str], str] = input) -> str:
    names = reflector_names()
    print("\nAvailable Reflectors: ", ", ".join(names))
    while True:
        ref = canonical_name(ask("Select reflector: ", reader) or "?")
        if ref in names:
            return ref
        print("❌  Not a valid reflector.")


# ––– plugboard helpers –––––––––––––––––––––––––––––––––––––––––––

def _validate_pair(pair: str, used: Set[str]) -> Tuple[bool, str | None]:
    if len(pair) != 2:
        return False, f"❌ Pair '{pair}' must be exactly 2 letters."
    a, b = pair
    if not (a.isascii() and a.isalpha() and b.isascii() and b.isalpha()):
        return False, f"❌ Pair '{pair}' must use letters A–Z."
    if a == b:
        return False, f"❌ Pair '{pair}' cannot map to itself."
    if {a, b} & used:
        dup = ({a, b} & used).pop()
        return False, f"❌ Letter '{dup}' already used."
    return True, None


def get_plugboard(reader: Callable[[str], str] = input) -> List[str]:
    """Return a list of *validated* plugboard pairs (e.g. ["AB", "CD"])."""
    print(f"\nPlugboard pairs (≤{MAX_PAIRS}, e.g. AB CD EF):")
    while True:
        used: Set[str] = set()
        raw = ask("Pairs (Enter for none): ", reader)
        if not raw:
            return []

        pairs = raw.split()
        if len(pairs) > MAX_PAIRS:
            print(f"❌  Too many pairs (max {MAX_PAIRS}).")
            continue

        for p in pairs:
            ok, err = _validate_pair(p, used)
            if not ok:
                print(err)
                break
            used.update(p)
        else:  # only executes if no break occurred
            return pairs


def get_start_position(reader: Callable[[str], str] = input) -> str:
    while True:
        raw = ask("Start position (e.g. AAA): ", reader) or "AAA"
        try:
            return "".join(parse_position(raw))
        except InvalidPosition:
            print(f"❌  Need exactly {ROTOR_COUNT} letters.")


# ––– orchestration –––––––––––––––––––––––––––––––––––––––––––––––

def get_enigma_settings(reader: Callable[[str], str] = input) -> dict:
    """Collect settings from the operator, shaped like a JSON key sheet."""
    rotors = get_rotor_selection(reader)
    reflector = get_reflector_selection(reader)
    plugs = get_plugboard(reader)
    position = get_start_position(reader)
    return {
        "reflector": reflector,
        "rotors": rotors,
        "plugs": plugs,
        "position": position,
    }


__all__ = [
    "ask",
    "get_enigma_settings",
    "group_blocks",
    "parse_position",
]
