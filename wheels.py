# wheels.py
"""Historical Enigma I / M3 wheel wirings.

The tables are built once at import and never touched again; every lookup
hands back its own copy so two machines never share a wheel.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from debug import Debug
from rotor_and_reflector import Wiring

debug = Debug()
debug.disable("catalog")

# name → (wiring for A..Z, notch, second notch)
ROTOR_TABLES: Dict[str, Tuple[str, str, str | None]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q", None),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E", None),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V", None),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J", None),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z", None),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "Z", "M"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "Z", "M"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "Z", "M"),
}

REFLECTOR_TABLES: Dict[str, str] = {
    "UKW-A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "UKW-B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "UKW-C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}


def _build() -> Mapping[str, Wiring]:
    # bad literal data here is a programming error: let it raise at import
    table: Dict[str, Wiring] = {}
    for name, (template, notch_a, notch_b) in ROTOR_TABLES.items():
        table[name] = Wiring.from_template(template, notch_a, notch_b)
    for name, template in REFLECTOR_TABLES.items():
        wiring = Wiring.from_template(template)
        if not wiring.is_involution():
            raise RuntimeError(f"Reflector {name} is not an involution")
        table[name] = wiring
    return MappingProxyType(table)


CATALOG: Mapping[str, Wiring] = _build()


def canonical_name(name: str) -> str:
    """'b', 'ukw_b', 'UKW-B' → 'UKW-B'; 'iii' → 'III'."""
    key = name.strip().upper().replace("_", "-")
    if key in REFLECTOR_TABLES:
        return key
    if f"UKW-{key}" in REFLECTOR_TABLES:
        return f"UKW-{key}"
    return key


def rotor_names() -> List[str]:
    return list(ROTOR_TABLES)


def reflector_names() -> List[str]:
    return list(REFLECTOR_TABLES)


def get_wiring(name: str) -> Wiring:
    """Return an independent copy of the named wheel's wiring."""
    key = canonical_name(name)
    try:
        wiring = CATALOG[key]
    except KeyError:
        valid = ", ".join(rotor_names() + reflector_names())
        raise KeyError(f"Unknown wheel {name!r}. Expected one of: {valid}") from None
    debug.log("catalog", f"issuing copy of {key}")
    return wiring.copy()


def get_rotor_wiring(name: str) -> Wiring:
    key = canonical_name(name)
    if key not in ROTOR_TABLES:
        raise KeyError(f"{name!r} is not a rotor. Expected one of: {', '.join(rotor_names())}")
    return get_wiring(key)


def get_reflector_wiring(name: str) -> Wiring:
    key = canonical_name(name)
    if key not in REFLECTOR_TABLES:
        raise KeyError(
            f"{name!r} is not a reflector. Expected one of: {', '.join(reflector_names())}"
        )
    return get_wiring(key)
