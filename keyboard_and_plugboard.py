# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from debug import Debug
from errors import InvalidCharacter, MalformedPlugboardSpec

debug = Debug()
debug.disable("keyboard", "plugboard")

SIZE = 26
_UPPER_BASE = ord("A")
_LOWER_BASE = ord("a")


# ── Keyboard / lampboard character ────────────────────────────────
@dataclass(frozen=True, eq=False, slots=True)
class EnigmaChar:
    """One letter inside the machine: 0-based position plus its case."""

    position: int
    uppercase: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.position < SIZE:
            raise ValueError(f"Position {self.position} out of range 0–{SIZE - 1}")

    # letter → signal
    @classmethod
    def from_char(cls, char: str) -> "EnigmaChar":
        if len(char) != 1:
            raise InvalidCharacter(char)
        if "A" <= char <= "Z":
            inst = cls(ord(char) - _UPPER_BASE, True)
        elif "a" <= char <= "z":
            inst = cls(ord(char) - _LOWER_BASE, False)
        else:
            raise InvalidCharacter(char)
        debug.log("keyboard", f"{char!r}->{inst.position}")
        return inst

    # signal → letter
    def to_char(self) -> str:
        return chr(self.position + (_UPPER_BASE if self.uppercase else _LOWER_BASE))

    def with_position(self, position: int) -> "EnigmaChar":
        return replace(self, position=position)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EnigmaChar):
            return self.position == other.position and self.uppercase == other.uppercase
        if isinstance(other, str):
            return self.to_char() == other
        return NotImplemented

    def __hash__(self) -> int:
        # must agree with equality against the rendered letter
        return hash(self.to_char())

    def __str__(self) -> str:
        return self.to_char()


# ── Plugboard ─────────────────────────────────────────────────────
PairSpec = str | tuple[str, str]


class Plugboard:
    """Steckerbrett: a symmetric swap applied on the way in and out.

    *pairs* is either one whitespace separated string (``"AQ FR SM"``) or an
    iterable of two-letter strings / ``(a, b)`` tuples. A letter plugged
    twice keeps only its latest partner.
    """

    def __init__(self, pairs: str | Iterable[PairSpec] | None = None) -> None:
        self.pairs: dict[int, int] = {}

        if pairs is None:
            return
        if isinstance(pairs, str):
            pairs = self._split(pairs)

        for raw in pairs:
            # normalise to (a, b)
            if isinstance(raw, str) and len(raw) != 2:
                raise MalformedPlugboardSpec(raw)
            try:
                a, b = raw
            except (TypeError, ValueError):
                raise MalformedPlugboardSpec(repr(raw)) from None
            self.insert(a, b)

    @staticmethod
    def _split(spec: str) -> list[tuple[str, str]]:
        tokens = spec.split()
        if any(len(tok) != 2 for tok in tokens):
            raise MalformedPlugboardSpec(spec)
        return [(tok[0], tok[1]) for tok in tokens]

    def insert(self, a: str, b: str) -> None:
        """Plug *a* to *b* in both directions."""
        x = EnigmaChar.from_char(a).position
        y = EnigmaChar.from_char(b).position
        for old in (x, y):
            if old in self.pairs:
                debug.log("plugboard", f"re-plugging {chr(old + _UPPER_BASE)}")
        self.pairs[x] = y
        self.pairs[y] = x

    def apply(self, char: EnigmaChar) -> EnigmaChar:
        mapped = self.pairs.get(char.position)
        if mapped is None:
            return char
        debug.log("plugboard", f"{char.position}->{mapped}")
        return char.with_position(mapped)

    forward = apply        # alias: signal in
    backward = apply       # alias: signal out

    def __len__(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        swaps = [
            chr(a + _UPPER_BASE) + chr(b + _UPPER_BASE)
            for a, b in sorted(self.pairs.items())
            if a <= b
        ]
        return f"<Plugboard {' '.join(swaps)}>"
