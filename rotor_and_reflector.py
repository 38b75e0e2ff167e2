# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from debug import Debug
from errors import InvalidNumber
from keyboard_and_plugboard import SIZE, EnigmaChar

debug = Debug()
debug.disable("rotor", "reflector", "stepping")


def _letter(position: int) -> str:
    return EnigmaChar(position).to_char()


@dataclass(frozen=True, slots=True)
class Wiring:
    """Fixed internal wiring of a wheel, with its inverse and turnover notches."""

    forward: tuple[int, ...]
    backward: tuple[int, ...]
    notch_a: int | None = None
    notch_b: int | None = None

    @classmethod
    def from_template(
        cls,
        template: str | Sequence[str],
        notch_a: str | None = None,
        notch_b: str | None = None,
    ) -> "Wiring":
        """Build from the letters wired to A..Z, in order.

        The inverse table is found by searching the template for each letter,
        so a template that is not a permutation raises ``InvalidNumber`` for
        the first letter nobody is wired to.
        """
        letters = [EnigmaChar.from_char(ch).position for ch in template]
        if len(letters) != SIZE:
            raise InvalidNumber(len(letters))

        backward = []
        for i in range(SIZE):
            try:
                backward.append(letters.index(i))
            except ValueError:
                raise InvalidNumber(i) from None

        return cls(
            forward=tuple(letters),
            backward=tuple(backward),
            notch_a=cls._notch(notch_a),
            notch_b=cls._notch(notch_b),
        )

    @staticmethod
    def _notch(letter: str | None) -> int | None:
        if letter is None:
            return None
        return EnigmaChar.from_char(letter).position

    def copy(self) -> "Wiring":
        return replace(self)

    @property
    def notches(self) -> tuple[int, ...]:
        return tuple(n for n in (self.notch_a, self.notch_b) if n is not None)

    def is_involution(self) -> bool:
        """True if the wiring pairs letters off, as a reflector must."""
        return all(self.forward[self.forward[i]] == i for i in range(SIZE))

    def forward_str(self) -> str:
        return "".join(_letter(i) for i in self.forward)

    def backward_str(self) -> str:
        return "".join(_letter(i) for i in self.backward)


class Rotor:
    def __init__(self, wiring: Wiring) -> None:
        self.wiring = wiring
        self.position = 0

    # ── stepping --------------------------------------------------
    def step(self) -> None:
        self.position = (self.position + 1) % SIZE
        debug.log("stepping", f"{self!r}")

    def set_position(self, char: EnigmaChar) -> None:
        self.position = char.position

    def get_position(self) -> EnigmaChar:
        return EnigmaChar(self.position, uppercase=True)

    def at_notch(self) -> bool:
        return self.position in self.wiring.notches

    # ── signal path ----------------------------------------------
    def transform(self, char: EnigmaChar, reversed: bool = False) -> EnigmaChar:
        """Pass *char* through the wheel at its current rotation.

        The signal enters at a contact shifted by the rotor position, crosses
        the wiring and leaves shifted back by the same amount.
        """
        shifted = (char.position + self.position) % SIZE
        table = self.wiring.backward if reversed else self.wiring.forward
        out = (table[shifted] + SIZE - self.position) % SIZE
        debug.log("rotor", f"{char.position}->{out} rev={reversed} pos={self.position}")
        return char.with_position(out)

    def __repr__(self) -> str:
        return f"<Rotor pos={_letter(self.position)} notches={self.wiring.notches}>"


class Reflector(Rotor):
    """Umkehrwalze: never steps, signal enters and leaves on the same side."""

    def __init__(self, wiring: Wiring) -> None:
        super().__init__(wiring)
        if not wiring.is_involution():
            debug.log("reflector", "wiring is not an involution; encipherment will not be reciprocal")

    def reflect(self, char: EnigmaChar) -> EnigmaChar:
        return self.transform(char, reversed=False)

    def __repr__(self) -> str:
        return f"<Reflector {self.wiring.forward_str()}>"
