# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from debug import Debug
from errors import InvalidCharacter, InvalidPosition, UnsupportedCharacter
from keyboard_and_plugboard import EnigmaChar, Plugboard
from rotor_and_reflector import Reflector, Rotor, Wiring
from wheels import get_reflector_wiring, get_rotor_wiring

debug = Debug()
debug.disable("encipher", "stepping")


class Enigma:
    """Three-rotor M3 machine: plugboard, left/middle/right rotors, reflector.

    The left rotor sits next to the reflector; the right rotor is the fast
    one and moves on every key press.
    """

    def __init__(
        self,
        reflector: Wiring,
        left: Wiring,
        middle: Wiring,
        right: Wiring,
        plugboard: Plugboard | None = None,
    ) -> None:
        self.reflector = Reflector(reflector)
        self.left      = Rotor(left)
        self.middle    = Rotor(middle)
        self.right     = Rotor(right)
        self.plugboard = plugboard if plugboard is not None else Plugboard()

    @classmethod
    def standard(
        cls,
        reflector: str,
        left: str,
        middle: str,
        right: str,
        plugboard: Plugboard | None = None,
    ) -> "Enigma":
        """Assemble from catalog names, e.g. ``Enigma.standard("B", "I", "II", "III")``."""
        return cls(
            get_reflector_wiring(reflector),
            get_rotor_wiring(left),
            get_rotor_wiring(middle),
            get_rotor_wiring(right),
            plugboard,
        )

    # ── key helpers ─────────────────────────────────────────────

    def set_position(
        self,
        left: str | None = None,
        middle: str | None = None,
        right: str | None = None,
    ) -> None:
        """Turn each given rotor to its window letter; ``None`` leaves it be."""
        # parse everything first so a bad letter leaves the machine untouched
        targets = [
            (rotor, EnigmaChar.from_char(letter))
            for rotor, letter in zip(self.rotors, (left, middle, right))
            if letter is not None
        ]
        for rotor, char in targets:
            rotor.set_position(char)

    def set_position_str(self, position: str) -> None:
        """Set all three rotors from a window string such as ``"AET"``."""
        if len(position) != 3:
            raise InvalidPosition(position)
        try:
            self.set_position(*position)
        except InvalidCharacter:
            raise InvalidPosition(position) from None

    def get_position(self) -> tuple[str, str, str]:
        left, middle, right = (r.get_position().to_char() for r in self.rotors)
        return left, middle, right

    def get_position_str(self) -> str:
        return "".join(self.get_position())

    @property
    def rotors(self) -> tuple[Rotor, Rotor, Rotor]:
        return self.left, self.middle, self.right

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press, double-step anomaly included."""
        # read both notches before anything moves
        notch_r = self.right.at_notch()
        notch_m = self.middle.at_notch()

        self.right.step()
        if notch_r:
            self.middle.step()
        if notch_m:
            self.middle.step()
            self.left.step()

        debug.log("stepping", f"window {self.get_position_str()}")

    # ── encipher one symbol  ────────────────────────────────────

    def encipher_char(self, letter: str) -> str:
        """Run one key press through the machine and return the lamp letter.

        Non-letters raise ``UnsupportedCharacter`` before any rotor moves.
        """
        try:
            signal = EnigmaChar.from_char(letter)
        except InvalidCharacter:
            raise UnsupportedCharacter(letter) from None

        self._step_rotors()

        signal = self.plugboard.forward(signal)

        for rotor in (self.right, self.middle, self.left):
            signal = rotor.transform(signal, reversed=False)

        signal = self.reflector.reflect(signal)

        for rotor in (self.left, self.middle, self.right):
            signal = rotor.transform(signal, reversed=True)

        signal = self.plugboard.backward(signal)
        out_ch = signal.to_char()
        debug.log("encipher", f"{letter}->{out_ch}")
        return out_ch

    # ── encipher a text  ────────────────────────────────────────

    def encipher(
        self,
        text: str,
        preserve_unsupported: bool = False,
        preserve_case: bool = True,
    ) -> str:
        """Encipher *text* letter by letter from the current position.

        Characters the machine cannot encode never step the rotors; they are
        copied through when *preserve_unsupported* is set and dropped
        otherwise. Without *preserve_case* every output letter is uppercase.
        """
        out: list[str] = []
        for ch in text:
            try:
                enc = self.encipher_char(ch)
            except UnsupportedCharacter:
                if preserve_unsupported:
                    out.append(ch)
                continue
            out.append(enc if preserve_case else enc.upper())
        return "".join(out)

    def __repr__(self) -> str:
        return (
            f"<Enigma window={self.get_position_str()} "
            f"reflector={self.reflector.wiring.forward_str()} {self.plugboard!r}>"
        )
