"""
Tests for the assembled M3 machine.

These tests verify that:
1. Rotors step before each letter, double-step anomaly included
2. Known historical / reference vectors are reproduced
3. Encipherment is its own inverse from the same start position
4. Unsupported characters never move the rotors
"""

import string

import pytest

from enigma import Enigma
from errors import InvalidCharacter, InvalidPosition, UnsupportedCharacter
from keyboard_and_plugboard import Plugboard
from wheels import get_wiring


@pytest.fixture
def machine():
    return Enigma.standard("B", "I", "II", "III")


# =============================================================================
# ASSEMBLY & POSITIONS
# =============================================================================

class TestAssembly:
    def test_default_position(self, machine):
        assert machine.get_position_str() == "AAA"
        assert machine.get_position() == ("A", "A", "A")

    def test_custom_wirings(self):
        m = Enigma(get_wiring("UKW-B"), get_wiring("I"), get_wiring("II"), get_wiring("III"))
        assert m.encipher("AAAAA") == "BDZGO"

    def test_machines_do_not_share_rotors(self):
        a = Enigma.standard("B", "I", "II", "III")
        b = Enigma.standard("B", "I", "II", "III")
        a.encipher("HELLO")
        assert a.get_position_str() == "AAF"
        assert b.get_position_str() == "AAA"

    def test_unknown_wheel(self):
        with pytest.raises(KeyError):
            Enigma.standard("B", "I", "II", "IX")


class TestPositions:
    def test_set_position_str(self, machine):
        machine.set_position_str("FCB")
        assert machine.get_position_str() == "FCB"

    def test_lowercase_position_rendered_upper(self, machine):
        machine.set_position_str("qev")
        assert machine.get_position_str() == "QEV"

    def test_set_position_partial(self, machine):
        machine.set_position_str("ABC")
        machine.set_position(middle="X")
        assert machine.get_position_str() == "AXC"

    @pytest.mark.parametrize("bad", ["", "AB", "ABCD"])
    def test_wrong_length(self, machine, bad):
        with pytest.raises(InvalidPosition) as exc:
            machine.set_position_str(bad)
        assert exc.value.position == bad

    def test_malformed_letters(self, machine):
        machine.set_position_str("XYZ")
        with pytest.raises(InvalidPosition):
            machine.set_position_str("A1B")
        assert machine.get_position_str() == "XYZ"

    def test_set_position_rejects_bad_letter_atomically(self, machine):
        with pytest.raises(InvalidCharacter):
            machine.set_position("B", "#", "C")
        assert machine.get_position_str() == "AAA"

    def test_different_start_gives_different_output(self, machine):
        machine.set_position_str("FCB")
        fcb = machine.encipher("test")
        machine.set_position_str("AAA")
        aaa = machine.encipher("test")
        assert fcb != aaa


# =============================================================================
# STEPPING
# =============================================================================

class TestStepping:
    """Right rotor always moves; notches carry; middle double-steps."""

    def test_right_rotor_steps_before_encoding(self, machine):
        machine.encipher_char("A")
        assert machine.get_position_str() == "AAB"

    def test_carry_then_double_step(self, machine):
        machine.set_position_str("AAT")
        seen = []
        for _ in range(3):
            machine.encipher_char("A")
            seen.append(machine.get_position_str())
        assert seen == ["AAU", "AAV", "ABW"]

    def test_right_not_at_notch_no_carry(self, machine):
        machine.set_position_str("AET")
        machine.encipher_char("A")
        assert machine.get_position_str() == "BFU"

    def test_middle_on_notch_steps_with_left(self, machine):
        machine.set_position_str("AEU")
        machine.encipher_char("A")
        assert machine.get_position_str() == "BFV"

    def test_historic_double_step_sequence(self, machine):
        machine.set_position_str("ADU")
        seen = []
        for _ in range(3):
            machine.encipher_char("A")
            seen.append(machine.get_position_str())
        assert seen == ["ADV", "AEW", "BFX"]

    def test_right_rotor_period(self, machine):
        machine.set_position_str("AAB")
        machine.encipher("A" * 26)
        assert machine.get_position_str()[2] == "B"


# =============================================================================
# KNOWN VECTORS
# =============================================================================

class TestKnownVectors:
    def test_aaaaa(self, machine):
        assert machine.encipher("AAAAA") == "BDZGO"

    def test_test_with_plugboard(self):
        m = Enigma.standard("B", "I", "II", "III", Plugboard("AQ FR SM"))
        assert m.encipher("test") == "olkr"

    def test_test_without_plugboard(self, machine):
        assert machine.encipher("test") == "olpf"

    def test_hello_world(self, machine):
        assert machine.encipher("Hello, World!", preserve_unsupported=True) == "Ilbda, Amtaz!"

    def test_chars_from_aet(self, machine):
        machine.set_position_str("AET")
        a = machine.encipher_char("A")
        b = machine.encipher_char("B")
        c = machine.encipher_char("c")
        assert (a, b, c) == ("B", "A", "z")

        machine.set_position_str("AET")
        assert machine.encipher_char(a) == "A"
        assert machine.encipher_char(b) == "B"
        assert machine.encipher_char(c) == "c"

        with pytest.raises(UnsupportedCharacter) as exc:
            machine.encipher_char("#")
        assert exc.value.char == "#"
        assert machine.get_position_str() == "BGW"

    def test_string_options(self, machine):
        machine.set_position_str("AET")
        enc1 = machine.encipher("Bida Leonardovi", True, True)
        enc2 = machine.encipher("Bida Leonardovi", False, False)
        assert enc1 == "Agqn Qyieuwbxsb"
        assert enc2 == "ZEWFCIHPTEYSOF"

        machine.set_position_str("AET")
        assert machine.encipher(enc1, True, True) == "Bida Leonardovi"
        assert machine.encipher(enc2, True, True) == "BIDALEONARDOVI"
        assert machine.get_position_str() == "BGV"

    def test_plugboard_changes_output(self):
        text = "bida leonardovi"
        steck = Enigma.standard("B", "I", "II", "III", Plugboard([("X", "Q")]))
        plain = Enigma.standard("B", "I", "II", "III")
        steck.set_position_str("AET")
        plain.set_position_str("AET")

        enc1 = steck.encipher(text, True, True)
        enc2 = plain.encipher(text, True, True)
        assert enc1 == "agxn xyieuwbqsb"
        assert enc2 == "agqn qyieuwbxsb"

        steck.set_position_str("AET")
        assert steck.encipher(enc1, True, True) == text


# =============================================================================
# PROPERTIES
# =============================================================================

class TestProperties:
    @pytest.mark.parametrize("start", ["AAA", "QEV", "ZZZ", "MDU"])
    def test_involution(self, start):
        m = Enigma.standard("C", "VI", "VIII", "IV", Plugboard("AZ BY CX DW"))
        text = string.ascii_letters
        m.set_position_str(start)
        cipher = m.encipher(text)
        m.set_position_str(start)
        assert m.encipher(cipher) == text

    def test_no_letter_enciphers_to_itself(self, machine):
        for ch in string.ascii_uppercase * 4:
            assert machine.encipher_char(ch) != ch

    def test_unsupported_leaves_rotors_alone(self, machine):
        machine.set_position_str("ADU")
        for ch in "# 1é!\n":
            with pytest.raises(UnsupportedCharacter):
                machine.encipher_char(ch)
        assert machine.get_position_str() == "ADU"

    def test_unsupported_is_not_invalid_character(self, machine):
        with pytest.raises(UnsupportedCharacter):
            machine.encipher_char("?")
        assert not issubclass(UnsupportedCharacter, InvalidCharacter)

    def test_drop_unsupported(self, machine):
        assert machine.encipher("A-A A") == "BDZ"
        assert machine.get_position_str() == "AAD"

    def test_case_pattern_preserved(self, machine):
        text = "AttaCK at DaWN"
        out = machine.encipher(text, preserve_unsupported=True)
        assert [c.isupper() for c in out] == [c.isupper() for c in text]
        assert [c.isalpha() for c in out] == [c.isalpha() for c in text]

    def test_uppercase_output(self, machine):
        assert machine.encipher("test", preserve_case=False) == "OLPF"
