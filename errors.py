# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every bad-input condition raised by the machine."""


class InvalidCharacter(EnigmaError):
    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Cannot index using invalid character: {char!r}")


class InvalidNumber(EnigmaError):
    def __init__(self, number: int) -> None:
        self.number = number
        super().__init__(f"Cannot index using invalid number: {number}")


class InvalidPosition(EnigmaError):
    def __init__(self, position: str) -> None:
        self.position = position
        super().__init__(f"String {position!r} cannot be used to set position")


class MalformedPlugboardSpec(EnigmaError):
    def __init__(self, spec: str) -> None:
        self.spec = spec
        super().__init__(f"String {spec!r} is not representing valid plug pairs")


class UnsupportedCharacter(EnigmaError):
    """Raised by the per-character entry point; callers treat it as *skip*."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Character {char!r} cannot be encoded")
