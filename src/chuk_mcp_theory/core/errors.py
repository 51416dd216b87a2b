"""
Error types for the theory core.

Grammar errors come from the chord symbol parser and say which token
failed at which stage. Chord part errors flag caller misuse, such as asking
a chord for a part it does not contain.
"""

from __future__ import annotations

from enum import Enum


class ParseStage(str, Enum):
    """Stage of the chord symbol grammar where parsing stopped."""

    ROOT = "root"
    SEGMENTATION = "segmentation"
    BASE = "base"
    NUMERAL = "numeral"
    MODIFIER = "modifier"
    BASS = "bass"


class TheoryError(Exception):
    """Base class for music theory errors."""


class ChordParseError(TheoryError, ValueError):
    """
    A chord symbol could not be classified into a grammar production.

    Attributes:
        symbol: The full symbol being parsed
        token: The offending token
        stage: Grammar stage that rejected the token
    """

    def __init__(self, reason: str, *, symbol: str, token: str, stage: ParseStage) -> None:
        self.reason = reason
        self.symbol = symbol
        self.token = token
        self.stage = stage
        super().__init__(f"{reason}: {token!r} in chord symbol {symbol!r} ({stage.value})")


class ChordPartError(TheoryError, ValueError):
    """A chord was asked for a part its chord type does not contain."""
