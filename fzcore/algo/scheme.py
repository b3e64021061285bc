"""Character classes, bonus points and scoring schemes for the matchers."""

from __future__ import annotations

import os
import unicodedata
from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

# The boundary bonus is cancelled once the gap between matched characters
# grows beyond about 8 characters.
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

WHITE_CHARS = " \t\n\v\f\r\x85\xa0"
DEFAULT_DELIMITER_CHARS = "/,:;|"


class CharClass(IntEnum):
    """Classes of characters used to compute positional bonuses."""

    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


@dataclass(frozen=True)
class MatchResult:
    """Start and end offsets of a match with its score; -1 offsets mean no match."""

    start: int
    end: int
    score: int

    @property
    def matched(self) -> bool:
        return self.start >= 0


NO_MATCH = MatchResult(-1, -1, 0)


@dataclass(frozen=True)
class Scheme:
    """A scoring scheme: bonus values and the character classification it implies."""

    name: str
    bonus_boundary_white: int
    bonus_boundary_delimiter: int
    delimiter_chars: str
    initial_char_class: CharClass
    ascii_classes: tuple = field(init=False, repr=False, compare=False)
    bonus_matrix: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ascii_classes = tuple(self._classify_ascii(chr(code)) for code in range(128))
        object.__setattr__(self, "ascii_classes", ascii_classes)
        matrix = tuple(
            tuple(self.bonus_for(prev, cls) for cls in CharClass) for prev in CharClass
        )
        object.__setattr__(self, "bonus_matrix", matrix)

    def _classify_ascii(self, char: str) -> CharClass:
        if "a" <= char <= "z":
            return CharClass.LOWER
        if "A" <= char <= "Z":
            return CharClass.UPPER
        if "0" <= char <= "9":
            return CharClass.NUMBER
        if char in WHITE_CHARS:
            return CharClass.WHITE
        if char in self.delimiter_chars:
            return CharClass.DELIMITER
        return CharClass.NON_WORD

    def _classify_non_ascii(self, char: str) -> CharClass:
        category = unicodedata.category(char)
        if category == "Ll":
            return CharClass.LOWER
        if category == "Lu":
            return CharClass.UPPER
        if category.startswith("N"):
            return CharClass.NUMBER
        if category.startswith("L"):
            return CharClass.LETTER
        if char.isspace():
            return CharClass.WHITE
        if char in self.delimiter_chars:
            return CharClass.DELIMITER
        return CharClass.NON_WORD

    def char_class_of(self, char: str) -> CharClass:
        """Return the class of a single character."""
        code = ord(char)
        if code < 128:
            return self.ascii_classes[code]
        return self._classify_non_ascii(char)

    def bonus_for(self, prev_class: CharClass, char_class: CharClass) -> int:
        """Bonus for a character of ``char_class`` following one of ``prev_class``."""
        if char_class > CharClass.NON_WORD:
            if prev_class == CharClass.WHITE:
                return self.bonus_boundary_white
            if prev_class == CharClass.DELIMITER:
                return self.bonus_boundary_delimiter
            if prev_class == CharClass.NON_WORD:
                return BONUS_BOUNDARY

        if (prev_class == CharClass.LOWER and char_class == CharClass.UPPER) or (
            prev_class != CharClass.NUMBER and char_class == CharClass.NUMBER
        ):
            return BONUS_CAMEL123

        if char_class in (CharClass.NON_WORD, CharClass.DELIMITER):
            return BONUS_NON_WORD
        if char_class == CharClass.WHITE:
            return self.bonus_boundary_white
        return 0

    def bonus_at(self, text: str, idx: int) -> int:
        """Bonus for the character of ``text`` at ``idx``."""
        if idx == 0:
            return self.bonus_boundary_white
        prev = self.char_class_of(text[idx - 1])
        return self.bonus_matrix[prev][self.char_class_of(text[idx])]


@lru_cache(maxsize=None)
def scheme_for(name: str) -> Scheme:
    """Return the scoring scheme called ``name`` (default, path or history)."""
    if name == "default":
        return Scheme(
            name,
            BONUS_BOUNDARY + 2,
            BONUS_BOUNDARY + 1,
            DEFAULT_DELIMITER_CHARS,
            CharClass.WHITE,
        )
    if name == "path":
        delimiters = "/" if os.sep == "/" else os.sep + "/"
        return Scheme(
            name,
            BONUS_BOUNDARY,
            BONUS_BOUNDARY + 1,
            delimiters,
            CharClass.DELIMITER,
        )
    if name == "history":
        return Scheme(
            name,
            BONUS_BOUNDARY,
            BONUS_BOUNDARY,
            DEFAULT_DELIMITER_CHARS,
            CharClass.WHITE,
        )
    raise ValueError(f"invalid scoring scheme: {name}")


DEFAULT_SCHEME = scheme_for("default")