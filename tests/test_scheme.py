import pytest

from fzcore.algo.scheme import (
    BONUS_BOUNDARY,
    BONUS_CAMEL123,
    BONUS_CONSECUTIVE,
    BONUS_NON_WORD,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    scheme_for,
)


def test_documented_constants_drive_bonuses():
    scheme = scheme_for("default")
    assert scheme.bonus_for(CharClass.NON_WORD, CharClass.LOWER) == SCORE_MATCH // 2
    assert scheme.bonus_for(CharClass.NON_WORD, CharClass.LOWER) == 8
    assert scheme.bonus_for(CharClass.LOWER, CharClass.UPPER) == BONUS_BOUNDARY - 1
    assert scheme.bonus_for(CharClass.LOWER, CharClass.UPPER) == 7
    assert BONUS_CONSECUTIVE == 4


def test_default_scheme_bonuses():
    scheme = scheme_for("default")
    assert scheme.bonus_boundary_white == BONUS_BOUNDARY + 2
    assert scheme.bonus_boundary_delimiter == BONUS_BOUNDARY + 1
    assert scheme.initial_char_class == CharClass.WHITE


def test_history_and_path_schemes():
    history = scheme_for("history")
    assert history.bonus_boundary_white == BONUS_BOUNDARY
    assert history.bonus_boundary_delimiter == BONUS_BOUNDARY
    path = scheme_for("path")
    assert path.bonus_boundary_white == BONUS_BOUNDARY
    assert path.initial_char_class == CharClass.DELIMITER
    assert "/" in path.delimiter_chars


def test_unknown_scheme_raises():
    with pytest.raises(ValueError):
        scheme_for("bogus")


@pytest.mark.parametrize(
    "char, expected",
    [
        ("a", CharClass.LOWER),
        ("Z", CharClass.UPPER),
        ("7", CharClass.NUMBER),
        (" ", CharClass.WHITE),
        ("\t", CharClass.WHITE),
        ("/", CharClass.DELIMITER),
        (",", CharClass.DELIMITER),
        ("-", CharClass.NON_WORD),
        ("é", CharClass.LOWER),
        ("É", CharClass.UPPER),
        ("椙", CharClass.LETTER),
        ("\u00a0", CharClass.WHITE),
    ],
)
def test_char_class_default(char, expected):
    assert scheme_for("default").char_class_of(char) == expected


def test_path_scheme_comma_is_not_delimiter():
    assert scheme_for("path").char_class_of(",") == CharClass.NON_WORD
    assert scheme_for("path").char_class_of("/") == CharClass.DELIMITER


def test_bonus_for_transitions():
    scheme = scheme_for("default")
    assert scheme.bonus_for(CharClass.WHITE, CharClass.LOWER) == scheme.bonus_boundary_white
    assert scheme.bonus_for(CharClass.DELIMITER, CharClass.LOWER) == scheme.bonus_boundary_delimiter
    assert scheme.bonus_for(CharClass.NON_WORD, CharClass.UPPER) == BONUS_BOUNDARY
    assert scheme.bonus_for(CharClass.LOWER, CharClass.UPPER) == BONUS_CAMEL123
    assert scheme.bonus_for(CharClass.LOWER, CharClass.NUMBER) == BONUS_CAMEL123
    assert scheme.bonus_for(CharClass.NUMBER, CharClass.NUMBER) == 0
    assert scheme.bonus_for(CharClass.LOWER, CharClass.NON_WORD) == BONUS_NON_WORD
    assert scheme.bonus_for(CharClass.LOWER, CharClass.LOWER) == 0


def test_bonus_matrix_agrees_with_bonus_for():
    scheme = scheme_for("default")
    for prev in CharClass:
        for cls in CharClass:
            assert scheme.bonus_matrix[prev][cls] == scheme.bonus_for(prev, cls)


def test_bonus_at():
    scheme = scheme_for("default")
    assert scheme.bonus_at("fooBar", 0) == scheme.bonus_boundary_white
    assert scheme.bonus_at("fooBar", 3) == BONUS_CAMEL123
    assert scheme.bonus_at("foo bar", 4) == scheme.bonus_boundary_white
    assert scheme.bonus_at("foo/bar", 4) == scheme.bonus_boundary_delimiter
    assert scheme.bonus_at("foobar", 2) == 0


def test_match_result_matched():
    assert MatchResult(2, 5, 3).matched
    assert not MatchResult(-1, -1, 0).matched