import pytest

from fzcore.algo.exact import (
    equal_match,
    exact_match_boundary,
    exact_match_naive,
    prefix_match,
    suffix_match,
)
from fzcore.algo.scheme import (
    BONUS_BOUNDARY,
    BONUS_CAMEL123,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    DEFAULT_SCHEME,
    SCORE_MATCH,
)

WHITE = DEFAULT_SCHEME.bonus_boundary_white
DELIM = DEFAULT_SCHEME.bonus_boundary_delimiter


def _span(result, positions):
    if positions:
        positions = sorted(positions)
        return positions[0], positions[-1] + 1, result.score
    return result.start, result.end, result.score


def _prepare(case_sensitive, pattern):
    return pattern if case_sensitive else pattern.lower()


EXACT_CASES = [
    (True, "fooBarbaz", "oBA", -1, -1, 0),
    (True, "fooBarbaz", "fooBarbazz", -1, -1, 0),
    (False, "fooBarbaz", "oBA", 2, 5, SCORE_MATCH * 3 + BONUS_CAMEL123 + BONUS_CONSECUTIVE),
    (False, "/AutomatorDocument.icns", "rdoc", 9, 13,
     SCORE_MATCH * 4 + BONUS_CAMEL123 + BONUS_CONSECUTIVE * 2),
    (False, "/man1/zshcompctl.1", "zshc", 6, 10,
     SCORE_MATCH * 4 + DELIM * (BONUS_FIRST_CHAR_MULTIPLIER + 3)),
    (False, "/.oh-my-zsh/cache", "zsh/c", 8, 13,
     SCORE_MATCH * 5 + BONUS_BOUNDARY * (BONUS_FIRST_CHAR_MULTIPLIER + 3) + DELIM),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, sidx, eidx, score", EXACT_CASES)
def test_exact_match_naive(forward, case_sensitive, text, pattern, sidx, eidx, score):
    result, positions = exact_match_naive(
        case_sensitive, False, forward, text, _prepare(case_sensitive, pattern), True
    )
    assert _span(result, positions) == (sidx, eidx, score)


@pytest.mark.parametrize(
    "forward, sidx, eidx",
    [(True, 1, 3), (False, 8, 10)],
)
def test_exact_match_naive_backward(forward, sidx, eidx):
    result, positions = exact_match_naive(False, False, forward, "foobar foob", "oo", True)
    assert _span(result, positions) == (sidx, eidx, SCORE_MATCH * 2 + BONUS_CONSECUTIVE)


PREFIX_SCORE = SCORE_MATCH * 3 + WHITE * BONUS_FIRST_CHAR_MULTIPLIER + WHITE * 2

PREFIX_CASES = [
    (True, "fooBarbaz", "Foo", -1, -1, 0),
    (False, "fooBarBaz", "baz", -1, -1, 0),
    (False, "fooBarbaz", "Foo", 0, 3, PREFIX_SCORE),
    (False, "foOBarBaZ", "foo", 0, 3, PREFIX_SCORE),
    (False, "f-oBarbaz", "f-o", 0, 3, PREFIX_SCORE),
    (False, " fooBar", "foo", 1, 4, PREFIX_SCORE),
    (False, " fooBar", " fo", 0, 3, PREFIX_SCORE),
    (False, "     fo", "foo", -1, -1, 0),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, sidx, eidx, score", PREFIX_CASES)
def test_prefix_match(forward, case_sensitive, text, pattern, sidx, eidx, score):
    result, positions = prefix_match(
        case_sensitive, False, forward, text, _prepare(case_sensitive, pattern), True
    )
    assert _span(result, positions) == (sidx, eidx, score)


SUFFIX_CASES = [
    (True, "fooBarbaz", "Baz", -1, -1, 0),
    (False, "fooBarbaz", "Foo", -1, -1, 0),
    (False, "fooBarbaz", "baz", 6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2),
    (False, "fooBarBaZ", "baz", 6, 9,
     (SCORE_MATCH + BONUS_CAMEL123) * 3 + BONUS_CAMEL123 * (BONUS_FIRST_CHAR_MULTIPLIER - 1)),
    (False, "fooBarbaz ", "baz", 6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2),
    (False, "fooBarbaz ", "baz ", 6, 10, SCORE_MATCH * 4 + BONUS_CONSECUTIVE * 2 + WHITE),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, sidx, eidx, score", SUFFIX_CASES)
def test_suffix_match(forward, case_sensitive, text, pattern, sidx, eidx, score):
    result, positions = suffix_match(
        case_sensitive, False, forward, text, _prepare(case_sensitive, pattern), True
    )
    assert _span(result, positions) == (sidx, eidx, score)


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize(
    "fun, expected",
    [
        (exact_match_naive, (0, 0, 0)),
        (prefix_match, (0, 0, 0)),
        (suffix_match, (6, 6, 0)),
    ],
)
def test_empty_pattern(forward, fun, expected):
    result, positions = fun(True, False, forward, "foobar", "", True)
    assert _span(result, positions) == expected


def test_empty_pattern_equal_match_is_no_match():
    result, _ = equal_match(True, False, True, "foobar", "")
    assert (result.start, result.end) == (-1, -1)


@pytest.mark.parametrize("fun", [prefix_match, exact_match_naive])
def test_normalize_so(fun):
    result, positions = fun(False, True, True, "Só Danço Samba", "so", True)
    assert _span(result, positions) == (0, 2, 62)


@pytest.mark.parametrize("fun", [prefix_match, suffix_match, exact_match_naive, equal_match])
def test_normalize_danco(fun):
    result, positions = fun(False, True, True, "Danço", "danco", True)
    assert _span(result, positions) == (0, 5, 140)


def test_equal_match_trims_whitespace():
    result, _ = equal_match(False, False, True, "  Foo  ", "foo")
    assert (result.start, result.end) == (2, 5)
    assert result.score > 0


def test_equal_match_rejects_longer_text():
    result, _ = equal_match(False, False, True, "foo bar", "foo")
    assert result.matched is False


def test_equal_match_case_sensitive():
    result, _ = equal_match(True, False, True, "Foo", "foo")
    assert result.matched is False


def test_exact_match_boundary_requires_word_boundary():
    result, _ = exact_match_boundary(False, False, True, "foo bar", "bar")
    assert (result.start, result.end) == (4, 7)
    missing, _ = exact_match_boundary(False, False, True, "foo bar", "ar")
    assert (missing.start, missing.end) == (-1, -1)


def test_exact_match_boundary_ranks_underscore_lower():
    spaced, _ = exact_match_boundary(False, False, True, "foo bar", "bar")
    underscored, _ = exact_match_boundary(False, False, True, "foo_bar", "bar")
    assert underscored.matched
    assert underscored.score < spaced.score