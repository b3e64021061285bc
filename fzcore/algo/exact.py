"""Exact, boundary, prefix, suffix and whole-string matching."""

from __future__ import annotations

import unicodedata

from fzcore.algo.fuzzy import ascii_fuzzy_index, calculate_score
from fzcore.algo.normalize import normalize_rune
from fzcore.algo.scheme import (
    BONUS_BOUNDARY,
    BONUS_FIRST_CHAR_MULTIPLIER,
    DEFAULT_SCHEME,
    NO_MATCH,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    Scheme,
)

_LATIN1_SPACES = "\t\n\v\f\r \x85\xa0"


def _is_space(char: str) -> bool:
    if ord(char) <= 0xFF:
        return char in _LATIN1_SPACES
    return char.isspace() or unicodedata.category(char) == "Zs"


def _leading_whitespaces(text: str) -> int:
    count = 0
    for char in text:
        if not _is_space(char):
            break
        count += 1
    return count


def _trailing_whitespaces(text: str) -> int:
    count = 0
    for char in reversed(text):
        if not _is_space(char):
            break
        count += 1
    return count


def _lower(char: str) -> str:
    lowered = char.lower()
    return lowered[0] if lowered else char


def _fold(char: str, case_sensitive: bool, normalize: bool) -> str:
    if not case_sensitive:
        if "A" <= char <= "Z":
            char = chr(ord(char) + 32)
        elif ord(char) > 127:
            char = _lower(char)
    if normalize:
        char = normalize_rune(char)
    return char


def _exact_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    boundary_check: bool,
    text: str,
    pattern: str,
    scheme: Scheme,
) -> tuple[MatchResult, None]:
    if not pattern:
        return MatchResult(0, 0, 0), None

    len_text = len(text)
    len_pattern = len(pattern)
    if len_text < len_pattern:
        return NO_MATCH, None
    if ascii_fuzzy_index(text, pattern, case_sensitive)[0] < 0:
        return NO_MATCH, None

    # Only the bonus at the first character position is considered
    pidx = 0
    best_pos, bonus, best_bonus = -1, 0, -1
    index = 0
    while index < len_text:
        text_idx = index if forward else len_text - index - 1
        char = _fold(text[text_idx], case_sensitive, normalize)
        pattern_idx = pidx if forward else len_pattern - pidx - 1
        ok = pattern[pattern_idx] == char
        if ok:
            if pattern_idx == 0:
                bonus = scheme.bonus_at(text, text_idx)
            if boundary_check:
                ok = bonus >= BONUS_BOUNDARY
                if ok and pattern_idx == 0:
                    ok = (
                        text_idx == 0
                        or scheme.char_class_of(text[text_idx - 1]) <= CharClass.DELIMITER
                    )
                if ok and pattern_idx == len_pattern - 1:
                    ok = (
                        text_idx == len_text - 1
                        or scheme.char_class_of(text[text_idx + 1]) <= CharClass.DELIMITER
                    )
        if ok:
            pidx += 1
            if pidx == len_pattern:
                if bonus > best_bonus:
                    best_pos, best_bonus = index, bonus
                if bonus >= BONUS_BOUNDARY:
                    break
                index -= pidx - 1
                pidx, bonus = 0, 0
        else:
            index -= pidx
            pidx, bonus = 0, 0
        index += 1

    if best_pos < 0:
        return NO_MATCH, None

    if forward:
        sidx = best_pos - len_pattern + 1
        eidx = best_pos + 1
    else:
        sidx = len_text - (best_pos + 1)
        eidx = len_text - (best_pos - len_pattern + 1)

    if boundary_check:
        # Underscore boundaries rank lower than the other kinds of boundaries
        score = bonus
        deduct = bonus - BONUS_BOUNDARY + 1
        if sidx > 0 and text[sidx - 1] == "_":
            score -= deduct + 1
            deduct = 1
        if eidx < len_text and text[eidx] == "_":
            score -= deduct
        # Base score so that this can compete with other match types
        score += SCORE_MATCH * len_pattern + scheme.bonus_boundary_white * (len_pattern + 1)
    else:
        score, _ = calculate_score(
            case_sensitive, normalize, text, pattern, sidx, eidx, False, scheme
        )
    return MatchResult(sidx, eidx, score), None


def exact_match_naive(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, None]:
    """Find the exact occurrence of ``pattern`` with the best first-character bonus."""
    return _exact_match(
        case_sensitive, normalize, forward, False, text, pattern, scheme or DEFAULT_SCHEME
    )


def exact_match_boundary(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, None]:
    """Find an exact occurrence of ``pattern`` that starts and ends at word boundaries."""
    return _exact_match(
        case_sensitive, normalize, forward, True, text, pattern, scheme or DEFAULT_SCHEME
    )


def _matches_at(
    text: str, pattern: str, offset: int, case_sensitive: bool, normalize: bool
) -> bool:
    for index, pchar in enumerate(pattern):
        char = text[offset + index]
        if not case_sensitive:
            char = _lower(char)
        if normalize:
            char = normalize_rune(char)
        if char != pchar:
            return False
    return True


def prefix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, None]:
    """Match ``pattern`` at the start of ``text``, ignoring leading whitespace."""
    if not pattern:
        return MatchResult(0, 0, 0), None

    trimmed = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    if len(text) - trimmed < len(pattern):
        return NO_MATCH, None
    if not _matches_at(text, pattern, trimmed, case_sensitive, normalize):
        return NO_MATCH, None

    end = trimmed + len(pattern)
    score, _ = calculate_score(
        case_sensitive, normalize, text, pattern, trimmed, end, False, scheme
    )
    return MatchResult(trimmed, end, score), None


def suffix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, None]:
    """Match ``pattern`` at the end of ``text``, ignoring trailing whitespace."""
    trimmed = len(text)
    if not pattern or not _is_space(pattern[-1]):
        trimmed -= _trailing_whitespaces(text)
    if not pattern:
        return MatchResult(trimmed, trimmed, 0), None

    start = trimmed - len(pattern)
    if start < 0:
        return NO_MATCH, None
    if not _matches_at(text, pattern, start, case_sensitive, normalize):
        return NO_MATCH, None

    score, _ = calculate_score(
        case_sensitive, normalize, text, pattern, start, trimmed, False, scheme
    )
    return MatchResult(start, trimmed, score), None


def equal_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, None]:
    """Match when ``text``, without surrounding whitespace, equals ``pattern``."""
    scheme = scheme or DEFAULT_SCHEME
    len_pattern = len(pattern)
    if len_pattern == 0:
        return NO_MATCH, None

    leading = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    trailing = 0 if _is_space(pattern[-1]) else _trailing_whitespaces(text)
    if len(text) - leading - trailing != len_pattern:
        return NO_MATCH, None

    if normalize:
        matched = True
        for idx, pchar in enumerate(pattern):
            char = text[leading + idx]
            if not case_sensitive:
                char = _lower(char)
            if normalize_rune(pchar) != normalize_rune(char):
                matched = False
                break
    else:
        body = text[leading:len(text) - trailing]
        if not case_sensitive:
            body = body.lower()
        matched = body == pattern

    if not matched:
        return NO_MATCH, None
    white = scheme.bonus_boundary_white
    score = (SCORE_MATCH + white) * len_pattern + (BONUS_FIRST_CHAR_MULTIPLIER - 1) * white
    return MatchResult(leading, leading + len_pattern, score), None