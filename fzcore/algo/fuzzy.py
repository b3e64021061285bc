"""Fuzzy matching: a greedy forward/backward scan and an optimal alignment."""

from __future__ import annotations

from fzcore.algo.normalize import normalize_rune
from fzcore.algo.scheme import (
    BONUS_BOUNDARY,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    DEFAULT_SCHEME,
    NO_MATCH,
    SCORE_GAP_EXTENSION,
    SCORE_GAP_START,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    Scheme,
)


def _lower_rune(char: str) -> str:
    lowered = char.lower()
    return lowered[0] if lowered else char


def _fold_rune(char: str, case_sensitive: bool, normalize: bool) -> str:
    """Lowercase (unless case sensitive) and normalize one text character."""
    if not case_sensitive:
        if "A" <= char <= "Z":
            char = chr(ord(char) + 32)
        elif ord(char) > 127:
            char = _lower_rune(char)
    if normalize:
        char = normalize_rune(char)
    return char


def _try_skip(text: str, case_sensitive: bool, char: str, start: int) -> int:
    found = text.find(char, start)
    if found == start:
        return start
    if not case_sensitive and "a" <= char <= "z":
        end = found if found >= 0 else len(text)
        upper_at = text.find(char.upper(), start, end)
        if upper_at >= 0:
            found = upper_at
    return found


def ascii_fuzzy_index(text: str, pattern: str, case_sensitive: bool) -> tuple[int, int]:
    """Narrow the range of ``text`` in which an ASCII pattern can match.

    Returns ``(-1, -1)`` when no match is possible and the whole range
    when the text is not ASCII.
    """
    if not text.isascii():
        return 0, len(text)
    if not pattern.isascii():
        return -1, -1

    first_idx = idx = last_idx = 0
    char = ""
    for pidx, char in enumerate(pattern):
        idx = _try_skip(text, case_sensitive, char, idx)
        if idx < 0:
            return -1, -1
        if pidx == 0 and idx > 0:
            # Step back to find the right bonus point
            first_idx = idx - 1
        last_idx = idx
        idx += 1

    upper = char.upper() if not case_sensitive and "a" <= char <= "z" else char
    scope = text[last_idx:]
    offset = max(scope.rfind(char), scope.rfind(upper))
    if offset > 0:
        return first_idx, last_idx + offset + 1
    return first_idx, last_idx + 1


def calculate_score(
    case_sensitive: bool,
    normalize: bool,
    text: str,
    pattern: str,
    sidx: int,
    eidx: int,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[int, list[int] | None]:
    """Score the match of ``pattern`` in ``text[sidx:eidx]`` with the V2 criteria."""
    scheme = scheme or DEFAULT_SCHEME
    pidx = score = consecutive = first_bonus = 0
    in_gap = False
    positions: list[int] | None = [] if with_pos else None
    if sidx > 0:
        prev_class = scheme.char_class_of(text[sidx - 1])
    else:
        prev_class = scheme.initial_char_class

    for idx in range(sidx, eidx):
        char = text[idx]
        char_class = scheme.char_class_of(char)
        char = _fold_rune(char, case_sensitive, normalize)
        if pidx < len(pattern) and char == pattern[pidx]:
            if positions is not None:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = scheme.bonus_matrix[prev_class][char_class]
            if consecutive == 0:
                first_bonus = bonus
            else:
                # Break consecutive chunk
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            if pidx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = char_class
    return score, positions


def fuzzy_match_v1(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
) -> tuple[MatchResult, list[int] | None]:
    """Find the first fuzzy occurrence, then shrink it with a backward scan.

    ``pattern`` must already be lowercase when not case sensitive and
    normalized when ``normalize`` is set.
    """
    if not pattern:
        return MatchResult(0, 0, 0), None
    if ascii_fuzzy_index(text, pattern, case_sensitive)[0] < 0:
        return NO_MATCH, None

    len_text = len(text)
    len_pattern = len(pattern)

    def text_at(index: int) -> str:
        pos = index if forward else len_text - index - 1
        return _fold_rune(text[pos], case_sensitive, normalize)

    def pattern_at(index: int) -> str:
        return pattern[index if forward else len_pattern - index - 1]

    pidx = 0
    sidx = eidx = -1
    for index in range(len_text):
        if text_at(index) == pattern_at(pidx):
            if sidx < 0:
                sidx = index
            pidx += 1
            if pidx == len_pattern:
                eidx = index + 1
                break

    if sidx < 0 or eidx < 0:
        return NO_MATCH, None

    pidx -= 1
    for index in range(eidx - 1, sidx - 1, -1):
        if text_at(index) == pattern_at(pidx):
            pidx -= 1
            if pidx < 0:
                sidx = index
                break

    if not forward:
        sidx, eidx = len_text - eidx, len_text - sidx

    score, positions = calculate_score(
        case_sensitive, normalize, text, pattern, sidx, eidx, with_pos, scheme
    )
    return MatchResult(sidx, eidx, score), positions


def fuzzy_match_v2(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    scheme: Scheme | None = None,
    max_cells: int | None = None,
) -> tuple[MatchResult, list[int] | None]:
    """Find the highest scoring fuzzy alignment of ``pattern`` in ``text``.

    Falls back to :func:`fuzzy_match_v1` when the score matrix would have
    more than ``max_cells`` cells. Positions, when requested, are returned
    from the last matched character to the first.
    """
    scheme = scheme or DEFAULT_SCHEME
    m = len(pattern)
    if m == 0:
        return MatchResult(0, 0, 0), ([] if with_pos else None)
    n = len(text)
    if m > n:
        return NO_MATCH, None

    if max_cells is not None and n * m > max_cells:
        return fuzzy_match_v1(
            case_sensitive, normalize, forward, text, pattern, with_pos, scheme
        )

    # Phase 1. Narrow down the search range for ASCII text
    min_idx, max_idx = ascii_fuzzy_index(text, pattern, case_sensitive)
    if min_idx < 0:
        return NO_MATCH, None
    n = max_idx - min_idx

    h0 = [0] * n
    c0 = [0] * n
    bonuses = [0] * n
    first_occurrence = [0] * m
    chars = list(text[min_idx:max_idx])
    matrix = scheme.bonus_matrix

    # Phase 2. Bonus for each position, first occurrences, first row of scores
    max_score = max_score_pos = 0
    pidx = last_idx = 0
    pchar0 = pchar = pattern[0]
    prev_h0 = 0
    prev_class = scheme.initial_char_class
    in_gap = False
    for off, char in enumerate(chars):
        char_class = scheme.char_class_of(char)
        if ord(char) < 128:
            if not case_sensitive and char_class == CharClass.UPPER:
                char = chr(ord(char) + 32)
                chars[off] = char
        else:
            if not case_sensitive and char_class == CharClass.UPPER:
                char = _lower_rune(char)
            if normalize:
                char = normalize_rune(char)
            chars[off] = char

        bonus = matrix[prev_class][char_class]
        bonuses[off] = bonus
        prev_class = char_class

        if char == pchar:
            if pidx < m:
                first_occurrence[pidx] = off
                pidx += 1
                pchar = pattern[min(pidx, m - 1)]
            last_idx = off

        if char == pchar0:
            score = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
            h0[off] = score
            c0[off] = 1
            if m == 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, off
                if forward and bonus >= BONUS_BOUNDARY:
                    break
            in_gap = False
        else:
            gap = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            h0[off] = max(prev_h0 + gap, 0)
            c0[off] = 0
            in_gap = True
        prev_h0 = h0[off]

    if pidx != m:
        return NO_MATCH, None
    if m == 1:
        result = MatchResult(min_idx + max_score_pos, min_idx + max_score_pos + 1, max_score)
        return result, ([min_idx + max_score_pos] if with_pos else None)

    # Phase 3. Fill in the score matrix; omission is not allowed
    f0 = first_occurrence[0]
    width = last_idx - f0 + 1
    scores = [0] * (width * m)
    scores[:width] = h0[f0:last_idx + 1]
    runs = [0] * (width * m)
    runs[:width] = c0[f0:last_idx + 1]

    rows = zip(first_occurrence[1:], pattern[1:])
    for pidx, (first, pchar) in enumerate(rows, start=1):
        row = pidx * width
        in_gap = False
        scores[row + first - f0 - 1] = 0
        for col in range(first, last_idx + 1):
            cell = row + col - f0
            s2 = scores[cell - 1] + (SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START)
            s1 = consecutive = 0

            if pchar == chars[col]:
                s1 = scores[cell - 1 - width] + SCORE_MATCH
                bonus = bonuses[col]
                consecutive = runs[cell - 1 - width] + 1
                if consecutive > 1:
                    first_bonus = bonuses[col - consecutive + 1]
                    # Break consecutive chunk
                    if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                        consecutive = 1
                    else:
                        bonus = max(bonus, BONUS_CONSECUTIVE, first_bonus)
                if s1 + bonus < s2:
                    s1 += bonuses[col]
                    consecutive = 0
                else:
                    s1 += bonus
            runs[cell] = consecutive

            in_gap = s1 < s2
            score = max(s1, s2, 0)
            if pidx == m - 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
            scores[cell] = score

    # Phase 4. Backtrace to find character positions
    positions: list[int] | None = None
    j = f0
    if with_pos:
        positions = []
        i = m - 1
        j = max_score_pos
        prefer_match = True
        while True:
            base = i * width
            j0 = j - f0
            score = scores[base + j0]
            diag = scores[base - width + j0 - 1] if i > 0 and j >= first_occurrence[i] else 0
            left = scores[base + j0 - 1] if j > first_occurrence[i] else 0

            if score > diag and (score > left or (score == left and prefer_match)):
                positions.append(j + min_idx)
                if i == 0:
                    break
                i -= 1
            below = base + width + j0 + 1
            prefer_match = runs[base + j0] > 1 or (below < len(runs) and runs[below] > 0)
            j -= 1

    # The start offset is only accurate when positions were computed.
    return MatchResult(min_idx + j, min_idx + max_score_pos + 1, max_score), positions