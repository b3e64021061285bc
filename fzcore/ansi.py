"""Parsing of ANSI escape sequences and the colour state they describe."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import IntFlag
from typing import Callable, Optional

# Offsets returned by the functions in this module count characters
# (code points), not bytes.


class Attr(IntFlag):
    """Text attributes that an SGR sequence can switch on or off."""

    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINE = 8
    BLINK = 16
    REVERSE = 32
    STRIKE_THROUGH = 64
    BOLD_FORCE = 128


@dataclass(frozen=True)
class Url:
    """Target and parameters of an OSC 8 hyperlink."""

    uri: str
    params: str


@dataclass(frozen=True)
class AnsiState:
    """Colours and attributes in effect at some point of a string.

    Colours are -1 for the terminal default, 0-255 for palette entries and
    ``(1 << 24) | rgb`` for true colour.
    """

    fg: int = -1
    bg: int = -1
    attr: Attr = Attr(0)
    lbg: int = -1
    url: Optional[Url] = None

    def colored(self) -> bool:
        """Whether this state differs from the terminal default."""
        return (
            self.fg != -1
            or self.bg != -1
            or self.attr > 0
            or self.lbg >= 0
            or self.url is not None
        )

    def to_string(self) -> str:
        """Render the state as the escape sequence that produces it."""
        if not self.colored():
            return ""

        ret = ""
        if self.attr & (Attr.BOLD | Attr.BOLD_FORCE):
            ret += "1;"
        for flag, code in (
            (Attr.DIM, "2;"),
            (Attr.ITALIC, "3;"),
            (Attr.UNDERLINE, "4;"),
            (Attr.BLINK, "5;"),
            (Attr.REVERSE, "7;"),
            (Attr.STRIKE_THROUGH, "9;"),
        ):
            if self.attr & flag:
                ret += code
        ret += _color_code(self.fg, 30) + _color_code(self.bg, 40)
        if ret.endswith(";"):
            ret = ret[:-1]
        ret = "\x1b[" + ret + "m"
        if self.url is not None:
            ret = f"\x1b]8;{self.url.params};{self.url.uri}\x1b\\{ret}\x1b]8;;\x1b"
        return ret


@dataclass
class AnsiOffset:
    """A character range ``[start, end)`` drawn with ``color``."""

    start: int
    end: int
    color: AnsiState


Processor = Callable[[str, Optional[AnsiState]], bool]


def _color_code(color: int, offset: int) -> str:
    if color == -1:
        ret = str(offset + 9)
    elif color < 8:
        ret = str(offset + color)
    elif color < 16:
        ret = str(offset - 30 + 90 + color - 8)
    elif color < 256:
        ret = f"{offset + 8};5;{color}"
    elif color >= 1 << 24:
        red = (color >> 16) & 0xFF
        green = (color >> 8) & 0xFF
        blue = color & 0xFF
        ret = f"{offset + 8};2;{red};{green};{blue}"
    else:
        ret = ""
    return ret + ";"


def _same_state(state: AnsiState, other: Optional[AnsiState]) -> bool:
    if other is None:
        return not state.colored()
    return (
        state.fg == other.fg
        and state.bg == other.bg
        and state.attr == other.attr
        and state.lbg == other.lbg
        and state.url is other.url
    )


def _is_print(char: str) -> bool:
    return " " <= char <= "~"


_TRIGGER = re.compile("[\x0e\x0f\x1b\x08]")
_CONTROL_START = "\\[()"
_CONTROL_BODY = frozenset("0123456789;:?")


def _match_control_sequence(s: str, start: int) -> int:
    # ESC [\[()] [0-9;:?]* [a-zA-Z@], starting after the two-character prefix
    for idx in range(start + 2, len(s)):
        char = s[idx]
        if char in _CONTROL_BODY:
            continue
        if "a" <= char <= "z" or "A" <= char <= "Z" or char == "@":
            return idx + 1
        return -1
    return -1


def _match_operating_system_command(s: str, base: int, start: int) -> int:
    # ESC ] [0-9]+ [;:] [[:print:]]+ (ESC \ | BEL), starting after the first
    # printable character of the body
    n = len(s)
    idx = start
    while idx < n and _is_print(s[idx]):
        idx += 1
    if idx < n:
        if s[idx] == "\x07":
            return idx + 1
        if s[idx] == "\x1b" and idx < n - 1 and s[idx + 1] == "\\":
            return idx + 2
    if idx < n and s[base:idx + 1] == "\x1b]8;;\x1b":
        return idx + 1
    return -1


def _find_escape(s: str, pos: int) -> tuple[int, int]:
    first = _TRIGGER.search(s, pos)
    if first is None:
        return -1, -1

    n = len(s)
    for idx in range(first.start(), n):
        char = s[idx]
        if char == "\x08":
            # any character followed by a backspace
            if idx > pos and s[idx - 1] != "\n":
                return idx - 1, idx + 1
        elif char == "\x1b":
            if idx + 2 < n and s[idx + 1] in _CONTROL_START:
                end = _match_control_sequence(s, idx)
                if end != -1:
                    return idx, end

            if idx + 5 < n and s[idx + 1] == "]":
                j = idx + 2
                while j < n and "0" <= s[j] <= "9":
                    j += 1
                if (
                    j > idx + 2
                    and j + 1 < n
                    and s[j] in ";:"
                    and _is_print(s[j + 1])
                ):
                    end = _match_operating_system_command(s, idx, j + 2)
                    if end != -1:
                        return idx, end

            if idx + 1 < n and s[idx + 1] != "\n":
                return idx, idx + 2
        elif char in "\x0e\x0f":
            return idx, idx + 1
    return -1, -1


def next_ansi_escape_sequence(s: str) -> tuple[int, int]:
    """Return ``(start, end)`` of the first escape sequence in ``s``, or ``(-1, -1)``."""
    return _find_escape(s, 0)


def parse_ansi_code(s: str) -> tuple[int, str]:
    """Split off the first numeric parameter of an SGR body.

    Returns the number (-1 if empty or not a non-negative integer) and the
    rest of the body after the separator.
    """
    sep = s.find(";")
    if sep < 0:
        sep = s.find(":")
    remaining = ""
    if sep >= 0:
        remaining = s[sep + 1:]
        s = s[:sep]

    if not s:
        return -1, remaining
    code = 0
    for char in s:
        if not "0" <= char <= "9":
            return -1, remaining
        code = code * 10 + ord(char) - ord("0")
    return code, remaining


_ATTR_ON = {
    1: Attr.BOLD,
    2: Attr.DIM,
    3: Attr.ITALIC,
    4: Attr.UNDERLINE,
    5: Attr.BLINK,
    7: Attr.REVERSE,
    9: Attr.STRIKE_THROUGH,
}

_ATTR_OFF = {
    22: Attr.BOLD | Attr.DIM,
    23: Attr.ITALIC,
    24: Attr.UNDERLINE,
    25: Attr.BLINK,
    27: Attr.REVERSE,
    29: Attr.STRIKE_THROUGH,
}


def _interpret_other(ansi_code: str, state: AnsiState, prev_state: Optional[AnsiState]) -> AnsiState:
    if prev_state is not None and ansi_code.endswith("0K"):
        return replace(state, lbg=prev_state.bg)
    if ansi_code.startswith("\x1b]8;") and (
        ansi_code.endswith("\x1b\\") or ansi_code.endswith("\a")
    ):
        terminator = 1 if ansi_code.endswith("\a") else 2
        if len(ansi_code) == 5 + terminator and ansi_code[4] == ";":
            return replace(state, url=None)
        params_end = ansi_code[4:].find(";")
        if params_end >= 0:
            params = ansi_code[4:4 + params_end]
            uri = ansi_code[5 + params_end:len(ansi_code) - terminator]
            return replace(state, url=Url(uri=uri, params=params))
    return state


def interpret_code(ansi_code: str, prev_state: Optional[AnsiState]) -> AnsiState:
    """Apply one escape sequence to ``prev_state`` and return the new state."""
    state = prev_state if prev_state is not None else AnsiState()
    if not (ansi_code.startswith("\x1b[") and ansi_code.endswith("m")):
        return _interpret_other(ansi_code, state, prev_state)

    if len(ansi_code) <= 3:
        return replace(state, fg=-1, bg=-1, attr=Attr(0))

    body = ansi_code[2:-1]
    colors = {"fg": state.fg, "bg": state.bg}
    attr = state.attr
    target = "fg"
    state256 = 0
    count = 0

    while body:
        num, body = parse_ansi_code(body)
        if num == -1:
            continue
        count += 1
        if state256 == 0:
            if num == 38:
                target = "fg"
                state256 = 1
            elif num == 48:
                target = "bg"
                state256 = 1
            elif num == 39:
                colors["fg"] = -1
            elif num == 49:
                colors["bg"] = -1
            elif num in _ATTR_ON:
                attr |= _ATTR_ON[num]
            elif num in _ATTR_OFF:
                attr &= ~_ATTR_OFF[num]
            elif num == 0:
                colors["fg"] = colors["bg"] = -1
                attr = Attr(0)
            elif 30 <= num <= 37:
                colors["fg"] = num - 30
            elif 40 <= num <= 47:
                colors["bg"] = num - 40
            elif 90 <= num <= 97:
                colors["fg"] = num - 90 + 8
            elif 100 <= num <= 107:
                colors["bg"] = num - 100 + 8
        elif state256 == 1:
            if num == 2:
                state256 = 10
            elif num == 5:
                state256 = 2
            else:
                state256 = 0
        elif state256 == 2:
            colors[target] = num
            state256 = 0
        elif state256 == 10:
            colors[target] = (1 << 24) | (num << 16)
            state256 = 11
        elif state256 == 11:
            colors[target] |= num << 8
            state256 = 12
        elif state256 == 12:
            colors[target] |= num
            state256 = 0

    if count == 0:
        colors["fg"] = colors["bg"] = -1
        attr = Attr(0)
    if state256 > 0:
        colors[target] = -1
    return replace(state, fg=colors["fg"], bg=colors["bg"], attr=Attr(attr))


def extract_color(
    text: str,
    state: Optional[AnsiState],
    proc: Optional[Processor] = None,
) -> tuple[str, Optional[list[AnsiOffset]], Optional[AnsiState]]:
    """Strip escape sequences from ``text`` and record the coloured ranges.

    ``state`` is the colour state carried over from previous text. ``proc``,
    if given, is called with each plain segment and the state it is drawn
    with; returning False aborts and yields ``("", None, None)``.

    Returns the plain text, the coloured ranges (None when there are none)
    and the state in effect at the end of the text.
    """
    offsets: list[AnsiOffset] = []
    if state is not None:
        offsets.append(AnsiOffset(0, 0, state))

    output: list[str] = []
    prev_idx = 0
    char_count = 0
    idx = 0
    while idx < len(text):
        start, end = _find_escape(text, idx)
        if start == -1:
            break
        idx = end

        prev = text[prev_idx:start]
        if proc is not None and not proc(prev, state):
            return "", None, None
        prev_idx = idx

        if prev:
            char_count += len(prev)
            output.append(prev)

        new_state = interpret_code(text[start:idx], state)
        if not _same_state(new_state, state):
            if state is not None:
                offsets[-1].end = char_count
            if new_state.colored():
                state = new_state
                offsets.append(AnsiOffset(char_count, char_count, new_state))
            else:
                state = None

    if prev_idx == 0:
        rest = text
        trimmed = text
    else:
        rest = text[prev_idx:]
        output.append(rest)
        trimmed = "".join(output)
    if proc is not None:
        proc(rest, state)
    if offsets:
        if rest and state is not None:
            char_count += len(rest)
            offsets[-1].end = char_count
        return trimmed, offsets, state
    return trimmed, None, state