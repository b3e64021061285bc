"""A single line of input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fzcore.ansi import AnsiOffset, extract_color


@dataclass
class Item:
    """One input line.

    ``text`` is what is matched against (escape sequences already removed),
    ``orig_text`` the line as it was read when it differs from ``text``, and
    ``colors`` the coloured ranges of ``text``.
    """

    text: str
    index: int = 0
    orig_text: Optional[str] = None
    colors: Optional[list[AnsiOffset]] = None

    def as_string(self, strip_ansi: bool) -> str:
        """Return the original line, optionally without escape sequences."""
        if self.orig_text is not None:
            if strip_ansi:
                trimmed, _, _ = extract_color(self.orig_text, None, None)
                return trimmed
            return self.orig_text
        return self.text