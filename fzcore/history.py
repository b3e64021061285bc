"""Query history kept in a file."""

from __future__ import annotations

import os


class HistoryError(Exception):
    """The history file cannot be read or written."""


def _write(path: str, content: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(content)


class History:
    """History entries with a cursor; the last entry is the line being edited."""

    def __init__(self, path: str, max_size: int) -> None:
        self.path = path
        self.max_size = max_size
        try:
            try:
                with open(path, encoding="utf-8") as handle:
                    data = handle.read()
            except FileNotFoundError:
                data = ""
                _write(path, data)
        except PermissionError as exc:
            raise HistoryError(f"permission denied: {path}") from exc
        except OSError as exc:
            raise HistoryError(f"invalid history file: {exc}") from exc

        lines = data.strip("\n").split("\n")
        if lines[-1]:
            lines.append("")
        self.lines: list[str] = lines
        self._modified: dict[int, str] = {}
        self.cursor = len(lines) - 1

    def append(self, line: str) -> None:
        """Add ``line`` to the history and save it; empty lines are ignored."""
        if not line:
            return
        lines = self.lines[:-1] + [line]
        if len(lines) > self.max_size:
            lines = lines[len(lines) - self.max_size:]
        self.lines = lines + [""]
        try:
            _write(self.path, "\n".join(self.lines))
        except OSError as exc:
            raise HistoryError(f"invalid history file: {exc}") from exc

    def override(self, text: str) -> None:
        """Replace the entry under the cursor in memory only."""
        last = len(self.lines) - 1
        if self.cursor == last:
            self.lines[self.cursor] = text
        elif self.cursor < last:
            self._modified[self.cursor] = text

    def current(self) -> str:
        """The entry under the cursor."""
        return self._modified.get(self.cursor, self.lines[self.cursor])

    def previous(self) -> str:
        """Move to the older entry and return it."""
        if self.cursor > 0:
            self.cursor -= 1
        return self.current()

    def next(self) -> str:
        """Move to the newer entry and return it."""
        if self.cursor < len(self.lines) - 1:
            self.cursor += 1
        return self.current()