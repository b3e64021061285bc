"""Temporary files holding lines of text."""

from __future__ import annotations

import contextlib
import os
import tempfile
from typing import Iterable, Optional


def write_temporary_file(data: Iterable[str], print_sep: str) -> Optional[str]:
    """Write ``data`` joined and terminated by ``print_sep`` to a new file.

    Returns the path of the file, or None if it cannot be created.
    """
    try:
        fd, path = tempfile.mkstemp(prefix="fzcore-temp-")
    except OSError:
        return None
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
        handle.write(print_sep.join(data))
        handle.write(print_sep)
    return path


def remove_files(files: Iterable[str]) -> None:
    """Delete the given files, ignoring those that cannot be removed."""
    for filename in files:
        with contextlib.suppress(OSError):
            os.remove(filename)