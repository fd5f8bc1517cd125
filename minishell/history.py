"""A bounded command history kept in memory and in a file."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterator

HISTORY_FILE = ".minishell_history"
MAX_HISTORY = 100


class History:
    """The most recent input lines, oldest first, up to *max_size*."""

    def __init__(self, max_size: int = MAX_HISTORY) -> None:
        if max_size < 1:
            raise ValueError("history size must be at least 1")
        self.max_size = max_size
        self._entries: deque[str] = deque(maxlen=max_size)

    def add(self, line: str) -> None:
        """Append *line*, dropping the oldest entry when full."""
        self._entries.append(line)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write every entry to *path*, one per line, replacing the file."""
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in self._entries)

    def load(self, path: str | os.PathLike[str]) -> list[str]:
        """Add the non-empty lines of *path* and return them.

        A file that cannot be read is ignored.
        """
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                text = handle.read()
        except OSError:
            return []
        lines = [line for line in text.split("\n") if line]
        for line in lines:
            self.add(line)
        return lines

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)