"""Opening the files a command's redirections name."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO

from minishell.command import Command
from minishell.tokens import TokenType

EXIT_FAILURE = 1
_FILE_MODE = 0o644


class RedirectionError(Exception):
    """Raised when a redirection cannot be set up."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.status = EXIT_FAILURE


@dataclass
class Streams:
    """The input and output a command uses; None means inherited."""

    stdin: IO[str] | None = None
    stdout: IO[str] | None = None

    def set_stdin(self, stream: IO[str]) -> None:
        """Use *stream* as input, closing the one it replaces."""
        if self.stdin is not None:
            self.stdin.close()
        self.stdin = stream

    def set_stdout(self, stream: IO[str]) -> None:
        """Use *stream* as output, closing the one it replaces."""
        if self.stdout is not None:
            self.stdout.close()
        self.stdout = stream

    def close(self) -> None:
        """Close every stream that was opened."""
        for stream in (self.stdin, self.stdout):
            if stream is not None:
                stream.close()

    def __enter__(self) -> Streams:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _open_output(filename: str, append: bool) -> IO[str]:
    flags = os.O_CREAT | os.O_WRONLY | (os.O_APPEND if append else os.O_TRUNC)
    try:
        fd = os.open(filename, flags, _FILE_MODE)
    except OSError as error:
        raise RedirectionError(
            f"Error opening file for output: {error.strerror}") from error
    return os.fdopen(fd, "w", encoding="utf-8")


def _open_input(filename: str) -> IO[str]:
    try:
        return open(filename, encoding="utf-8")
    except OSError as error:
        raise RedirectionError(
            f"Error opening file for input: {error.strerror}") from error


def _heredoc_stream(body: str) -> IO[str]:
    stream = tempfile.TemporaryFile("w+", encoding="utf-8")
    stream.write(body)
    stream.seek(0)
    return stream


def open_redirections(command: Command,
                      heredocs: Mapping[int, str] | None = None) -> Streams:
    """Open every redirection of *command* in order.

    A later redirection in the same direction replaces an earlier one,
    but every output file is still created or truncated. *heredocs* maps
    positions in ``command.redirects`` to here-document bodies. On failure
    whatever was opened is closed and RedirectionError is raised.
    """
    heredocs = heredocs or {}
    streams = Streams()
    try:
        for index, redirect in enumerate(command.redirects):
            kind = redirect.type
            if kind is TokenType.REDIRECT_OUT:
                streams.set_stdout(_open_output(redirect.filename, False))
            elif kind is TokenType.REDIRECT_APPEND:
                streams.set_stdout(_open_output(redirect.filename, True))
            elif kind is TokenType.REDIRECT_IN:
                streams.set_stdin(_open_input(redirect.filename))
            elif kind is TokenType.HEREDOC:
                streams.set_stdin(_heredoc_stream(heredocs.get(index, "")))
            else:
                raise ValueError(f"not a redirection: {kind.name}")
    except BaseException:
        streams.close()
        raise
    return streams


@contextmanager
def redirected(command: Command,
               heredocs: Mapping[int, str] | None = None) -> Iterator[Streams]:
    """Open *command*'s redirections for the duration of a block."""
    streams = open_redirections(command, heredocs)
    try:
        yield streams
    finally:
        streams.close()