"""Grouping a token list into the commands of a pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from minishell.tokens import Token, TokenType


@dataclass
class Redirect:
    """A redirection attached to a command: an operator and its target."""

    filename: str
    type: TokenType


@dataclass
class Command:
    """One simple command: its argument words and its redirections in order."""

    argv: list[str] = field(default_factory=list)
    redirects: list[Redirect] = field(default_factory=list)

    @property
    def name(self) -> str | None:
        """The command word, or None when the command has no words."""
        return self.argv[0] if self.argv else None


def build_commands(tokens: Iterable[Token]) -> list[Command]:
    """Split *tokens* at pipes into commands.

    A word right after a redirection operator becomes that redirection's
    target; every other word is an argument. A new command starts with the
    first token after each pipe, so a leading pipe yields an empty command.
    """
    commands: list[Command] = []
    current = Command()
    start_new = True
    pending: TokenType | None = None
    for token in tokens:
        if start_new:
            current = Command()
            commands.append(current)
            start_new = False
            pending = None
        if token.type is TokenType.PIPE:
            start_new = True
        elif token.type is TokenType.COMMAND:
            if pending is None:
                current.argv.append(token.content)
            else:
                current.redirects.append(Redirect(token.content, pending))
                pending = None
        elif token.type.is_redirect:
            pending = token.type
    return commands