"""Turning an input line into commands."""

from __future__ import annotations

from collections.abc import Mapping

from minishell.command import Command, build_commands
from minishell.expansion import expand, remove_quotes
from minishell.syntax import (
    ParseError,
    ends_with_operator,
    has_consecutive_pipes,
    has_consecutive_redirects,
    has_unclosed_quote,
    has_unexpected_operator,
)
from minishell.tokens import Token, TokenType, tokenize


def check_input(text: str) -> None:
    """Raise ParseError for unclosed quotes or unsupported operators."""
    if has_unclosed_quote(text) or has_unexpected_operator(text):
        raise ParseError()


def parse(text: str, last_status: int = 0,
          env: Mapping[str, str] | None = None) -> list[Command]:
    """Tokenize, expand and unquote *text*, check it and build commands.

    Token types are fixed before expansion, so an expanded value never
    becomes an operator. Raises ParseError on invalid syntax.
    """
    tokens = []
    for token in tokenize(text):
        content = expand(token.content, last_status, env)
        if token.type is TokenType.COMMAND:
            content = remove_quotes(content)
        tokens.append(Token(content, token.type))
    if (ends_with_operator(tokens) or has_consecutive_pipes(tokens)
            or has_consecutive_redirects(tokens)):
        raise ParseError()
    return build_commands(tokens)