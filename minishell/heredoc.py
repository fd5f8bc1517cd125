"""Reading here-document bodies from the user."""

from __future__ import annotations

from collections.abc import Callable

from minishell.command import Command
from minishell.tokens import TokenType

HEREDOC_PROMPT = "> "
INTERRUPTED_STATUS = 130

InputFunc = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """Raised when reading a here-document is interrupted."""

    def __init__(self) -> None:
        super().__init__("here-document interrupted")
        self.status = INTERRUPTED_STATUS


def read_heredoc(delimiter: str, input_func: InputFunc | None = None) -> str:
    """Read lines until one equals *delimiter* or input ends.

    Each line kept is followed by a newline. *input_func* is called with
    the prompt and signals end of input by raising EOFError or returning
    None. An interrupt raises HeredocInterrupted.
    """
    if input_func is None:
        input_func = input
    lines: list[str] = []
    while True:
        try:
            line = input_func(HEREDOC_PROMPT)
        except EOFError:
            break
        except KeyboardInterrupt as error:
            raise HeredocInterrupted() from error
        if line is None or line == delimiter:
            break
        lines.append(f"{line}\n")
    return "".join(lines)


def collect_heredocs(command: Command,
                     input_func: InputFunc | None = None) -> dict[int, str]:
    """Read the body of every here-document of *command*, in order.

    The result maps the position of each heredoc in ``command.redirects``
    to its body.
    """
    return {
        index: read_heredoc(redirect.filename, input_func)
        for index, redirect in enumerate(command.redirects)
        if redirect.type is TokenType.HEREDOC
    }