"""A small interactive command shell with pipes, redirections, here-documents and builtins."""

__version__ = "0.1.0"
__all__ = [
    "tokens",
    "expansion",
    "syntax",
    "command",
    "parser",
    "history",
    "builtins",
    "pathsearch",
    "heredoc",
    "redirection",
    "executor",
    "shell",
]