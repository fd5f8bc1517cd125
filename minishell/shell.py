"""The interactive shell loop."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
import threading
from collections.abc import Callable, Iterator, Mapping

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.command import Command
from minishell.executor import execute_pipeline
from minishell.heredoc import HeredocInterrupted, collect_heredocs
from minishell.history import HISTORY_FILE, MAX_HISTORY, History
from minishell.parser import check_input, parse
from minishell.redirection import RedirectionError, redirected
from minishell.syntax import ParseError

try:
    import readline as _readline
except ImportError:
    _readline = None

try:
    import termios as _termios
except ImportError:
    _termios = None

PROMPT = "minishell> "

InputFunc = Callable[[str], "str | None"]


def _report(message: str) -> None:
    sys.stdout.flush()
    print(message, file=sys.stderr, flush=True)


def _remember(line: str) -> None:
    if _readline is not None:
        _readline.add_history(line)


@contextlib.contextmanager
def _terminal_setup() -> Iterator[None]:
    """Ignore SIGQUIT, let SIGINT interrupt, and hide echoed control keys."""
    saved_handlers = {}
    if threading.current_thread() is threading.main_thread():
        wanted = {signal.SIGINT: signal.default_int_handler}
        sigquit = getattr(signal, "SIGQUIT", None)
        if sigquit is not None:
            wanted[sigquit] = signal.SIG_IGN
        for signum, handler in wanted.items():
            saved_handlers[signum] = signal.signal(signum, handler)
    saved_attrs = None
    echoctl = getattr(_termios, "ECHOCTL", 0) if _termios is not None else 0
    if echoctl:
        try:
            if sys.stdin.isatty():
                fd = sys.stdin.fileno()
                saved_attrs = _termios.tcgetattr(fd)
                attrs = list(saved_attrs)
                attrs[3] &= ~echoctl
                _termios.tcsetattr(fd, _termios.TCSANOW, attrs)
        except (OSError, ValueError, AttributeError, _termios.error):
            saved_attrs = None
    try:
        yield
    finally:
        if saved_attrs is not None:
            try:
                _termios.tcsetattr(sys.stdin.fileno(), _termios.TCSANOW,
                                   saved_attrs)
            except (OSError, ValueError, _termios.error):
                pass
        for signum, handler in saved_handlers.items():
            signal.signal(signum, handler)


class Shell:
    """A shell session: its environment, history and last status."""

    def __init__(self, env: Mapping[str, str] | None = None,
                 history_path: str | os.PathLike[str] = HISTORY_FILE,
                 input_func: InputFunc | None = None) -> None:
        self.env: dict[str, str] = dict(
            env if env is not None else os.environ)
        self.history_path = history_path
        self.input_func: InputFunc = (
            input_func if input_func is not None else input)
        self.history = History(MAX_HISTORY)
        self.last_status = 0

    def _run_builtin_here(self, command: Command) -> int:
        """Run a lone builtin in the shell itself so it can change state."""
        try:
            heredocs = collect_heredocs(command, self.input_func)
        except HeredocInterrupted as error:
            return error.status
        try:
            with redirected(command, heredocs) as streams:
                out = streams.stdout if streams.stdout is not None \
                    else sys.stdout
                return run_builtin(command.argv, self.env, out)
        except RedirectionError as error:
            _report(str(error))
            return error.status

    def handle_line(self, line: str) -> int:
        """Record, parse and run one input line; return the last status.

        A syntax error leaves the status unchanged. ShellExit from ``exit``
        propagates.
        """
        if line:
            _remember(line)
            self.history.add(line)
        try:
            check_input(line)
        except ParseError as error:
            _report(str(error))
            return self.last_status
        try:
            commands = parse(line, self.last_status, self.env)
        except ParseError as error:
            _report(str(error))
            _report("Error: Failed to parse input.")
            return self.last_status
        if not commands:
            return self.last_status
        name = commands[0].name
        if name is not None and is_builtin(name) and len(commands) == 1:
            self.last_status = self._run_builtin_here(commands[0])
        else:
            self.last_status = execute_pipeline(commands, self.env,
                                                self.input_func)
        return self.last_status

    def run(self) -> int:
        """Read and run lines until end of input; return the exit status.

        History is loaded first and saved when input ends; ``exit`` leaves
        at once with its status and does not save it.
        """
        for line in self.history.load(self.history_path):
            _remember(line)
        with _terminal_setup():
            while True:
                try:
                    line = self.input_func(PROMPT)
                except EOFError:
                    line = None
                except KeyboardInterrupt:
                    sys.stdout.write("\n")
                    sys.stdout.flush()
                    continue
                if line is None:
                    break
                if not line:
                    continue
                try:
                    self.handle_line(line)
                except ShellExit as error:
                    return error.status
                except KeyboardInterrupt:
                    sys.stdout.write("\n")
                    sys.stdout.flush()
        try:
            self.history.save(self.history_path)
        except OSError as error:
            _report(f"open: {error.strerror}")
        if _readline is not None and hasattr(_readline, "clear_history"):
            _readline.clear_history()
        return 0


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell; arguments are ignored."""
    return Shell(os.environ).run()


if __name__ == "__main__":
    sys.exit(main())