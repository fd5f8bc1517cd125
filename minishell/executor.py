"""Running a pipeline of commands."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import tempfile
from collections.abc import Callable, MutableMapping, Sequence
from typing import IO, Union

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.command import Command
from minishell.heredoc import HeredocInterrupted, collect_heredocs
from minishell.pathsearch import NO_PERMISSION, CommandNotFound, resolve_command
from minishell.redirection import RedirectionError, Streams, open_redirections

_SIGNAL_OFFSET = 128

InputFunc = Callable[[str], "str | None"]
_Result = Union[int, subprocess.Popen]


def _report(message: str) -> None:
    sys.stdout.flush()
    print(message, file=sys.stderr, flush=True)


def exit_status(returncode: int) -> int:
    """Shell status for a process return code; a signal N gives 128 + N."""
    if returncode < 0:
        return _SIGNAL_OFFSET - returncode
    return returncode


def _empty_input() -> IO[bytes]:
    """Input for the next stage when this one sends nothing down the pipe."""
    return open(os.devnull, "rb")


def _run_builtin_stage(command: Command, env: MutableMapping[str, str],
                       streams: Streams, is_last: bool
                       ) -> tuple[_Result, IO | None]:
    """Run a builtin as a pipeline stage, isolated from the shell's state."""
    child_env = dict(env)
    capture = None
    if streams.stdout is not None:
        out = streams.stdout
    elif is_last:
        out = sys.stdout
    else:
        capture = tempfile.TemporaryFile("w+", encoding="utf-8")
        out = capture
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = None
    try:
        status = run_builtin(command.argv, child_env, out)
    except ShellExit as error:
        status = error.status
    finally:
        if cwd is not None:
            try:
                os.chdir(cwd)
            except OSError:
                pass
    out.flush()
    if capture is not None:
        capture.seek(0)
        return status, capture
    return status, None if is_last else _empty_input()


def _spawn(command: Command, env: MutableMapping[str, str], streams: Streams,
           upstream: IO | None, is_last: bool) -> tuple[_Result, IO | None]:
    """Start an external program as a pipeline stage."""
    try:
        path = resolve_command(command.argv[0], env)
    except CommandNotFound as error:
        _report(error.message)
        return error.status, None if is_last else _empty_input()
    stdin = streams.stdin if streams.stdin is not None else upstream
    if streams.stdout is not None:
        stdout = streams.stdout
    else:
        stdout = None if is_last else subprocess.PIPE
    sys.stdout.flush()
    try:
        process = subprocess.Popen(command.argv, executable=path,
                                   stdin=stdin, stdout=stdout, env=dict(env))
    except OSError as error:
        _report(f"{command.argv[0]}: {error.strerror}")
        return NO_PERMISSION, None if is_last else _empty_input()
    if is_last:
        return process, None
    if process.stdout is not None:
        return process, process.stdout
    return process, _empty_input()


def _run_stage(command: Command, env: MutableMapping[str, str],
               input_func: InputFunc | None, upstream: IO | None,
               is_last: bool) -> tuple[_Result, IO | None]:
    """Prepare and start one command; return its result and its output."""
    nothing = None if is_last else _empty_input()
    try:
        heredocs = collect_heredocs(command, input_func)
    except HeredocInterrupted as error:
        return error.status, nothing
    try:
        streams = open_redirections(command, heredocs)
    except RedirectionError as error:
        _report(str(error))
        return error.status, nothing
    with streams:
        if command.name is None:
            return 0, nothing
        if nothing is not None:
            nothing.close()
        if is_builtin(command.name):
            return _run_builtin_stage(command, env, streams, is_last)
        return _spawn(command, env, streams, upstream, is_last)


def _wait(process: subprocess.Popen) -> int:
    """Wait for *process*, passing an interrupt on to it."""
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            process.send_signal(signal.SIGINT)


def execute_pipeline(commands: Sequence[Command],
                     env: MutableMapping[str, str] | None = None,
                     input_func: InputFunc | None = None) -> int:
    """Run *commands* connected by pipes and return the last one's status.

    Each stage behaves like a child process: builtins in it cannot change
    the shell's environment or working directory. Here-documents are read
    with *input_func* just before their command starts.
    """
    if env is None:
        env = dict(os.environ)
    results: list[_Result] = []
    upstream: IO | None = None
    last = len(commands) - 1
    try:
        for position, command in enumerate(commands):
            try:
                result, output = _run_stage(command, env, input_func,
                                            upstream, position == last)
            finally:
                if upstream is not None:
                    upstream.close()
                    upstream = None
            upstream = output
            results.append(result)
    finally:
        if upstream is not None:
            upstream.close()
    status = 0
    for result in results:
        if isinstance(result, subprocess.Popen):
            status = exit_status(_wait(result))
        else:
            status = result
    return status