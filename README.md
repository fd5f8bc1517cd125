# minishell

A small interactive command shell. It reads command lines, splits them
into words and operators, expands variables, and runs pipelines of
external programs and builtins.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
minishell
```

The prompt is `minishell> `. Leave the shell with `exit` or end-of-file
(Ctrl-D). Ctrl-C abandons the current line, or is passed on to the
program that is running. Ctrl-\ is ignored.

## What it understands

- **Words and quoting.** Words are split on spaces, tabs and newlines.
  Single quotes keep their contents literal. Double quotes keep their
  contents together and still expand variables inside them. The quote
  characters themselves are removed. A line with an unclosed quote is a
  syntax error.
- **Variables.** `$NAME` is replaced by the value of the variable, or by
  nothing when it is not set. `$?` is the status of the last command.
  Expanded text never turns into an operator.
- **Pipes.** `cmd1 | cmd2 | cmd3` connects each command's output to the
  next command's input.
- **Redirections.** `< file` reads input from a file. `> file` writes
  output to a file and truncates it first. `>> file` appends to a file.
  `<< WORD` reads a here-document (prompt `> `) up to a line that is
  exactly `WORD`. When several redirections point the same way, the last
  one wins, but every output file is still created.
- **Syntax errors.** `||`, `<<<` and `>>>` outside quotes, two pipes in a
  row, two of `<`, `>`, `>>` in a row, and a line ending in `|`, `<`, `>`
  or `>>` are rejected with `syntax error`; the last status is kept.

## Builtins

| Command            | Effect                                                         |
|--------------------|----------------------------------------------------------------|
| `echo [-n] args`   | Print the arguments; `-n` (repeatable) drops the newline       |
| `cd [dir]`         | Change directory; no argument or `~` means `$HOME`             |
| `pwd`              | Print the working directory                                    |
| `env`              | Print the environment as `NAME=value` (status 1)               |
| `export NAME=VAL`  | Set a variable; with no argument, list as `declare -x`         |
| `unset NAME`       | Remove a variable                                              |
| `exit [n]`         | Leave the shell with status `n` modulo 256 (default 0)         |

`export` and `unset` use only their first argument. `exit` with a
non-numeric argument leaves with 255; with more than one argument, with 1.

A builtin that is the only command on a line runs inside the shell, so
`cd`, `export` and `unset` change the shell's own state. Inside a
pipeline it runs on its own and leaves the shell unchanged.

## Exit statuses

A command that cannot be found gives 127. A command that is found but
cannot be run gives 126. A failed redirection gives 1. An interrupted
here-document gives 130. A program killed by signal N gives 128 + N.

## History

Lines are remembered, up to the last 100. They are loaded from
`.minishell_history` in the current directory at start-up and written
back there when input ends. Leaving with `exit` does not save them.

## Using it from Python

```python
from minishell.parser import parse
from minishell.shell import Shell

commands = parse("cat < in.txt | grep x > out.txt", 0, {})
for command in commands:
    print(command.argv, [(r.type.name, r.filename) for r in command.redirects])

shell = Shell(env={"PATH": "/usr/bin:/bin"})
status = shell.handle_line("echo hello")
```

`parse` raises `minishell.syntax.ParseError` on invalid syntax, and
`Shell.handle_line` lets `minishell.builtins.ShellExit` through when the
line runs `exit`. `minishell.executor.execute_pipeline` runs a list of
commands directly.

## What it does not do

There is no `&&`, `;`, subshells, globbing, job control, background
jobs, or redirection of file descriptors other than input and output.
Variable assignment works only through `export`.