# minish

`minish` is the core of a small POSIX-style shell, written as a library. It
checks a command line, expands variables in its words, splits the words into a
pipeline of commands, reads here-documents and runs the pipeline as child
processes.

## A line, stage by stage

```python
import os

from minish.environment import Environment
from minish.executor import run_pipeline
from minish.expand import Token, expand_tokens, mark_single_quoted
from minish.heredoc import prepare_heredocs
from minish.parser import parse_commands
from minish.validate import strip_comment, validate_input

env = Environment(os.environ)
status = 0

line = validate_input(strip_comment("ls -l $HOME | wc -l"), env)
tokens = [Token(word) for word in line.split()]
mark_single_quoted(tokens)
expand_tokens(tokens, env, status)
commands = parse_commands(tokens, env)
prepare_heredocs(commands, env, status)
status = run_pipeline(commands, env, status)
```

### Validation – `minish.validate`

- `strip_comment(line)` cuts the line at its first unquoted `#`.
- `preprocess(line)` trims surrounding whitespace.
- `validate_input(line, env)` trims the line and returns it. It raises
  `ShellSyntaxError` in these cases:
  - a quote is left open;
  - an unquoted `(`, `)`, `[`, `]`, `{`, `}`, `&`, `;` or `\` appears;
  - a line is made only of operators, or ends in `|`;
  - a line starts with `|` or holds `||`;
  - a redirection is not followed by a target;
  - `$VAR` follows a redirection or a pipe and `VAR` names no known variable.

  The error's `status` is 2 and its `message` is the text to show.

### Quoting – `minish.quoting`

These functions look at quotes in a string:

- `is_quoted_at` tells whether a position lies inside quotes.
- `has_open_quote` and `unmatched_quote` report quotes that are left open.
- `contains_unquoted` tells whether a character occurs outside quotes.
- `is_fully_quoted` tells whether a string starts and ends with the same quote.
- `remove_quotes` strips the quoting characters.

### Expansion – `minish.expand`

`expand(text, env, last_status, pid)` replaces `$NAME`, `$?` and `$$`.
Unknown or empty variables expand to nothing. A `$` at the end, or before a
space or a double quote, is kept as it is. `pid` defaults to the current
process id.

`Token` holds one word and two flags:

- `mark_single_quoted` sets the flag of each token that starts and ends with
  a single quote.
- `expand_tokens` expands every token that contains `$`. It skips tokens that
  are flagged as single-quoted and tokens marked `prev_heredoc`. A token that
  expands to nothing gets `None` as its text. `in_single_quotes_at` tells
  whether a position lies inside single quotes.

### Parsing – `minish.parser`

`parse_commands(tokens, env)` takes `Token` objects or plain strings and
splits them at `|` tokens. It returns one `Command` per segment that is not
empty. Each `Command` has:

- `name`, `args` and `is_builtin`;
- `path`, resolved along `PATH` by `resolve_path`;
- a list of `Redirection` entries, each with a `RedirType`: `OUTPUT` (`>`),
  `APPEND` (`>>`), `INPUT` (`<`) or `HEREDOC` (`<<`).

Quotes are removed from words and from redirection targets. A command made
only of redirections has no name.

Other helpers in this module:

- `redirect_type` and `is_redirection_token` classify operators.
- `is_pipe_token` recognises a pipe.
- `invalid_pipe_sequence` spots two adjacent pipe tokens.
- `make_redirection` builds a `Redirection`.

### Here-documents – `minish.heredoc`

`prepare_heredocs(commands, env, last_status, reader, directory)` goes through
every `<<` of the pipeline. For each one it calls `reader()` for lines until a
line equals the delimiter. By default it reads from standard input with the
prompt `>`. The body is written to a fresh cache file and the redirection's
filename is replaced by that file's path. Variables in the body are expanded
unless the delimiter was quoted. At end of input it writes a warning to stderr.
A `KeyboardInterrupt` while reading removes the file and raises
`HeredocInterrupted` with status 130.

`read_heredoc` does the reading for a single redirection. `cache_file_name`
picks an unused `dts-<pid><random>.cache` name, and `random_file_name` builds
such a name.

### Redirection and execution

`minish.redirect.apply_redirections(command)` opens each redirection's file
and puts it in place of stdin or stdout. A here-document's cache file is
deleted once attached. If a file cannot be opened it raises
`RedirectionError`.

`minish.executor.run_pipeline(commands, env, last_status)` connects the
commands with pipes and runs each one in a forked child. It waits for all of
them and returns the status of the last one. A child killed by a signal
counts as 128 plus the signal number. If a command cannot be run, the child
reports it and exits with 127 (not found) or 126 (not executable).

A pipeline made of a single `export` or `exit` runs in the shell process
itself, so its effects persist. In that case `exit` raises `ShellExit`.

`heredoc_only_status(commands, last_status)` returns 0 in two cases: the
first command has no path and its first redirection is a here-document, or
there are no commands at all. Otherwise it returns `last_status`.

## Environment and built-ins

`minish.environment.Environment` keeps variables in declaration order. A
variable may be declared without a value. Its methods are:

- `get` returns a variable's value.
- `names` lists the variable names.
- `export` applies one `NAME` or `NAME=value` argument and raises
  `InvalidIdentifier` for a bad name.
- `declarations` gives the `declare -x` lines.
- `path_dirs` splits `PATH`.
- `to_mapping` gives the variables with values, for child processes.

`builtin_export(env, args, out, err)` is the `export` command.

`minish.builtin_exit.builtin_exit(args, last_status, err)` is the `exit`
command, and `exit_status` folds a number into 0–255. It raises `ShellExit`
with the status to leave with. It returns 1 without exiting when given
several arguments and the first one is numeric.

## Small helpers

`minish.textutil` holds the character and string tests used by the other
modules:

- `is_space` and `is_blank`
- `parse_long` and `is_numerical`
- `is_valid_identifier`
- `is_builtin`
- `is_redir_or_pipe`

## What it does not do

- There is no interactive prompt loop and no command to start a shell. The
  caller reads lines and drives the stages above.
- There is no tokenizer. The caller turns a validated line into `Token`
  objects, and operators such as `|`, `>` and `<<` must arrive as separate
  tokens.
- Only `export` and `exit` are carried out by the shell itself. `cd`, `pwd`,
  `env`, `unset` and `echo` are recognised by `is_builtin`, but
  `run_pipeline` runs them like any other command: it looks them up on
  `PATH` as external programs. So `cd` cannot change the shell's directory.
- No signal handlers are installed for an interactive prompt.

## Requirements

Python 3.10 or later on a POSIX system, since `fork` and `execve` are used.
There are no third-party runtime dependencies. The `test` extra adds pytest.