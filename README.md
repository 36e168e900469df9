# mshell

`mshell` is the core of a small POSIX-style shell, written as a Python
library. Given a command tree built from `TreeNode` objects, it carries the
commands out. It provides:

- quote inspection and a check for unclosed quotes,
- expansion of `$NAME` and `$?`, with quote removal,
- `*` wildcards matched against the entries of a directory,
- input and output redirections (`<`, `>`, `>>`) and here-documents,
- pipes and `&&` / `||` lists,
- the builtins `echo`, `cd`, `pwd`, `export`, `unset`, `env` and `exit`.

Commands that are not builtins are looked up on the `PATH` held in the
shell's own environment and run as child processes. Pipes use `os.fork`,
so the package needs a POSIX system.

## Modules

| Module               | What it holds                                                          |
|----------------------|------------------------------------------------------------------------|
| `mshell.strutil`     | `atoi`, `itoa`, `split`, `split_unquote`                               |
| `mshell.tree`        | `NodeType`, `TreeNode`, `is_logic_root`, `is_word_root`, `is_special_root`, `is_only_asterisks` |
| `mshell.environment` | `Environment`, `EnvVar`, `ShellState`, `ShellError`, `export_arguments`|
| `mshell.quotes`      | `in_quotes`, `check_unclosed_quotes`, `check_special_chars`, `UnclosedQuoteError` and small predicates |
| `mshell.expand`      | `expand_dollar`, `expand_word`, `expand_words`, `match_pattern`, `list_directory`, `expand_asterisk` |
| `mshell.builtins`    | `is_builtin`, `run_builtin`, the `builtin_*` functions, `ShellExit`    |
| `mshell.redirect`    | `open_input`, `open_output`, `RedirectError`                           |
| `mshell.heredoc`     | `heredoc_filename`, `write_heredoc`, `create_heredoc`                  |
| `mshell.executor`    | `execute`, `evaluate`, `execute_and`, `execute_or`, `execute_pipe`, `execute_word`, `find_executable`, `run_command` |

## Examples

Lenient integer parsing skips leading blanks and stops at the first
non-digit; splitting drops empty fields:

```python
from mshell.strutil import atoi, itoa, split

atoi("  -42abc")      # -42
itoa(-7)              # "-7"
split("a  b c", " ")  # ["a", "b", "c"]
```

Expanding a word against the shell's variables:

```python
from mshell.environment import Environment, ShellState
from mshell.expand import expand_word

state = ShellState(Environment({"NAME": "world"}))
expand_word(state, "'$NAME' \"$NAME\"")   # "$NAME world"
```

Wildcards, with `*` standing for any run of characters:

```python
from mshell.expand import expand_asterisk, match_pattern

match_pattern("*.c", "main.c")                  # True
match_pattern("*.c", "main.h")                  # False
expand_asterisk("*.c", ["a.c", "b.h", "c.c"])   # "a.c c.c"
```

Running a command whose output goes to a file. The output redirections of
a word node hang off its `right` link, the input redirections off its `left`
link, each chained through `right`:

```python
import os
from mshell.environment import Environment, ShellState
from mshell.executor import execute
from mshell.tree import NodeType, TreeNode

state = ShellState(Environment(os.environ))
node = TreeNode(
    NodeType.WORD,
    value="echo",
    args=["echo", "hello"],
    right=TreeNode(NodeType.RED_OUT, value="out.txt"),
)
execute(state, node)   # 0; out.txt now holds "hello\n"
```

`TreeNode(NodeType.AND, left=..., right=...)`, `NodeType.OR` and
`NodeType.PIPE` combine commands the same way.

## Errors and exit status

Failures a shell reports and recovers from are raised as exceptions
derived from `ShellError`: `UnclosedQuoteError` from
`check_unclosed_quotes` (its `status` is 255), `RedirectError` from
`open_input`, and plain `ShellError` for an invalid `export` or `unset`
identifier or a failed `cd`. The builtins and the executor catch the ones
raised while a command runs, print `minishell: <message>` and set
`ShellState.exit_status`, which `$?` expands to. The `exit` builtin raises
`ShellExit`, carrying the requested status, for the caller to act on.

## What this package does not do

- It has no command-line parser: nothing turns a line of text into tokens
  or into a `TreeNode` tree. Callers build the tree themselves.
- It has no interactive prompt, read loop, history or signal handling, and
  no command to start a shell session.
- Here-document files are written by `create_heredoc` into the current
  directory and recorded in `ShellState.heredoc_files`; nothing in the
  package removes them.