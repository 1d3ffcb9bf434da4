# pipechain

`pipechain` connects a series of commands with pipes, the way a shell does for
`< infile cmd1 | cmd2 | ... > outfile`, without going through a shell.

## Usage

Read from a file, run each command in turn, and write the last command's
output to a file. The output file is created if needed and truncated.

    pipechain infile "grep -i error" "sort" "uniq -c" outfile

This does the same as:

    < infile grep -i error | sort | uniq -c > outfile

### Here-documents

If the first argument starts with `here_doc`, the next argument is a limiter.
Lines are read from standard input until one that begins with the limiter (or
until end of input), and those lines are fed to the first command. In this
mode the output file is appended to, not truncated.

    pipechain here_doc EOF "cat" "wc -l" outfile

This does the same as:

    cat << EOF | wc -l >> outfile

The lines are staged in a file named `here_doc` in the current directory. Any
existing file of that name is replaced, and the file is removed when the
pipeline finishes.

### Arguments

At least four arguments are required: an input (a file name, or `here_doc`
followed by a limiter), one or more commands, and an output file. With fewer
arguments a usage message is printed on standard error and the exit status
is 1. The exit status is also 1 when `PATH` is not set.

### Command words

Each command is split into words at whitespace. Text in single or double
quotes forms one word with the quotes removed, so `"awk '{print $1}'"` runs
`awk` with the single argument `{print $1}`. A quoted section is always a word
of its own: `a'b'` gives the two words `a` and `b`. A quote with no closing
partner is reported and that command is not run.

Commands are looked up in the directories listed in `PATH`. A name that is
itself an executable file, such as `./tool` or `/bin/ls`, is run directly.

### Errors and exit status

A missing input file, an output file that cannot be opened, an empty command,
or a command that cannot be found is reported on standard error, and the rest
of the pipeline still runs: a missing input is replaced by empty input, an
unopenable output by `/dev/null`, and the command after a failed one sees
empty input. Once the arguments have been accepted the exit status is 0,
whatever the commands themselves return.

## Using it from Python

`pipechain.cli.main` takes an argument list, or no argument to use
`sys.argv`, and returns the exit status:

```python
from pipechain.cli import main

status = main(["input.txt", "sort", "uniq", "output.txt"])
```

`pipechain.cli.run(argv, env=None, stdin=None, strict=False)` does the same
with an explicit environment and here-document source. With `strict=True`,
commands are split on single spaces only (no quoting), looked up through
`PATH` alone, and the run stops with status 2 when the input (or here-doc
file) cannot be opened and 3 when the output file cannot.

The building blocks are usable on their own:

- `pipechain.pipeline.run_pipeline(commands, stdin, stdout, ...)` runs a list
  of command strings joined by pipes and returns their exit statuses (1 for a
  command that could not be started).
- `pipechain.words.split_command(text)` splits a command string as described
  above and raises `UnclosedQuoteError` for an unterminated quote.
- `pipechain.paths.resolve_command(dirs, name)` finds an executable in a list
  of directories; `search_dirs(env)` gives the directories from `PATH`.
- `pipechain.heredoc.read_doc(limiter, source, sink)` copies lines up to a
  limiter line.
- `pipechain.lines.LineReader` returns one line at a time from a stream
  without reading past it; `LineReaderPool` keeps one reader per stream.

## What it does not do

Commands are not run through a shell. There is no variable expansion,
globbing, escaping with backslashes, redirection or `|` inside a command
string; each argument on the command line is exactly one command.