import os

import pytest

from pipechain.paths import split_fields
from pipechain.pipeline import (
    CommandError,
    CommandNotFoundError,
    EmptyCommandError,
    prepare_command,
    run_pipeline,
)
from pipechain.words import UnclosedQuoteError

SYSTEM_PATH = os.environ.get("PATH", "/usr/bin:/bin")


def _script(directory, name, body):
    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(0o755)
    return path


def _run(tmp_path, commands, data=b"", **kwargs):
    source = tmp_path / "in.txt"
    target = tmp_path / "out.txt"
    source.write_bytes(data)
    kwargs.setdefault("env", {"PATH": SYSTEM_PATH})
    with source.open("rb") as stdin, target.open("wb") as stdout:
        codes = run_pipeline(commands, stdin, stdout, **kwargs)
    return codes, target.read_bytes()


def test_prepare_command_splits_quotes(tmp_path):
    tool = _script(tmp_path, "tool", "exit 0")
    path, argv = prepare_command("tool -x 'a b'", [str(tmp_path)])
    assert path == str(tool)
    assert argv == ["tool", "-x", "a b"]


def test_prepare_command_with_field_splitter(tmp_path):
    _script(tmp_path, "tool", "exit 0")
    _, argv = prepare_command(
        "tool 'a b'", [str(tmp_path)], lambda text: split_fields(text, " "), False
    )
    assert argv == ["tool", "'a", "b'"]


def test_prepare_command_empty():
    with pytest.raises(EmptyCommandError):
        prepare_command("   ", ["/bin"])


def test_prepare_command_not_found(tmp_path):
    with pytest.raises(CommandNotFoundError) as info:
        prepare_command("no-such-tool arg", [str(tmp_path)])
    assert info.value.name == "no-such-tool"
    assert isinstance(info.value, CommandError)


def test_prepare_command_unclosed_quote(tmp_path):
    with pytest.raises(UnclosedQuoteError):
        prepare_command("tool 'open", [str(tmp_path)])


def test_prepare_command_direct_path(tmp_path):
    script = _script(tmp_path, "direct", "exit 0")
    assert prepare_command(str(script), [])[0] == str(script)
    with pytest.raises(CommandNotFoundError):
        prepare_command(str(script), [], allow_direct=False)


def test_run_pipeline_chains_commands(tmp_path):
    codes, output = _run(tmp_path, ["cat", "tr a-z A-Z"], b"hello\n")
    assert codes == [0, 0]
    assert output == b"HELLO\n"


def test_run_pipeline_single_command_passes_data(tmp_path):
    data = b"line one\nline two\n"
    codes, output = _run(tmp_path, ["cat"], data)
    assert codes == [0]
    assert output == data


def test_run_pipeline_quoted_argument(tmp_path):
    _, output = _run(tmp_path, ["sh -c 'echo one two'"])
    assert output == b"one two\n"


def test_run_pipeline_missing_command_gives_empty_input(tmp_path):
    codes, output = _run(tmp_path, ["no-such-tool-here", "cat"], b"data\n")
    assert codes == [1, 0]
    assert output == b""


def test_run_pipeline_empty_command_status(tmp_path):
    codes, _ = _run(tmp_path, ["cat", ""], b"x\n")
    assert codes[-1] == 1


def test_run_pipeline_reports_exit_status(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    _script(bin_dir, "fail", "exit 7")
    codes, _ = _run(tmp_path, ["fail"], dirs=[str(bin_dir)])
    assert codes == [7]


def test_run_pipeline_passes_environment(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    _script(bin_dir, "greet", 'echo "$GREETING"')
    _, output = _run(
        tmp_path, ["greet"], env={"PATH": SYSTEM_PATH, "GREETING": "hello"},
        dirs=[str(bin_dir)],
    )
    assert output == b"hello\n"


def test_run_pipeline_no_commands(tmp_path):
    codes, output = _run(tmp_path, [], b"ignored\n")
    assert codes == []
    assert output == b""


def test_run_pipeline_without_path_raises():
    with pytest.raises(LookupError):
        run_pipeline(["cat"], env={"HOME": "/"})