import io
import time

from wbless.command import (
    CommandResult,
    close_command,
    exec_command,
    exec_no_read,
    fork_exec,
    open_command,
    read_output,
    reap_children,
)


def test_exec_captures_output():
    assert exec_command("echo hello") == CommandResult(0, "hello")


def test_exec_reports_exit_code():
    result = exec_command("echo out; exit 3")
    assert result.exit_code == 3
    assert result.out == "out"


def test_only_last_newline_is_removed():
    assert exec_command("printf 'a\\n\\n'").out == "a\n"


def test_output_name_is_exported():
    result = exec_command('printf %s "$WAYBAR_OUTPUT_NAME"', "DP-1")
    assert result.out == "DP-1"


def test_empty_command():
    assert exec_command("") == CommandResult(-1, "")
    assert exec_no_read("") == CommandResult(-1, "")
    assert open_command("") is None
    assert fork_exec("") == -1


def test_exec_no_read():
    assert exec_no_read("exit 2") == CommandResult(2, "")


def test_read_output_strips_single_newline():
    assert read_output(io.StringIO("a\nb\n")) == "a\nb"
    assert read_output(io.StringIO("")) == ""


def test_open_and_close():
    process = open_command("echo x")
    assert read_output(process.stdout) == "x"
    assert close_command(process) == 0


def test_fork_exec_is_reaped():
    pid = fork_exec("true")
    assert pid > 0
    reaped: list[int] = []
    deadline = time.monotonic() + 5
    while pid not in reaped and time.monotonic() < deadline:
        reaped.extend(reap_children())
        time.sleep(0.01)
    assert pid in reaped
    assert pid not in reap_children()