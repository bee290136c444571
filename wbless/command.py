"""Running shell commands and collecting their output."""

import logging
import os
import subprocess
import threading
from dataclasses import dataclass
from typing import IO

log = logging.getLogger(__name__)

_SHELL = "/bin/sh"
_reap_lock = threading.Lock()
_reap: list[subprocess.Popen] = []


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured standard output of a command."""

    exit_code: int
    out: str


def open_command(cmd: str, output_name: str = "") -> subprocess.Popen | None:
    """Start ``cmd`` through the shell with its stdout piped.

    ``output_name``, when given, is exported as WAYBAR_OUTPUT_NAME.
    Returns None for an empty command or when the process cannot start.
    """
    if cmd == "":
        return None
    env = None
    if output_name != "":
        env = {**os.environ, "WAYBAR_OUTPUT_NAME": output_name}
    try:
        return subprocess.Popen(
            [_SHELL, "-c", cmd],
            stdout=subprocess.PIPE,
            env=env,
            text=True,
            start_new_session=True,
        )
    except OSError as exc:
        log.error("Unable to exec cmd %s, error %s", cmd, exc)
        return None


def read_output(stream: IO[str]) -> str:
    """Read a stream to its end, dropping one final newline."""
    output = stream.read()
    return output[:-1] if output.endswith("\n") else output


def close_command(process: subprocess.Popen) -> int:
    """Close the pipe, wait for the process and return its return code."""
    if process.stdout is not None:
        process.stdout.close()
    code = process.wait()
    if code < 0:
        log.debug("Cmd killed by %s", -code)
    else:
        log.debug("Cmd exited with code %s", code)
    return code


def _exit_status(code: int) -> int:
    return code if code >= 0 else 0


def exec_command(cmd: str, output_name: str = "") -> CommandResult:
    """Run ``cmd`` and return its exit code and output; -1 if it could not start."""
    process = open_command(cmd, output_name)
    if process is None:
        return CommandResult(-1, "")
    output = read_output(process.stdout)
    return CommandResult(_exit_status(close_command(process)), output)


def exec_no_read(cmd: str) -> CommandResult:
    """Run ``cmd`` without reading its output."""
    process = open_command(cmd, "")
    if process is None:
        return CommandResult(-1, "")
    return CommandResult(_exit_status(close_command(process)), "")


def fork_exec(cmd: str) -> int:
    """Start ``cmd`` in the background and return its pid, or -1."""
    if cmd == "":
        return -1
    try:
        process = subprocess.Popen([_SHELL, "-c", cmd], start_new_session=True)
    except OSError as exc:
        log.error("Unable to exec cmd %s, error %s", cmd, exc)
        return -1
    with _reap_lock:
        _reap.append(process)
    log.debug("Added child to reap list: %s", process.pid)
    return process.pid


def reap_children() -> list[int]:
    """Collect finished background children and return their pids."""
    with _reap_lock:
        finished = [p for p in _reap if p.poll() is not None]
        for process in finished:
            _reap.remove(process)
    return [p.pid for p in finished]