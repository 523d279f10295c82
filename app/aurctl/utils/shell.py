"""Shell execution utilities.

Runs external tools with a per-stream output policy while always capturing
stdout for the caller.
"""

import logging
import shutil
import subprocess
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import IO, cast

from aurctl.core.errors import CommandLaunchError, InvalidOutputEncodingError

logger = logging.getLogger(__name__)


class OutputPolicy(Enum):
    """What the user additionally sees of a command's output stream.

    Attributes:
        INHERIT: Output is shown live on the controlling terminal.
        DISCARD: Output is not shown (quiet mode).
    """

    INHERIT = "inherit"
    DISCARD = "discard"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Captured standard output, without its trailing newline.
        returncode: Exit code of the command.
    """

    stdout: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    cwd: str | None = None,
    stdout_policy: OutputPolicy = OutputPolicy.DISCARD,
    stderr_policy: OutputPolicy = OutputPolicy.INHERIT,
    timeout: float | None = None,
) -> CommandResult:
    """Execute a command and return its captured output and exit code.

    Stdout is captured regardless of ``stdout_policy``; with INHERIT it is
    also echoed line by line as it arrives. Stderr is never captured, only
    inherited or discarded.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command. If None, uses current directory.
        stdout_policy: Whether captured stdout is also shown live.
        stderr_policy: Whether stderr reaches the terminal.
        timeout: Maximum time in seconds to wait. None waits indefinitely.

    Returns:
        CommandResult with decoded stdout and returncode.

    Raises:
        CommandLaunchError: If the program cannot be spawned.
        InvalidOutputEncodingError: If stdout is not valid UTF-8.
        subprocess.TimeoutExpired: If command exceeds timeout.
    """
    stderr = None if stderr_policy is OutputPolicy.INHERIT else subprocess.DEVNULL

    logger.debug("Executing %s (cwd=%s)", " ".join(args), cwd)

    try:
        if stdout_policy is OutputPolicy.INHERIT:
            raw, returncode = _run_echoing(args, cwd=cwd, stderr=stderr, timeout=timeout)
        else:
            result = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=stderr,
                check=False,
                timeout=timeout,
                cwd=cwd,
            )
            raw, returncode = result.stdout, result.returncode
    except OSError as e:
        if not command_exists(args[0]):
            msg = f"{args[0]} is not installed or not on PATH"
        else:
            msg = f"Failed to execute {args[0]}: {e}"
        raise CommandLaunchError(msg) from e

    logger.debug("%s exited with code %d", args[0], returncode)

    return CommandResult(stdout=decode_output(raw, args[0]), returncode=returncode)


def _run_echoing(
    args: list[str],
    *,
    cwd: str | None,
    stderr: int | None,
    timeout: float | None,
) -> tuple[bytes, int]:
    """Run a command, copying each stdout line to the terminal as it is read.

    The timeout covers the whole run: a child still running when it expires
    is killed, which also ends the read loop.
    """
    chunks: list[bytes] = []
    expired = threading.Event()

    with subprocess.Popen(args, stdout=subprocess.PIPE, stderr=stderr, cwd=cwd) as proc:

        def _expire() -> None:
            expired.set()
            proc.kill()

        timer = threading.Timer(timeout, _expire) if timeout is not None else None
        if timer is not None:
            timer.start()
        try:
            stdout = cast(IO[bytes], proc.stdout)
            for line in iter(stdout.readline, b""):
                chunks.append(line)
                sys.stdout.write(line.decode("utf-8", errors="replace"))
                sys.stdout.flush()
            returncode = proc.wait()
        finally:
            if timer is not None:
                timer.cancel()

    if expired.is_set() and returncode < 0:
        raise subprocess.TimeoutExpired(args, cast(float, timeout), output=b"".join(chunks))
    return b"".join(chunks), returncode


def decode_output(raw: bytes, program: str = "command") -> str:
    """Decode captured output and drop a single trailing newline.

    Args:
        raw: Captured bytes.
        program: Program name for the error message.

    Returns:
        Decoded text.

    Raises:
        InvalidOutputEncodingError: If the bytes are not valid UTF-8.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"Output of {program} is not valid UTF-8"
        raise InvalidOutputEncodingError(msg) from e
    return text.removesuffix("\n")


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def send_output_to(quiet: bool) -> OutputPolicy:
    """Map the quiet flag to an output policy."""
    return OutputPolicy.DISCARD if quiet else OutputPolicy.INHERIT
