"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from aurctl.core.errors import CommandLaunchError, InvalidOutputEncodingError
from aurctl.utils.shell import (
    CommandResult,
    OutputPolicy,
    command_exists,
    decode_output,
    run_command,
    send_output_to,
)


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """success is True only for exit code 0."""
        assert CommandResult(stdout="", returncode=0).success is True
        assert CommandResult(stdout="", returncode=128).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("aurctl.utils.shell.subprocess.run")
    def test_discard_captures_stdout(self, mock_run: MagicMock) -> None:
        """With DISCARD, stdout is captured through a pipe."""
        mock_run.return_value = MagicMock(stdout=b"12.3.5\n", returncode=0)

        result = run_command(["grep", "-oP", "(?<=pkgver=).*", "PKGBUILD"], cwd="/tmp")

        assert result == CommandResult(stdout="12.3.5", returncode=0)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdout"] == subprocess.PIPE
        assert kwargs["stderr"] is None
        assert kwargs["cwd"] == "/tmp"
        assert kwargs["check"] is False

    @patch("aurctl.utils.shell.subprocess.run")
    def test_stderr_discard(self, mock_run: MagicMock) -> None:
        """With stderr DISCARD, stderr goes to /dev/null."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        run_command(["git", "clone"], stderr_policy=OutputPolicy.DISCARD)

        assert mock_run.call_args.kwargs["stderr"] == subprocess.DEVNULL

    @patch("aurctl.utils.shell.subprocess.run")
    def test_nonzero_exit_is_returned(self, mock_run: MagicMock) -> None:
        """Failing commands do not raise; the caller interprets the code."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=6)

        assert run_command(["curl"]).returncode == 6

    @patch("aurctl.utils.shell.subprocess.run")
    def test_invalid_utf8(self, mock_run: MagicMock) -> None:
        """Undecodable stdout raises InvalidOutputEncodingError."""
        mock_run.return_value = MagicMock(stdout=b"\xff\xfe", returncode=0)

        with pytest.raises(InvalidOutputEncodingError):
            run_command(["grep"])

    def test_missing_program(self) -> None:
        """A program that cannot be spawned raises CommandLaunchError."""
        with pytest.raises(CommandLaunchError, match="xyz_12345 is not installed"):
            run_command(["nonexistent_command_xyz_12345"])

    def test_inherit_echoes_and_captures(self, capsys: pytest.CaptureFixture[str]) -> None:
        """With INHERIT, output is shown live and still captured."""
        result = run_command(["printf", "one\\ntwo\\n"], stdout_policy=OutputPolicy.INHERIT)

        assert result == CommandResult(stdout="one\ntwo", returncode=0)
        assert capsys.readouterr().out == "one\ntwo\n"

    def test_inherit_timeout_while_output_is_open(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A child that keeps stdout open past the timeout is killed."""
        with pytest.raises(subprocess.TimeoutExpired) as exc_info:
            run_command(
                ["sh", "-c", "echo start; exec sleep 30"],
                stdout_policy=OutputPolicy.INHERIT,
                timeout=0.5,
            )

        assert exc_info.value.output == b"start\n"
        assert capsys.readouterr().out == "start\n"


class TestDecodeOutput:
    """Tests for decode_output function."""

    def test_strips_single_trailing_newline(self) -> None:
        """Only one trailing newline is removed."""
        assert decode_output(b"a\n\n") == "a\n"
        assert decode_output(b"a") == "a"

    def test_empty(self) -> None:
        """Empty output decodes to an empty string."""
        assert decode_output(b"") == ""


class TestHelpers:
    """Tests for small helpers."""

    def test_send_output_to(self) -> None:
        """quiet discards, otherwise output is inherited."""
        assert send_output_to(True) is OutputPolicy.DISCARD
        assert send_output_to(False) is OutputPolicy.INHERIT

    @patch("aurctl.utils.shell.shutil.which")
    def test_command_exists(self, mock_which: MagicMock) -> None:
        """command_exists checks PATH."""
        mock_which.return_value = "/usr/bin/makepkg"
        assert command_exists("makepkg") is True

        mock_which.return_value = None
        assert command_exists("makepkg") is False
