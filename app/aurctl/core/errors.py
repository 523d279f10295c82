"""Domain error codes, the explain catalog and the exception hierarchy.

Every failure surfaced to the user carries a DomainErrorCode from a fixed
catalog. Raw exit statuses of external tools never reach the user directly:
codes without a documented cause collapse into UNMAPPED.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class DomainErrorCode(IntEnum):
    """Fixed catalog of user-facing failure categories."""

    DIRECTORY_CREATION_FAILURE = 0x00
    FETCH_FAILURE = 0x10
    VERSION_READ_FAILURE = 0x20
    SNAPSHOT_CORRUPTED = 0x21
    RECORD_LISTING_FAILURE = 0x22
    SNAPSHOT_WRITE_FAILURE = 0x23
    INVALID_OUTPUT_ENCODING = 0x30
    USER_INPUT_FAILURE = 0x40
    INVALID_USER_CHOICE = 0x41
    RECORD_DELETION_FAILURE = 0x50
    RECORD_WRITE_FAILURE = 0x51
    COMMAND_LAUNCH_FAILURE = 0x60
    UNMAPPED = 0xFF

    @property
    def hex(self) -> str:
        """Two-digit upper-case hex form used in messages (e.g. '0A')."""
        return f"{self.value:02X}"


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Catalog entry describing one domain error code.

    Attributes:
        code: The code this entry documents.
        title: Short name of the failure.
        output: What the underlying failure typically looks like.
        description: Where in aurctl the failure is raised.
        cause: The likely cause.
        remedy: What the user can do about it.
    """

    code: DomainErrorCode
    title: str
    output: str
    description: str
    cause: str
    remedy: str


def _build_catalog() -> dict[DomainErrorCode, ErrorInfo]:
    entries = [
        ErrorInfo(
            code=DomainErrorCode.DIRECTORY_CREATION_FAILURE,
            title="Directory creation error",
            output="Permission denied (os error 13)",
            description="Raised while creating aurctl's configuration or scratch directories, "
            "or while removing a package's working tree before re-cloning",
            cause="The configured directory path is not writable or was mistyped",
            remedy="Check the permissions of the parent directory and the scratch_dir setting",
        ),
        ErrorInfo(
            code=DomainErrorCode.FETCH_FAILURE,
            title="Fetch error",
            output="curl exit code 6 or 7",
            description="Raised while refreshing, when the latest PKGBUILD of a package is fetched",
            cause="The AUR host could not be resolved or reached",
            remedy="Check your internet connection",
        ),
        ErrorInfo(
            code=DomainErrorCode.VERSION_READ_FAILURE,
            title="pkgver/pkgrel read error",
            output="grep exit code 1 or 2",
            description="Raised when the pkgver or pkgrel of a package cannot be read "
            "from its PKGBUILD or from its package info record",
            cause="An invalid or removed package name, or a damaged package info record",
            remedy="Check that the package still exists in the AUR",
        ),
        ErrorInfo(
            code=DomainErrorCode.SNAPSHOT_CORRUPTED,
            title="Outdated snapshot corrupted",
            output="Line does not split into name, current and latest version",
            description="Raised when the out-dated file written by 'aurctl refresh' is read back",
            cause="The out-dated file was edited by hand or written concurrently",
            remedy="Run 'aurctl refresh' to rebuild it",
        ),
        ErrorInfo(
            code=DomainErrorCode.RECORD_LISTING_FAILURE,
            title="Package info listing error",
            output="No such file or directory",
            description="Raised when the package_info directory cannot be listed",
            cause="The package_info directory was removed or its permissions changed",
            remedy="Check that ~/.config/aurctl/package_info exists and is readable",
        ),
        ErrorInfo(
            code=DomainErrorCode.SNAPSHOT_WRITE_FAILURE,
            title="Outdated snapshot write error",
            output="Permission denied (os error 13)",
            description="Raised when 'aurctl refresh' or 'aurctl apply-updates' writes "
            "the out-dated file",
            cause="The out-dated file or its directory is not writable",
            remedy="Check the permissions of ~/.config/aurctl/out-dated",
        ),
        ErrorInfo(
            code=DomainErrorCode.INVALID_OUTPUT_ENCODING,
            title="Output decoding error",
            output="Invalid UTF-8 sequence",
            description="Raised when the captured output of an external command is decoded",
            cause="The last command executed printed bytes that are not valid UTF-8",
            remedy="Run the command with --verbose to see which tool produced the output",
        ),
        ErrorInfo(
            code=DomainErrorCode.USER_INPUT_FAILURE,
            title="User input error",
            output="Input could not be read",
            description="Raised when aurctl prompts for an answer and no text can be read",
            cause="Standard input was closed or the prompt was interrupted",
            remedy="Run aurctl from an interactive terminal",
        ),
        ErrorInfo(
            code=DomainErrorCode.INVALID_USER_CHOICE,
            title="User input error",
            output="Unrecognized option",
            description="Raised when the answer to a prompt is not one of the offered options",
            cause="An option other than the allowed ones was entered",
            remedy="Answer with y/yes or n/no",
        ),
        ErrorInfo(
            code=DomainErrorCode.RECORD_DELETION_FAILURE,
            title="Package deletion error",
            output="Package info file could not be removed",
            description="Raised when removing a package whose info file in "
            "~/.config/aurctl/package_info cannot be deleted",
            cause="The package info file is missing or not writable",
            remedy="Check that the package info file exists",
        ),
        ErrorInfo(
            code=DomainErrorCode.RECORD_WRITE_FAILURE,
            title="Package info write error",
            output="Permission denied (os error 13)",
            description="Raised after a build, when the installed version is recorded in "
            "~/.config/aurctl/package_info",
            cause="The package_info directory is not writable",
            remedy="Fix the permissions, then run 'aurctl sync <package>' again to record it",
        ),
        ErrorInfo(
            code=DomainErrorCode.COMMAND_LAUNCH_FAILURE,
            title="Command launch error",
            output="No such file or directory",
            description="Raised when an external tool (git, curl, grep, makepkg, pacman) "
            "cannot be started",
            cause="The tool is not installed or not executable",
            remedy="Install the missing tool and make sure it is on PATH",
        ),
        ErrorInfo(
            code=DomainErrorCode.UNMAPPED,
            title="Mismatched exit and error codes",
            output="",
            description="Raised when an external tool fails with an exit code "
            "that has no documented error code",
            cause="An unexpected failure of an external tool",
            remedy="Re-run with --verbose and check the output of the failing tool",
        ),
    ]
    return {entry.code: entry for entry in entries}


ERROR_CATALOG: dict[DomainErrorCode, ErrorInfo] = _build_catalog()


def parse_code(text: str) -> int | None:
    """Parse a hexadecimal error code as typed by the user.

    Args:
        text: Code such as "10", "ff" or "0x41".

    Returns:
        Integer value, or None if the text is not valid hexadecimal.
    """
    try:
        return int(text.strip(), 16)
    except ValueError:
        return None


def explain(code: int) -> ErrorInfo | None:
    """Look up the catalog entry for a code.

    Args:
        code: Integer error code.

    Returns:
        ErrorInfo if the code exists in the catalog, None otherwise.
    """
    try:
        return ERROR_CATALOG[DomainErrorCode(code)]
    except ValueError:
        return None


class AurctlError(Exception):
    """Base exception for fatal domain errors.

    Attributes:
        code: Domain error code reported to the user.
    """

    code: DomainErrorCode = DomainErrorCode.UNMAPPED

    def __init__(self, message: str, code: DomainErrorCode | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class DirectoryCreationError(AurctlError):
    """Raised when a required directory cannot be created."""

    code = DomainErrorCode.DIRECTORY_CREATION_FAILURE


class VersionReadError(AurctlError):
    """Raised when pkgver/pkgrel cannot be read."""

    code = DomainErrorCode.VERSION_READ_FAILURE


class SnapshotCorruptedError(AurctlError):
    """Raised when the outdated snapshot file has a malformed line."""

    code = DomainErrorCode.SNAPSHOT_CORRUPTED


class RecordListingError(AurctlError):
    """Raised when the package info directory cannot be listed."""

    code = DomainErrorCode.RECORD_LISTING_FAILURE


class SnapshotWriteError(AurctlError):
    """Raised when the outdated snapshot file cannot be written."""

    code = DomainErrorCode.SNAPSHOT_WRITE_FAILURE


class InvalidOutputEncodingError(AurctlError):
    """Raised when captured command output is not valid UTF-8."""

    code = DomainErrorCode.INVALID_OUTPUT_ENCODING


class UserInputError(AurctlError):
    """Raised when a prompt answer cannot be read."""

    code = DomainErrorCode.USER_INPUT_FAILURE


class InvalidUserChoiceError(AurctlError):
    """Raised when a prompt answer is not a recognized option."""

    code = DomainErrorCode.INVALID_USER_CHOICE


class RecordDeletionError(AurctlError):
    """Raised when a package info record cannot be deleted."""

    code = DomainErrorCode.RECORD_DELETION_FAILURE


class RecordWriteError(AurctlError):
    """Raised when a package info record cannot be written."""

    code = DomainErrorCode.RECORD_WRITE_FAILURE


class CommandLaunchError(AurctlError):
    """Raised when an external program cannot be spawned at all."""

    code = DomainErrorCode.COMMAND_LAUNCH_FAILURE


class CommandFailedError(AurctlError):
    """Raised when an external command exits with a non-accepted code.

    Attributes:
        command: Logical command name (e.g. "fetch").
        exit_code: Raw exit status of the process.
    """

    def __init__(self, code: DomainErrorCode, command: str, exit_code: int) -> None:
        super().__init__(f"'{command}' command failed with exit code {exit_code}", code)
        self.command = command
        self.exit_code = exit_code
