"""External command classes and exit code translation.

Each class of external invocation is described by a CommandSpec naming the
exit codes considered successful. Failures are translated into domain error
codes through a small table: only combinations with a documented cause
have their own code, everything else is UNMAPPED.
"""

from dataclasses import dataclass

from aurctl.core.errors import CommandFailedError, DomainErrorCode
from aurctl.utils.shell import CommandResult


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A logical class of external invocation.

    Attributes:
        name: Logical command identifier (e.g. "fetch").
        accepted_exit_codes: Exit codes treated as success.
    """

    name: str
    accepted_exit_codes: frozenset[int] = frozenset({0})

    def accepts(self, exit_code: int) -> bool:
        """Check if an exit code counts as success for this command."""
        return exit_code in self.accepted_exit_codes


FETCH = CommandSpec("fetch")
SEARCH = CommandSpec("search")
# git exits with 128 when the target directory is already populated, which
# happens when the user chose to keep an existing working tree.
CLONE = CommandSpec("clone", frozenset({0, 128}))
BUILD = CommandSpec("build")
REMOVE = CommandSpec("remove")

# (command name, exit code) -> documented cause
TRANSLATIONS: dict[tuple[str, int], DomainErrorCode] = {
    ("fetch", 6): DomainErrorCode.FETCH_FAILURE,  # could not resolve host
    ("fetch", 7): DomainErrorCode.FETCH_FAILURE,  # could not connect
    ("search", 1): DomainErrorCode.VERSION_READ_FAILURE,  # no match
    ("search", 2): DomainErrorCode.VERSION_READ_FAILURE,  # file missing
}


def classify(spec: CommandSpec, exit_code: int) -> DomainErrorCode | None:
    """Translate an observed exit code into a domain error code.

    Args:
        spec: The command class that produced the exit code.
        exit_code: Observed exit status.

    Returns:
        None if the exit code is accepted, otherwise the translated code.
    """
    if spec.accepts(exit_code):
        return None
    return TRANSLATIONS.get((spec.name, exit_code), DomainErrorCode.UNMAPPED)


def check_result(spec: CommandSpec, result: CommandResult) -> str:
    """Return a command's captured stdout if its exit code is accepted.

    Args:
        spec: The command class that was executed.
        result: Result of the execution.

    Returns:
        Captured stdout.

    Raises:
        CommandFailedError: If the exit code is not accepted.
    """
    code = classify(spec, result.returncode)
    if code is not None:
        raise CommandFailedError(code, spec.name, result.returncode)
    return result.stdout
