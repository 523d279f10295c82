"""Package installation and removal.

Installs AUR packages by cloning their repository and building them with
makepkg, records the built version, and removes packages through pacman.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from aurctl.core.commands import BUILD, CLONE, REMOVE, check_result
from aurctl.core.config import AurctlConfig, RunOptions
from aurctl.core.descriptor import DESCRIPTOR_FILENAME, read_descriptor
from aurctl.core.errors import DirectoryCreationError, InvalidUserChoiceError, UserInputError
from aurctl.core.paths import ensure_dir, get_work_dir
from aurctl.core.snapshot import SnapshotStore
from aurctl.core.store import VersionStore
from aurctl.models.package import OutdatedEntry, PackageRecord
from aurctl.utils.shell import OutputPolicy, run_command, send_output_to

logger = logging.getLogger(__name__)

YES_ANSWERS = frozenset({"y", "Y", "yes", "Yes"})
NO_ANSWERS = frozenset({"n", "N", "no", "No", ""})


class PackageInstaller:
    """Installs, updates and removes AUR packages.

    Example:
        >>> installer = PackageInstaller(VersionStore(), load_config())
        >>> record = installer.sync("yay")
        >>> print(record.version)
    """

    def __init__(
        self,
        store: VersionStore,
        config: AurctlConfig,
        options: RunOptions | None = None,
        prompt: Callable[[str], str] = input,
        scratch_dir: Path | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            store: Version store receiving install and removal records.
            config: Effective configuration.
            options: Run options; quiet hides tool output.
            prompt: Reads one answer from the user. Must raise EOFError or
                OSError when no answer can be read.
            scratch_dir: Override for the scratch root.
        """
        self._store = store
        self._config = config
        self._options = options if options is not None else RunOptions()
        self._prompt = prompt
        self._scratch_dir = scratch_dir if scratch_dir is not None else config.effective_scratch_dir

    @property
    def _output(self) -> OutputPolicy:
        return send_output_to(self._options.quiet)

    def sync(self, name: str) -> PackageRecord:
        """Clone, build and install a package, then record its version.

        If a working tree for the package is already present the user is
        asked whether to clone it again; otherwise the existing tree is built.

        Args:
            name: AUR package name.

        Returns:
            The saved version record.

        Raises:
            UserInputError: If the re-clone answer cannot be read.
            InvalidUserChoiceError: If the answer is not yes or no.
            DirectoryCreationError: If the working tree cannot be reset.
            CommandFailedError: If git, makepkg or grep fail.
            RecordWriteError: If the built version cannot be recorded.
        """
        work_dir = get_work_dir(self._scratch_dir, name)

        if work_dir.is_dir() and self._confirm_reclone(name):
            logger.info("Removing existing working tree %s", work_dir)
            try:
                shutil.rmtree(work_dir)
            except OSError as e:
                msg = f"Cannot remove working tree {work_dir}: {e}"
                raise DirectoryCreationError(msg) from e

        ensure_dir(work_dir, "working tree")

        logger.info("Cloning %s", self._config.repository_url(name))
        result = run_command(
            ["git", "clone", "-q", self._config.repository_url(name), str(work_dir)],
            stdout_policy=self._output,
            stderr_policy=self._output,
        )
        check_result(CLONE, result)

        logger.info("Building %s with makepkg %s", name, " ".join(self._config.makepkg_flags))
        result = run_command(
            ["makepkg", *self._config.makepkg_flags],
            cwd=str(work_dir),
            stdout_policy=self._output,
            stderr_policy=self._output,
        )
        check_result(BUILD, result)

        pkgver, pkgrel = read_descriptor(work_dir / DESCRIPTOR_FILENAME)
        return self._store.save(name, pkgver, pkgrel)

    def remove(self, name: str) -> bool:
        """Remove an installed package and its record.

        Args:
            name: AUR package name.

        Returns:
            True if the package was removed, False if aurctl has no record of it.

        Raises:
            RecordDeletionError: If the record cannot be deleted.
            CommandFailedError: If pacman fails.
        """
        if not self._store.is_installed(name):
            logger.warning("Package %s is not installed", name)
            return False

        self._store.delete(name)

        result = run_command(
            ["sudo", "pacman", "--noconfirm", "-Rns", name],
            stdout_policy=self._output,
        )
        check_result(REMOVE, result)

        return True

    def apply_updates(
        self,
        snapshots: SnapshotStore,
        on_update: Callable[[OutdatedEntry], None] | None = None,
    ) -> list[OutdatedEntry]:
        """Install every package listed in the outdated snapshot.

        The snapshot is cleared once all packages were updated.

        Args:
            snapshots: Snapshot store to consume.
            on_update: Called before each package is synced.

        Returns:
            The entries that were updated; empty if there was nothing to do.
        """
        entries = snapshots.read()
        if not entries:
            return []

        for entry in entries:
            if on_update is not None:
                on_update(entry)
            logger.info("Updating %s from %s to %s", entry.name, entry.current, entry.latest)
            self.sync(entry.name)

        snapshots.clear()
        return entries

    def _confirm_reclone(self, name: str) -> bool:
        """Ask whether an existing working tree should be cloned again.

        Raises:
            UserInputError: If no answer can be read.
            InvalidUserChoiceError: If the answer is not recognized.
        """
        try:
            answer = self._prompt(
                f"A cloned repository for {name} already exists. Force re-cloning? (y/N) "
            )
        except (EOFError, OSError) as e:
            msg = "Could not read the answer to the re-clone prompt"
            raise UserInputError(msg) from e

        answer = answer.rstrip("\n")
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False

        msg = f"Unrecognized option {answer!r}, expected y/yes or n/no"
        raise InvalidUserChoiceError(msg)
