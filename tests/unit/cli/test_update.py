"""Unit tests for refresh, apply-updates and refresh-and-apply.

The PKGBUILD fetcher is replaced with a canned one; installs are mocked
at PackageInstaller.sync.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

from aurctl.cli.main import app
from aurctl.core.errors import CommandFailedError, DomainErrorCode
from aurctl.core.refresh import VersionFetcher
from aurctl.core.snapshot import SnapshotStore
from aurctl.core.store import VersionStore
from aurctl.models.package import OutdatedEntry, PackageRecord
from typer.testing import CliRunner

runner = CliRunner()


def _fetcher(versions: dict[str, str]) -> MagicMock:
    """Create a PkgbuildFetcher replacement returning fixed versions."""
    fetcher = MagicMock(spec=VersionFetcher)
    fetcher.latest_version.side_effect = versions.__getitem__
    return MagicMock(return_value=fetcher)


def _install(store_versions: dict[str, tuple[str, str]]) -> None:
    store = VersionStore()
    for name, (pkgver, pkgrel) in store_versions.items():
        store.save(name, pkgver, pkgrel)


class TestRefresh:
    """Tests for aurctl refresh."""

    def test_finds_updates(self, aurctl_home: Path) -> None:
        """Newer versions are reported and stored in the snapshot."""
        _install({"yay": ("12.3.5", "1"), "paru": ("2.0.3", "1")})

        with patch(
            "aurctl.cli.commands.update.PkgbuildFetcher",
            _fetcher({"yay": "12.3.6-1", "paru": "2.0.3-1"}),
        ):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 0
        assert "Refreshing AUR database (2 package(s))" in result.output
        assert "Update available for yay: 12.3.5-1 -> 12.3.6-1" in result.output
        assert "aurctl apply-updates" in result.output
        assert SnapshotStore().read() == [
            OutdatedEntry(name="yay", current="12.3.5-1", latest="12.3.6-1")
        ]

    def test_up_to_date(self, aurctl_home: Path) -> None:
        """With no updates the snapshot is written empty."""
        _install({"yay": ("12.3.5", "1")})

        with patch("aurctl.cli.commands.update.PkgbuildFetcher", _fetcher({"yay": "12.3.5-1"})):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 0
        assert "everything is up to date" in result.output
        assert SnapshotStore().path.exists()
        assert SnapshotStore().read() == []

    def test_quiet(self, aurctl_home: Path) -> None:
        """Quiet refresh prints nothing."""
        _install({"yay": ("12.3.5", "1")})

        with patch("aurctl.cli.commands.update.PkgbuildFetcher", _fetcher({"yay": "12.3.6-1"})):
            result = runner.invoke(app, ["-q", "refresh"])

        assert result.exit_code == 0
        assert result.output == ""
        assert len(SnapshotStore().read()) == 1

    def test_network_failure(self, aurctl_home: Path) -> None:
        """A fetch failure exits with code 10."""
        _install({"yay": ("12.3.5", "1")})
        fetcher = MagicMock(spec=VersionFetcher)
        fetcher.latest_version.side_effect = CommandFailedError(
            DomainErrorCode.FETCH_FAILURE, "fetch", 6
        )

        with patch(
            "aurctl.cli.commands.update.PkgbuildFetcher", MagicMock(return_value=fetcher)
        ):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 1
        assert "Error [10]" in result.output
        assert "aurctl explain 10" in result.output

    def test_unwritable_snapshot(self, aurctl_home: Path) -> None:
        """A snapshot that cannot be written exits with code 23."""
        _install({"yay": ("12.3.5", "1")})
        SnapshotStore().path.mkdir()

        with patch("aurctl.cli.commands.update.PkgbuildFetcher", _fetcher({"yay": "12.3.6-1"})):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 1
        assert "Error [23]" in result.output
        assert "aurctl explain 23" in result.output

    def test_commented_latest_version(self, aurctl_home: Path) -> None:
        """A latest version with whitespace exits with code 20."""
        _install({"yay": ("12.3.5", "1")})

        with patch(
            "aurctl.cli.commands.update.PkgbuildFetcher",
            _fetcher({"yay": "12.3.6-1 # rebuild"}),
        ):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 1
        assert "Error [20]" in result.output


class TestApplyUpdates:
    """Tests for aurctl apply-updates."""

    def test_nothing_to_do(self, aurctl_home: Path) -> None:
        """An empty snapshot is reported."""
        result = runner.invoke(app, ["apply-updates"])

        assert result.exit_code == 0
        assert "No available updates, nothing to do" in result.output

    @patch("aurctl.core.installer.PackageInstaller.sync")
    def test_applies_snapshot(self, mock_sync: MagicMock, aurctl_home: Path) -> None:
        """Each listed package is synced and the snapshot emptied."""
        SnapshotStore().write(
            [
                OutdatedEntry(name="yay", current="12.3.5-1", latest="12.3.6-1"),
                OutdatedEntry(name="paru", current="2.0.3-1", latest="2.0.4-1"),
            ]
        )
        mock_sync.return_value = PackageRecord(name="yay", pkgver="12.3.6", pkgrel="1")

        result = runner.invoke(app, ["apply-updates"])

        assert result.exit_code == 0
        assert [c.args[0] for c in mock_sync.call_args_list] == ["yay", "paru"]
        assert "Updating yay from 12.3.5-1 to 12.3.6-1" in result.output
        assert "Done installing updates (2 package(s))" in result.output
        assert SnapshotStore().read() == []

    @patch("aurctl.core.installer.PackageInstaller.sync")
    def test_failure_keeps_snapshot(self, mock_sync: MagicMock, aurctl_home: Path) -> None:
        """A failed update exits 1 and keeps the snapshot."""
        entries = [OutdatedEntry(name="yay", current="12.3.5-1", latest="12.3.6-1")]
        SnapshotStore().write(entries)
        mock_sync.side_effect = CommandFailedError(DomainErrorCode.UNMAPPED, "build", 4)

        result = runner.invoke(app, ["apply-updates"])

        assert result.exit_code == 1
        assert "Error [FF]" in result.output
        assert SnapshotStore().read() == entries


class TestRefreshAndApply:
    """Tests for aurctl refresh-and-apply."""

    @patch("aurctl.core.installer.PackageInstaller.sync")
    def test_refresh_then_apply(self, mock_sync: MagicMock, aurctl_home: Path) -> None:
        """Updates found by the refresh are installed in the same run."""
        _install({"yay": ("12.3.5", "1")})
        mock_sync.return_value = PackageRecord(name="yay", pkgver="12.3.6", pkgrel="1")

        with patch("aurctl.cli.commands.update.PkgbuildFetcher", _fetcher({"yay": "12.3.6-1"})):
            result = runner.invoke(app, ["refresh-and-apply"])

        assert result.exit_code == 0
        mock_sync.assert_called_once_with("yay")
        assert SnapshotStore().read() == []

    @patch("aurctl.core.installer.PackageInstaller.sync")
    def test_nothing_to_apply(self, mock_sync: MagicMock, aurctl_home: Path) -> None:
        """When the refresh finds nothing, nothing is installed."""
        _install({"yay": ("12.3.5", "1")})

        with patch("aurctl.cli.commands.update.PkgbuildFetcher", _fetcher({"yay": "12.3.5-1"})):
            result = runner.invoke(app, ["refresh-and-apply"])

        assert result.exit_code == 0
        mock_sync.assert_not_called()
        assert "No available updates, nothing to do" in result.output
