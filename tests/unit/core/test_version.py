"""Unit tests for version comparison."""

import pytest
from aurctl.core.version import is_newer


class TestIsNewer:
    """Tests for is_newer function."""

    def test_equal_versions_are_not_newer(self) -> None:
        """Identical version strings are never newer."""
        assert is_newer("1.2.3-1", "1.2.3-1") is False

    @pytest.mark.parametrize(
        ("current", "candidate"),
        [
            ("1.2.3-1", "1.2.4-1"),
            ("1.2.3-1", "1.2.3-2"),
            ("1.0-1", "1.1-1"),
        ],
    )
    def test_newer_candidates(self, current: str, candidate: str) -> None:
        """Candidates with no smaller segment are newer."""
        assert is_newer(current, candidate) is True

    def test_older_candidate(self) -> None:
        """A candidate with a smaller segment is not newer."""
        assert is_newer("1.3.0-1", "1.2.9-1") is False

    def test_segments_compare_as_strings(self) -> None:
        """'10' sorts before '9', so 1.9 -> 1.10 is not reported."""
        assert is_newer("1.9-1", "1.10-1") is False

    def test_commit_based_pkgver_is_not_newer(self) -> None:
        """A switch from a tagged release to an r<count> pkgver is ignored."""
        assert is_newer("r512.abc123-1", "2.0-1") is False

    def test_shorter_candidate_does_not_fail(self) -> None:
        """Comparison stops at the shorter segment list."""
        assert is_newer("1.0.0.1-1", "1.1-1") is True

    def test_later_segment_regression_is_not_newer(self) -> None:
        """Every common segment is compared, so '3' > '0' hides 1.2.3 -> 1.3.0."""
        assert is_newer("1.2.3-1", "1.3.0-1") is False
