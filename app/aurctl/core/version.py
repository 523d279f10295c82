"""Version comparison for refresh.

Segments are compared as strings, not numbers: "10" sorts before "9".
"""


def is_newer(current: str, candidate: str) -> bool:
    """Decide whether ``candidate`` is a newer version than ``current``.

    Both arguments are full '<pkgver>-<pkgrel>' strings split on '.'.
    Walking the segments both versions have, the first current segment
    that is lexicographically greater than its candidate counterpart means
    the candidate is not newer (e.g. a package that moved from tagged
    releases to a commit-based pkgver). Equal versions are never newer.

    Args:
        current: Installed version.
        candidate: Version found upstream.

    Returns:
        True if the candidate should be reported as an update.
    """
    if current == candidate:
        return False

    current_segments = current.split(".")
    candidate_segments = candidate.split(".")

    # Segment counts differ between releases; never index past the shorter one.
    common = min(len(current_segments), len(candidate_segments))
    for i in range(common):
        if current_segments[i] > candidate_segments[i]:
            return False

    return True
