#!/usr/bin/env python3
r"""Path normalization for auto-mode pattern matching.

Rules are matched against a normalized form of the file path:
- Backup and version suffixes are removed (``foo.txt.~3~``, ``foo.txt~``)
- A remote-authority prefix is removed when it leads the path
  (``/ssh:host:/etc/passwd`` with marker ``/ssh:host:`` → ``/etc/passwd``)

Example:
    >>> normalize_path("/a/foo.txt.~12~")
    '/a/foo.txt'
    >>> normalize_path("/ssh:host:/etc/passwd", remote_marker="/ssh:host:")
    '/etc/passwd'
"""

import re
from typing import Optional, Pattern, Union

# Numbered backups (.~3~), tagged versions (.~v1.2~) with an optional
# revision counter (.~tag~2~), and plain single backups (~).
VERSION_SUFFIX = re.compile(r"(?:\.~[-\w:#@^.]+(?:~\d+)?~|~)\Z")


class PathNormalizer:
    """Strips version suffixes and remote prefixes from file paths."""

    def __init__(self, version_suffix: Union[str, Pattern[str], None] = None):
        """Initialize normalizer.

        Args:
            version_suffix: Override for the version-suffix expression; it
                must be anchored at the end of the string
        """
        if version_suffix is None:
            self._version_suffix = VERSION_SUFFIX
        elif isinstance(version_suffix, str):
            self._version_suffix = re.compile(version_suffix)
        else:
            self._version_suffix = version_suffix

    def strip_version_suffix(self, path: str) -> str:
        """Remove a trailing backup/version marker from path."""
        match = self._version_suffix.search(path)
        if match is None:
            return path
        return path[: match.start()]

    def strip_remote_prefix(self, path: str, remote_marker: Optional[str]) -> str:
        """Remove remote_marker from the front of path.

        The marker is only stripped when it is a strict prefix; a marker
        found elsewhere in the path leaves it untouched.
        """
        if remote_marker and path.startswith(remote_marker):
            return path[len(remote_marker):]
        return path

    def normalize(self, path: str, remote_marker: Optional[str] = None) -> str:
        """Return the form of path that rules are matched against.

        Args:
            path: Absolute file path as reported by the file-open event
            remote_marker: Optional remote-authority prefix

        Returns:
            Normalized path
        """
        path = self.strip_version_suffix(path)
        return self.strip_remote_prefix(path, remote_marker)


_default_normalizer = PathNormalizer()


def normalize_path(path: str, remote_marker: Optional[str] = None) -> str:
    """Normalize path with the default version-suffix convention."""
    return _default_normalizer.normalize(path, remote_marker)
