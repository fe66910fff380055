#!/usr/bin/env python3
"""Canonical filesystem locations of the editor distribution.

Every location is derived from a root directory and the current host's
name by plain string concatenation. Volatile state lives under
host-namespaced directories (``.local/@<host>/etc/`` and
``.local/@<host>/cache/``), so one configuration tree can be shared by
several machines without them clobbering each other's files.

Example:
    >>> locations = Locations.from_root("/home/me/.emacs.d", "alpha")
    >>> locations.cache_dir
    '/home/me/.emacs.d/.local/@alpha/cache/'
"""

import os
import socket
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from edconf.core.constants import Defaults
from edconf.core.validators import validate_host_name


@dataclass(frozen=True)
class Locations:
    """Resolved directory locations. All values end with a separator."""

    host: str
    root: str
    core: str
    modules: str
    local: str
    etc_dir: str
    cache_dir: str
    packages: str

    @classmethod
    def from_root(cls, root: str, host: str) -> "Locations":
        """Derive every location from root and host.

        No filesystem access takes place; the same inputs always produce
        the same paths.

        Args:
            root: Root directory of the distribution
            host: Host identifier used to namespace volatile directories

        Returns:
            Resolved locations
        """
        if not root.endswith("/"):
            root = root + "/"
        local = root + ".local/"
        return cls(
            host=host,
            root=root,
            core=root + "core/",
            modules=root + "modules/",
            local=local,
            etc_dir=local + "@" + host + "/etc/",
            cache_dir=local + "@" + host + "/cache/",
            packages=local + "packages/",
        )

    def ensure(self, mode: int = 0o700) -> None:
        """Create the host-namespaced volatile directories."""
        for directory in (self.etc_dir, self.cache_dir):
            os.makedirs(directory, mode=mode, exist_ok=True)

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


def default_root() -> str:
    """Root from the EDCONF_ROOT environment variable, else ~/.emacs.d/."""
    root = os.environ.get(Defaults.ROOT_ENV_VAR) or Defaults.ROOT_DIR
    return os.path.expanduser(root)


def default_host() -> str:
    """Short name of the current machine."""
    return socket.gethostname().split(".")[0] or "localhost"


def resolve_locations(root: Optional[str] = None, host: Optional[str] = None) -> Locations:
    """Resolve locations, filling in defaults for missing inputs.

    Args:
        root: Root directory, or None for ``default_root()``
        host: Host name, or None for ``default_host()``

    Returns:
        Resolved locations

    Raises:
        ValidationError: If host contains characters unsafe in a path segment
    """
    root = os.path.expanduser(root) if root else default_root()
    host = host or default_host()
    validate_host_name(host)
    return Locations.from_root(root, host)
