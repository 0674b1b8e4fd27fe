"""Negotiation configuration

Supports configuration via:
1. Constructor arguments and builder methods (highest priority)
2. Environment variables (WDCAPS_VENDOR_PREFIX, WDCAPS_ROOT_DIR)
3. Default values
"""

import os
from importlib import metadata
from pathlib import Path
from typing import Optional, Union

from wdcaps.errors import ConfigError
from wdcaps.prefix import W3C_APPIUM_PREFIX


ROOT_MARKER = "pyproject.toml"


def find_root(start: Union[str, Path]) -> Path:
    """Find the nearest ancestor of start holding a pyproject.toml"""
    path = Path(start).resolve()
    if path.is_file():
        path = path.parent
    for candidate in [path, *path.parents]:
        if (candidate / ROOT_MARKER).is_file():
            return candidate
    raise ConfigError(f"Could not find {ROOT_MARKER} above '{start}'")


def package_version(name: str) -> Optional[str]:
    """Installed version of a distribution, or None if it is not installed"""
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


class NegotiationConfig:
    """Configuration for capability negotiation

    The root directory is resolved lazily so that callers which never ask
    for it do not depend on the package being laid out on disk.
    """

    def __init__(
        self,
        vendor_prefix: Optional[str] = None,
        root_dir: Optional[Union[str, Path]] = None,
    ):
        """Create negotiation configuration

        Args:
            vendor_prefix: Namespace prepended to non-standard capability names
            root_dir: Project root directory
        """
        if vendor_prefix is None:
            vendor_prefix = os.getenv("WDCAPS_VENDOR_PREFIX", W3C_APPIUM_PREFIX)
        if not vendor_prefix or ":" in vendor_prefix:
            raise ConfigError(f"Invalid vendor prefix '{vendor_prefix}'")

        if root_dir is None and os.getenv("WDCAPS_ROOT_DIR"):
            root_dir = os.getenv("WDCAPS_ROOT_DIR")

        self.vendor_prefix = vendor_prefix
        self._root_dir = Path(root_dir) if root_dir is not None else None

    def with_vendor_prefix(self, prefix: str) -> "NegotiationConfig":
        """Set a custom vendor prefix"""
        if not prefix or ":" in prefix:
            raise ConfigError(f"Invalid vendor prefix '{prefix}'")
        self.vendor_prefix = prefix
        return self

    def with_root_dir(self, root_dir: Union[str, Path]) -> "NegotiationConfig":
        """Set the project root directory explicitly"""
        self._root_dir = Path(root_dir)
        return self

    @property
    def root_dir(self) -> Path:
        if self._root_dir is None:
            self._root_dir = find_root(__file__)
        return self._root_dir

    def __repr__(self) -> str:
        return f"NegotiationConfig(vendor_prefix={self.vendor_prefix!r}, root_dir={self._root_dir!r})"
