"""
Nightly build platform descriptor.

Nightly Julia builds are not listed in ``versions.json``. Their location is
derived from a fixed URL template per platform, described here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NightlyPlatform:
    """A platform for which nightly Julia artifacts are published.

    Attributes:
        platform: Operating system directory (``linux``, ``macos``, ``winnt``...).
        arch: Architecture directory (``x86_64``, ``aarch64``, ``x64``...).
        ext: File extension of the artifact (``tar.gz``, ``dmg``, ``exe``).
        suffix: File name suffix. Defaults to ``<platform>-<arch>``.
    """

    platform: str
    arch: str
    ext: str
    suffix: Optional[str] = None

    @property
    def file_suffix(self) -> str:
        """Suffix used in the artifact file name."""
        return self.suffix or f"{self.platform}-{self.arch}"

    @property
    def kind(self) -> str:
        """Artifact kind as reported in ``versions.json`` file entries."""
        if self.ext == "exe":
            return "installer"
        if self.ext in ("tar.gz", "zip", "dmg"):
            return "archive"
        return "unknown"
