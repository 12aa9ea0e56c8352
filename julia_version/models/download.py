"""
Download data model for julia-version.

Each Julia release in ``versions.json`` lists the files published for it.
:class:`Download` mirrors one of those entries, and is also produced for
nightly artifacts discovered by probing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class Download:
    """
    A downloadable Julia artifact.

    Attributes:
        url: Location of the artifact.
        kind: ``archive``, ``installer`` or ``unknown``.
        arch: Target architecture.
        size: Size in bytes (``0`` when unknown).
        version: Julia version the artifact belongs to.
        os: Target operating system.
        extension: File extension.
        triplet: Platform triplet, when published.
        asc: Detached signature, when published.
        sha256: Checksum, when published.
    """

    url: str
    kind: str
    arch: str
    size: int
    version: str
    os: str
    extension: str
    triplet: Optional[str] = None
    asc: Optional[str] = None
    sha256: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Download":
        """Build a :class:`Download` from a ``versions.json`` file entry.

        Missing optional fields default to ``None``; a missing size
        defaults to ``0``.
        """
        return cls(
            url=str(data["url"]),
            kind=str(data.get("kind", "unknown")),
            arch=str(data.get("arch", "")),
            size=int(data.get("size") or 0),
            version=str(data.get("version", "")),
            os=str(data.get("os", "")),
            extension=str(data.get("extension", "")),
            triplet=data.get("triplet"),
            asc=data.get("asc"),
            sha256=data.get("sha256"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping, omitting unset optional fields."""
        result: Dict[str, Any] = {
            "url": self.url,
            "kind": self.kind,
            "arch": self.arch,
            "size": self.size,
            "version": self.version,
            "os": self.os,
            "extension": self.extension,
        }
        for key in ("triplet", "asc", "sha256"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result
