"""Error types raised by netexplore."""

from __future__ import annotations

from typing import Optional


class NetExploreError(Exception):
    """Base class for all netexplore errors."""


class PeerUnreachableError(NetExploreError):
    """A peer could not be queried or answered with an unusable response."""

    def __init__(self, peer, message: str, cause: Optional[BaseException] = None):
        self.peer = peer
        self.cause = cause
        super().__init__(f"{peer}: {message}")


class ExportError(NetExploreError):
    """An output artifact could not be created or written."""

    def __init__(self, path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to write {path}{detail}")
