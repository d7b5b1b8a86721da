"""Peer address value type."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True, order=True)
class PeerAddress:
    """A network participant, identified by host and port.

    Instances are hashable and ordered by ``(host, port)``, which is also the
    tie-break used wherever a deterministic peer order is needed.
    """

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def parse(cls, peer: str) -> "PeerAddress":
        """Accepts 'host:port' or URL like 'http://host:port'."""
        text = peer.strip()
        if "://" in text:
            u = urlparse(text)
            if not u.hostname or not u.port:
                raise ValueError(f"Invalid peer URL: {peer!r}")
            return cls(u.hostname, int(u.port))
        host, sep, port_str = text.rpartition(":")
        if not sep or not host:
            raise ValueError(f"Invalid peer address: {peer!r}")
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port in peer address: {peer!r}") from None
        if not 0 < port <= 65535:
            raise ValueError(f"Port out of range in peer address: {peer!r}")
        return cls(host.strip(), port)
