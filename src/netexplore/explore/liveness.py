"""Liveness filtering of peer sets."""

from __future__ import annotations

from typing import Iterable, List

import structlog

from netexplore.peers.address import PeerAddress

logger = structlog.get_logger(__name__)


class LivenessFilter:
    """Keeps only peers that currently answer an info query."""

    def __init__(self, client):
        self.client = client

    def is_alive(self, peer: PeerAddress) -> bool:
        return self.client.get_info(peer) is not None

    def filter_live(self, peers: Iterable[PeerAddress]) -> List[PeerAddress]:
        """Return the live subset of ``peers``, keeping input order."""
        live = []
        checked = 0
        for peer in peers:
            checked += 1
            if self.is_alive(peer):
                live.append(peer)
            else:
                logger.info("Peer unavailable", peer=str(peer))
        logger.info("Liveness check finished", checked=checked, live=len(live))
        return live
