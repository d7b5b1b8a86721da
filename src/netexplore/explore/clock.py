"""Clock skew estimation against remote peers.

The peer's clock is read between two local readings ``start`` and ``end``.
Any peer time inside ``[start, end]`` is explained by round-trip latency, so
only the distance outside that window is reported as skew.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional, Tuple

import structlog

from netexplore.peers.address import PeerAddress

logger = structlog.get_logger(__name__)


def peer_clock_diff(start: int, peer_time: Optional[int], end: int) -> Optional[int]:
    """Return the skew in seconds, or None when the peer time is unknown."""
    if peer_time is None:
        return None
    if peer_time < start:
        return peer_time - start
    if peer_time > end:
        return peer_time - end
    return 0


def _system_seconds() -> int:
    return int(time.time())


class ClockSkewEstimator:
    """Estimates each peer's clock offset from the local clock."""

    def __init__(self, client, clock: Callable[[], int] = _system_seconds):
        self.client = client
        self.clock = clock

    def estimate(self, peer: PeerAddress) -> Optional[int]:
        start = self.clock()
        peer_time = self.client.get_time(peer)
        end = self.clock()
        diff = peer_clock_diff(start, peer_time, end)
        logger.debug("Clock diff", peer=str(peer), start=start, peer_time=peer_time, end=end, diff=diff)
        return diff

    def estimate_all(self, peers: Iterable[PeerAddress]) -> List[Tuple[PeerAddress, Optional[int]]]:
        return [(peer, self.estimate(peer)) for peer in peers]
