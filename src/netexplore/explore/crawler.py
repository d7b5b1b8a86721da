"""Peer discovery crawl.

Breadth-first walk over the peer graph: every peer reachable from the seeds
by following advertised neighbor lists is queried exactly once. With
``workers > 1`` the neighbor queries run on a thread pool, but the visited
set and frontier are only ever touched by the calling thread.
"""

from __future__ import annotations

from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Deque, Dict, Iterable, List, Set

import structlog

from netexplore.explore.graph import AdjacencyMap
from netexplore.peers.address import PeerAddress

logger = structlog.get_logger(__name__)


class TopologyCrawler:
    """Discovers the reachable peer set and each peer's neighbor list."""

    def __init__(self, client, workers: int = 1):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.client = client
        self.workers = workers

    def discover(self, seeds: Iterable[PeerAddress]) -> AdjacencyMap:
        """Crawl from the seeds and return the adjacency map of visited peers.

        Keys are in visit order. A failing neighbor query aborts the crawl
        and its exception propagates.
        """
        frontier: Deque[PeerAddress] = deque()
        queued: Set[PeerAddress] = set()
        for seed in seeds:
            if seed not in queued:
                queued.add(seed)
                frontier.append(seed)

        logger.info("Starting discovery", seeds=len(frontier), workers=self.workers)
        if self.workers == 1:
            adjacency = self._discover_sequential(frontier, queued)
        else:
            adjacency = self._discover_pooled(frontier, queued)
        logger.info("Discovery finished", peers=len(adjacency))
        return adjacency

    def _visit(
        self,
        adjacency: AdjacencyMap,
        frontier: Deque[PeerAddress],
        queued: Set[PeerAddress],
        peer: PeerAddress,
        neighbors: List[PeerAddress],
    ) -> None:
        adjacency[peer] = neighbors
        # Anything in adjacency was queued first, so `queued` covers both
        for neighbor in neighbors:
            if neighbor not in queued:
                queued.add(neighbor)
                frontier.append(neighbor)
        logger.info(
            "Got peers",
            peer=str(peer),
            neighbors=len(neighbors),
            discovered=len(queued),
            pending=len(frontier),
        )

    def _discover_sequential(self, frontier: Deque[PeerAddress], queued: Set[PeerAddress]) -> AdjacencyMap:
        adjacency: AdjacencyMap = {}
        while frontier:
            peer = frontier.popleft()
            logger.debug("Getting peers", peer=str(peer))
            self._visit(adjacency, frontier, queued, peer, self.client.get_peers(peer))
        return adjacency

    def _discover_pooled(self, frontier: Deque[PeerAddress], queued: Set[PeerAddress]) -> AdjacencyMap:
        adjacency: AdjacencyMap = {}
        in_flight: Dict[Future, PeerAddress] = {}
        pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="crawl")
        try:
            while frontier or in_flight:
                while frontier and len(in_flight) < self.workers:
                    peer = frontier.popleft()
                    logger.debug("Getting peers", peer=str(peer))
                    in_flight[pool.submit(self.client.get_peers, peer)] = peer

                done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    peer = in_flight.pop(future)
                    self._visit(adjacency, frontier, queued, peer, future.result())
        except BaseException:
            # Queries still running are abandoned, not awaited
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown()
        return adjacency
