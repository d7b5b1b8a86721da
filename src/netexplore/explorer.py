"""Operator workflows tying the crawl, ranking and exports together."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog

from netexplore.config.settings import Settings, get_settings
from netexplore.explore.clock import ClockSkewEstimator
from netexplore.explore.connectivity import ConnectivityRanker, ConnectivityScore
from netexplore.explore.crawler import TopologyCrawler
from netexplore.explore.graph import AdjacencyMap, close_adjacency
from netexplore.explore.liveness import LivenessFilter
from netexplore.export.gephi import GephiExporter
from netexplore.export.graphviz import GraphArtifacts, GraphExporter
from netexplore.peers.address import PeerAddress
from netexplore.peers.client import PeerClient

logger = structlog.get_logger(__name__)


class NetExplorer:
    """One-shot snapshots of a peer network."""

    def __init__(
        self,
        client=None,
        seeds: Optional[Sequence[PeerAddress]] = None,
        output_dir: Optional[str | Path] = None,
        workers: Optional[int] = None,
        dot_binary: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.client = client or PeerClient(timeout=settings.PEER_TIMEOUT)
        self.seeds = list(seeds) if seeds is not None else settings.seed_addresses()
        output_dir = output_dir if output_dir is not None else settings.OUTPUT_DIR

        self.crawler = TopologyCrawler(self.client, workers=workers if workers is not None else settings.CRAWL_WORKERS)
        self.liveness = LivenessFilter(self.client)
        self.ranker = ConnectivityRanker()
        self.clock = ClockSkewEstimator(self.client)
        self.graph_exporter = GraphExporter(output_dir, dot_binary or settings.DOT_BINARY)
        self.gephi_exporter = GephiExporter(output_dir)

    def get_all_peers(self, seeds: Optional[Iterable[PeerAddress]] = None) -> List[PeerAddress]:
        """Every peer reachable from the seeds, in visit order."""
        seeds = self.seeds if seeds is None else seeds
        return list(self.crawler.discover(seeds))

    def get_live_peers(self, seeds: Optional[Iterable[PeerAddress]] = None) -> List[PeerAddress]:
        """Reachable peers that currently answer the liveness check.

        Dead seeds are dropped before the crawl so they never get queried.
        """
        seeds = self.seeds if seeds is None else seeds
        live_seeds = self.liveness.filter_live(seeds)
        return self.liveness.filter_live(self.get_all_peers(live_seeds))

    def build_map(self, peers: Sequence[PeerAddress]) -> AdjacencyMap:
        """Query each peer's neighbors and close the map over ``peers``."""
        logger.info("Generating connection map", peers=len(peers))
        adjacency = {peer: self.client.get_peers(peer) for peer in peers}
        return close_adjacency(adjacency)

    def _map_for(self, peers: Optional[Sequence[PeerAddress]]) -> AdjacencyMap:
        if peers is None:
            logger.info("Getting live peers")
            peers = self.get_live_peers()
        return self.build_map(peers)

    def graph(self, peers: Optional[Sequence[PeerAddress]] = None) -> GraphArtifacts:
        """Write a Graphviz snapshot (live peers by default)."""
        return self.graph_exporter.export(self._map_for(peers))

    def nodes_connectivity(self, peers: Optional[Sequence[PeerAddress]] = None) -> List[ConnectivityScore]:
        return self.ranker.rank(self._map_for(peers))

    def generate_gephi_csv(self, peers: Optional[Sequence[PeerAddress]] = None) -> Path:
        return self.gephi_exporter.export(self._map_for(peers))

    def peers_clock_diff(self, peers: Optional[Sequence[PeerAddress]] = None) -> List[Tuple[PeerAddress, Optional[int]]]:
        """Clock skew of every peer (all reachable peers by default)."""
        if peers is None:
            peers = self.get_all_peers()
        return self.clock.estimate_all(peers)
