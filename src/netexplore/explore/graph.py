"""Adjacency map helpers shared by the ranker and the exporters."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from netexplore.peers.address import PeerAddress

# Peer -> neighbor list in the order the peer reported it.
AdjacencyMap = Dict[PeerAddress, List[PeerAddress]]


def close_adjacency(adjacency: AdjacencyMap) -> AdjacencyMap:
    """Return a copy with every neighbor list restricted to the map's own keys.

    Neighbor order is kept. The input map is not modified.
    """
    known = set(adjacency)
    return {host: [n for n in neighbors if n in known] for host, neighbors in adjacency.items()}


def with_positions(items: Iterable[PeerAddress]) -> Iterator[Tuple[PeerAddress, int]]:
    """Pair each item with its 1-based position."""
    return ((item, position) for position, item in enumerate(items, start=1))


def edges(adjacency: AdjacencyMap) -> Iterator[Tuple[PeerAddress, PeerAddress, int]]:
    """Yield (host, neighbor, position) for every edge of the closed map."""
    for host, neighbors in close_adjacency(adjacency).items():
        for neighbor, position in with_positions(neighbors):
            yield host, neighbor, position
