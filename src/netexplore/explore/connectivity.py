"""Connectivity ranking.

Every peer orders its own neighbor list; a peer that shows up early in many
lists is prominent in the network. The score of a peer is the average of
the 1-based positions it holds across all other peers' lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from netexplore.explore.graph import AdjacencyMap, close_adjacency, with_positions
from netexplore.peers.address import PeerAddress


@dataclass(frozen=True)
class ConnectivityScore:
    peer: PeerAddress
    average_position: float
    occurrence_count: int

    def as_tuple(self) -> Tuple[PeerAddress, float, int]:
        return self.peer, self.average_position, self.occurrence_count


class ConnectivityRanker:
    """Ranks peers by average neighbor-list position."""

    def accumulate(self, adjacency: AdjacencyMap) -> Dict[PeerAddress, Tuple[int, int]]:
        """Return peer -> (position_sum, count) over the closed map."""
        totals: Dict[PeerAddress, Tuple[int, int]] = {}
        for neighbors in close_adjacency(adjacency).values():
            for neighbor, position in with_positions(neighbors):
                position_sum, count = totals.get(neighbor, (0, 0))
                totals[neighbor] = (position_sum + position, count + 1)
        return totals

    def rank(self, adjacency: AdjacencyMap) -> List[ConnectivityScore]:
        """Return scores ascending by average position.

        Peers never referenced are left out. Equal averages are ordered by
        peer address.
        """
        scores = [
            ConnectivityScore(peer, position_sum / count, count)
            for peer, (position_sum, count) in self.accumulate(adjacency).items()
        ]
        scores.sort(key=lambda s: (s.average_position, s.peer))
        return scores
