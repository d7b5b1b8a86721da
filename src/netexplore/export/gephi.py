"""Gephi edge-table export.

Each host's neighbor at 1-based position ``p`` gets weight ``1/p``, so the
first neighbor a peer lists is its strongest edge.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Tuple

import structlog

from netexplore.explore.graph import AdjacencyMap, edges
from netexplore.export.paths import output_path, write_text
from netexplore.peers.address import PeerAddress

logger = structlog.get_logger(__name__)

HEADER = ("Source", "Target", "Weight")


def weighted_edges(adjacency: AdjacencyMap) -> Iterator[Tuple[PeerAddress, PeerAddress, float]]:
    for host, neighbor, position in edges(adjacency):
        yield host, neighbor, 1 / position


class GephiExporter:
    """Renders an adjacency map as a weighted CSV edge table."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def render(self, adjacency: AdjacencyMap) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(HEADER)
        for host, neighbor, weight in weighted_edges(adjacency):
            writer.writerow((str(host), str(neighbor), f"{weight:.6f}"))
        return buf.getvalue()

    def export(self, adjacency: AdjacencyMap, moment: Optional[datetime] = None) -> Path:
        path = output_path(self.output_dir, "gephi", "csv", moment)
        write_text(path, self.render(adjacency))
        logger.info("Gephi CSV file written", path=str(path))
        return path
