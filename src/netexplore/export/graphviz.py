"""Graphviz export of the peer graph.

Writes a ``digraph`` description and asks the ``dot`` tool to render it to
PNG next to it.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from netexplore.explore.graph import AdjacencyMap, edges
from netexplore.export.paths import output_path, write_text

logger = structlog.get_logger(__name__)

GRAPH_HEADER = "digraph network_map {"
INIT_NODE_STYLE = '    init [style=filled,color=".7 .3 .9"];'
GRAPH_FOOTER = "}"


@dataclass
class GraphArtifacts:
    dot_file: Path
    png_file: Path
    rendered: bool


class GraphExporter:
    """Renders an adjacency map as a Graphviz directed graph."""

    def __init__(self, output_dir: str | Path, dot_binary: str = "dot"):
        self.output_dir = Path(output_dir)
        self.dot_binary = dot_binary

    def render(self, adjacency: AdjacencyMap) -> str:
        lines = [GRAPH_HEADER, INIT_NODE_STYLE]
        for host, neighbor, _ in edges(adjacency):
            lines.append(f'\t"{host}" -> "{neighbor}";')
        lines.append(GRAPH_FOOTER)
        return "\n".join(lines) + "\n"

    def rasterize(self, dot_file: Path, png_file: Path) -> bool:
        """Run ``dot -Tpng``. Returns False if the tool is missing or fails."""
        cmd = [self.dot_binary, "-Tpng", str(dot_file), "-o", str(png_file)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            logger.error("Graphviz not available", binary=self.dot_binary, error=str(e))
            return False
        if result.returncode != 0:
            logger.error("Graphviz failed", returncode=result.returncode, stderr=result.stderr.strip())
            return False
        return True

    def export(self, adjacency: AdjacencyMap, moment: Optional[datetime] = None) -> GraphArtifacts:
        moment = moment or datetime.now(timezone.utc)
        dot_file = output_path(self.output_dir, "graph", "dot", moment)
        png_file = output_path(self.output_dir, "graph", "png", moment)

        logger.info("Generating dot file", path=str(dot_file))
        write_text(dot_file, self.render(adjacency))

        logger.info("Generating PNG image", path=str(png_file))
        rendered = self.rasterize(dot_file, png_file)
        if rendered:
            logger.info("Image written", path=str(png_file))
        return GraphArtifacts(dot_file=dot_file, png_file=png_file, rendered=rendered)
