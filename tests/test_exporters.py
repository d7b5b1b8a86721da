"""Tests for the Graphviz and Gephi exporters."""

import subprocess
from datetime import datetime, timezone

import pytest

from fakes import P
from netexplore.errors import ExportError
from netexplore.export.gephi import GephiExporter
from netexplore.export.graphviz import GraphExporter
from netexplore.export.paths import format_timestamp, output_path


H, X, Y, Z = P("10.0.0.1:1984"), P("10.0.0.2:1984"), P("10.0.0.3:1984"), P("10.0.0.4:1984")
OUTSIDER = P("192.168.0.1:1984")
MOMENT = datetime(2024, 3, 5, 7, 8, 9, tzinfo=timezone.utc)


class TestPaths:
    """Timestamped output file names."""

    def test_timestamp_zero_padded(self):
        assert format_timestamp(MOMENT) == "2024-03-05T07:08:09"

    def test_output_path_layout(self, tmp_path):
        assert output_path(tmp_path, "graph", "dot", MOMENT) == tmp_path / "graph-2024-03-05T07:08:09.dot"


class TestGraphExporter:
    """Graphviz digraph rendering and export."""

    def test_render_lines(self, tmp_path):
        text = GraphExporter(tmp_path).render({H: [X, OUTSIDER], X: [H]})
        assert text.splitlines() == [
            "digraph network_map {",
            '    init [style=filled,color=".7 .3 .9"];',
            '\t"10.0.0.1:1984" -> "10.0.0.2:1984";',
            '\t"10.0.0.2:1984" -> "10.0.0.1:1984";',
            "}",
        ]

    def test_outsider_never_a_target(self, tmp_path):
        """Peers outside the map never appear as edge targets."""
        text = GraphExporter(tmp_path).render({H: [OUTSIDER, X], X: [OUTSIDER]})
        assert "192.168.0.1" not in text

    def test_render_empty(self, tmp_path):
        """An empty map still yields header, init node and closing brace."""
        assert GraphExporter(tmp_path).render({}).splitlines() == [
            "digraph network_map {",
            '    init [style=filled,color=".7 .3 .9"];',
            "}",
        ]

    def test_export_writes_dot_and_calls_rasterizer(self, tmp_path, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr(subprocess, "run", fake_run)
        artifacts = GraphExporter(tmp_path / "out").export({H: [X], X: []}, MOMENT)

        assert artifacts.dot_file == tmp_path / "out" / "graph-2024-03-05T07:08:09.dot"
        assert artifacts.png_file == tmp_path / "out" / "graph-2024-03-05T07:08:09.png"
        assert artifacts.rendered is True
        assert '"10.0.0.1:1984" -> "10.0.0.2:1984";' in artifacts.dot_file.read_text()
        assert calls == [["dot", "-Tpng", str(artifacts.dot_file), "-o", str(artifacts.png_file)]]

    def test_missing_rasterizer_is_not_fatal(self, tmp_path):
        """A missing dot binary leaves the .dot file and reports rendered=False."""
        exporter = GraphExporter(tmp_path, dot_binary=str(tmp_path / "no-such-dot"))
        artifacts = exporter.export({H: []}, MOMENT)
        assert artifacts.rendered is False
        assert artifacts.dot_file.exists()

    def test_unwritable_destination(self, tmp_path):
        """A file in place of the output directory raises ExportError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            GraphExporter(blocker / "out").export({H: []}, MOMENT)


class TestGephiExporter:
    """Weighted CSV edge table."""

    def test_weight_law(self, tmp_path):
        """The neighbor at position p gets weight 1/p."""
        text = GephiExporter(tmp_path).render({H: [X, Y, Z], X: [], Y: [], Z: []})
        assert text.splitlines() == [
            "Source,Target,Weight",
            "10.0.0.1:1984,10.0.0.2:1984,1.000000",
            "10.0.0.1:1984,10.0.0.3:1984,0.500000",
            "10.0.0.1:1984,10.0.0.4:1984,0.333333",
        ]

    def test_positions_counted_after_closing(self, tmp_path):
        """An outsider ahead in the list does not push weights down."""
        text = GephiExporter(tmp_path).render({H: [OUTSIDER, X], X: []})
        assert text.splitlines()[1:] == ["10.0.0.1:1984,10.0.0.2:1984,1.000000"]

    def test_render_empty_is_header_only(self, tmp_path):
        assert GephiExporter(tmp_path).render({}) == "Source,Target,Weight\n"

    def test_export_writes_csv(self, tmp_path):
        path = GephiExporter(tmp_path / "out").export({H: [X], X: [H]}, MOMENT)
        assert path == tmp_path / "out" / "gephi-2024-03-05T07:08:09.csv"
        assert path.read_text().startswith("Source,Target,Weight\n")
        assert len(path.read_text().splitlines()) == 3

    def test_unwritable_destination(self, tmp_path):
        """A file in place of the output directory raises ExportError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(ExportError):
            GephiExporter(blocker).export({H: []}, MOMENT)
