"""
Unit tests for the engine facade and the command-line interface.
"""

import json
import logging
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from edgesim.cli import cli
from edgesim.core.config import Config, EngineConfig, SimilarityConfig
from edgesim.core.exceptions import ConfigurationError
from edgesim.engine import SimilarityEngine, annotate_graph, summarize_results
from edgesim.graph.feature_graph import FeatureGraph


def make_graph():
    """Helper to create a small graph with distances 2 and 4."""
    graph = FeatureGraph(name="sample")
    graph.add_node("a", {"data": [0.0, 0.0]})
    graph.add_node("b", {"data": [0.0, 2.0]})
    graph.add_node("c", {"data": [0.0, 4.0]})
    graph.add_edge("a", "b")
    graph.add_edge("a", "c")
    return graph


class TestSimilarityEngine(unittest.TestCase):
    """Tests for the engine facade."""

    def test_annotate(self):
        """Test in-memory annotation with the default configuration."""
        graph = make_graph()

        result = SimilarityEngine(EngineConfig()).annotate(graph)

        self.assertEqual(result["status"], "completed")
        self.assertEqual(result["graph"], "sample")
        self.assertEqual(result["metrics"]["edges"], 2)
        self.assertEqual(result["summary"]["count"], 2)
        self.assertAlmostEqual(result["summary"]["max"], 1.0 / 3.0)
        self.assertAlmostEqual(result["summary"]["min"], 0.2)

    def test_annotate_normalized(self):
        """Test that the maximum distance is reported."""
        config = EngineConfig(similarity=SimilarityConfig(similarity_function="Normalized"))

        result = annotate_graph(make_graph(), config)

        self.assertEqual(result["metrics"]["d_max"], 4.0)
        self.assertAlmostEqual(result["summary"]["mean"], 0.25)

    def test_annotate_invalid(self):
        """Test that invalid parameters raise."""
        config = EngineConfig(similarity=SimilarityConfig(
            similarity_function="Exponential", normalization_factor=0.0
        ))

        with self.assertRaises(ConfigurationError):
            SimilarityEngine(config).annotate(make_graph())

    def test_summarize_empty(self):
        """Test the summary of a graph without edges."""
        summary = summarize_results(FeatureGraph(), "viewMetric")

        self.assertEqual(summary["count"], 0)
        self.assertIsNone(summary["mean"])

    def test_process_file(self):
        """Test annotating a graph file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = Path(tmpdir) / "graph.json"
            output_path = Path(tmpdir) / "out" / "graph.json"
            make_graph().save(input_path)

            result = SimilarityEngine(EngineConfig()).process_file(input_path, output_path)

            self.assertEqual(result["output_path"], str(output_path))
            loaded = FeatureGraph.load(output_path)

        values = sorted(
            loaded.get_edge_value(edge, "viewMetric") for edge in loaded.edges()
        )
        self.assertAlmostEqual(values[0], 0.2)
        self.assertAlmostEqual(values[1], 1.0 / 3.0)


class TestCLI(unittest.TestCase):
    """Tests for the command-line interface."""

    def setUp(self):
        Config.reset()
        self.runner = CliRunner()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.graph_path = Path(self.tmpdir.name) / "graph.json"
        make_graph().save(self.graph_path)

    def tearDown(self):
        self.tmpdir.cleanup()
        Config.reset()
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

    def test_compute(self):
        """Test the compute command with a normalized similarity."""
        output_path = Path(self.tmpdir.name) / "out.json"

        result = self.runner.invoke(
            cli,
            [
                "compute", str(self.graph_path),
                "-o", str(output_path),
                "--similarity-function", "Normalized",
                "--result", "weight",
            ],
            obj={},
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("SIMILARITY RESULTS", result.output)
        self.assertIn("Max distance", result.output)

        with open(output_path) as f:
            data = json.load(f)
        weights = sorted(edge["attributes"]["weight"] for edge in data["edges"])
        self.assertEqual(weights, [0.0, 0.5])

    def test_compute_in_place(self):
        """Test that the input graph is overwritten without --output."""
        result = self.runner.invoke(cli, ["compute", str(self.graph_path)], obj={})

        self.assertEqual(result.exit_code, 0, result.output)
        loaded = FeatureGraph.load(self.graph_path)
        for edge in loaded.edges():
            self.assertIsNotNone(loaded.get_edge_value(edge, "viewMetric"))

    def test_compute_invalid_factor(self):
        """Test that an invalid factor fails and leaves the file untouched."""
        before = self.graph_path.read_text()

        result = self.runner.invoke(
            cli,
            [
                "compute", str(self.graph_path),
                "--similarity-function", "Exponential",
                "--normalization-factor=-1",
            ],
            obj={},
        )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("normalization factor", result.output)
        self.assertEqual(self.graph_path.read_text(), before)

    def test_compute_unknown_function(self):
        """Test that an unknown similarity function is reported."""
        result = self.runner.invoke(
            cli,
            ["compute", str(self.graph_path), "--similarity-function", "Bogus"],
            obj={},
        )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Bogus", result.output)

    def test_compute_missing_file(self):
        """Test that a missing graph file is reported."""
        result = self.runner.invoke(
            cli, ["compute", str(Path(self.tmpdir.name) / "missing.json")], obj={}
        )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("does not exist", result.output)

    def test_compute_with_config_file(self):
        """Test that a configuration file sets the parameters."""
        config_path = Path(self.tmpdir.name) / "config.json"
        config_path.write_text(json.dumps({
            "similarity": {"similarity_function": "Exponential", "normalization_factor": 2.0},
        }))

        result = self.runner.invoke(
            cli, ["--config", str(config_path), "compute", str(self.graph_path)], obj={}
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Exponential", result.output)

    def test_init(self):
        """Test writing the default configuration."""
        output_path = Path(self.tmpdir.name) / "config.json"

        result = self.runner.invoke(cli, ["init", "-o", str(output_path)], obj={})

        self.assertEqual(result.exit_code, 0, result.output)
        with open(output_path) as f:
            data = json.load(f)
        self.assertEqual(data["similarity"]["similarity_function"], "Reciprocal")

    def test_init_ignores_loaded_configuration(self):
        """Test that init writes defaults even when a configuration is loaded."""
        config_path = Path(self.tmpdir.name) / "custom.json"
        config_path.write_text(json.dumps({
            "similarity": {"similarity_function": "Normalized", "result": "weight"},
        }))
        output_path = Path(self.tmpdir.name) / "defaults.json"

        result = self.runner.invoke(
            cli, ["--config", str(config_path), "init", "-o", str(output_path)], obj={}
        )

        self.assertEqual(result.exit_code, 0, result.output)
        with open(output_path) as f:
            data = json.load(f)
        self.assertEqual(data["similarity"]["similarity_function"], "Reciprocal")
        self.assertEqual(data["similarity"]["result"], "viewMetric")

    def test_compute_normalized_identical_features(self):
        """Test the compute command when every distance is zero."""
        graph = FeatureGraph()
        graph.add_node("u", {"data": [1.0]})
        graph.add_node("v", {"data": [1.0]})
        graph.add_edge("u", "v")
        graph.save(self.graph_path)

        result = self.runner.invoke(
            cli,
            ["compute", str(self.graph_path), "--similarity-function", "Normalized"],
            obj={},
        )

        self.assertEqual(result.exit_code, 0, result.output)
        loaded = FeatureGraph.load(self.graph_path)
        edge = loaded.edges()[0]
        self.assertEqual(loaded.get_edge_value(edge, "viewMetric"), 1.0)

    def test_list_functions(self):
        """Test listing the available functions."""
        result = self.runner.invoke(cli, ["list-functions"], obj={})

        self.assertEqual(result.exit_code, 0, result.output)
        for name in ("Euclidian", "Reciprocal", "Normalized", "Exponential"):
            self.assertIn(name, result.output)


if __name__ == "__main__":
    unittest.main()
