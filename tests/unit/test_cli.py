"""Unit tests for the command-line interface."""
import json
import logging
import os
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from tmotifs.cli import cli

DATA = Path(__file__).resolve().parent.parent / "data" / "example_network.txt"
RESULT = "[Dinf-N5-E5]example_network.txt"


class TestCLI:
    """Test cases for the command-line interface."""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.runner = CliRunner()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.out = os.path.join(self.temp_dir.name, "out")

    def teardown_method(self):
        """Clean up after each test method."""
        self.temp_dir.cleanup()

    def test_cli_help(self):
        """Test that the CLI shows help information."""
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "count" in result.output
        assert "run" in result.output

    def test_verbosity_levels(self):
        """Test that -v enables INFO and -vv enables DEBUG logging."""
        root = logging.getLogger()
        for flags, level in [([], logging.WARNING), (["-v"], logging.INFO),
                             (["-vv"], logging.DEBUG), (["-vvv"], logging.DEBUG)]:
            result = self.runner.invoke(cli, flags + ["summary", str(DATA)])
            assert result.exit_code == 0, result.output
            assert root.level == level
        root.setLevel(logging.WARNING)

    def test_count_undirected(self):
        """Test counting the example network and the written table."""
        result = self.runner.invoke(cli, ["count", str(DATA), "-u", "-o", self.out])
        assert result.exit_code == 0, result.output
        assert "Reading target graph" in result.output
        assert "(27 occurrences)" in result.output
        assert "Time for motifs mining" in result.output

        path = Path(self.out) / f"{RESULT}.csv"
        lines = path.read_text().splitlines()
        assert lines[0] == "NODES, EDGES, NUM_OCC"
        assert sum(int(line.rsplit(", ", 1)[1]) for line in lines[1:]) == 27

    def test_count_with_delta_and_sizes(self):
        """Test that parameters reach the search and the file name."""
        result = self.runner.invoke(
            cli, ["count", str(DATA), "-u", "-d", "1", "-n", "3", "-e", "2", "-o", self.out]
        )
        assert result.exit_code == 0, result.output
        assert "(9 occurrences)" in result.output
        assert (Path(self.out) / "[D1-N3-E2]example_network.txt.csv").exists()

    def test_count_json_and_dump(self):
        """Test JSON output together with the occurrence dump."""
        result = self.runner.invoke(
            cli, ["count", str(DATA), "-u", "--format", "json", "--dump", "-o", self.out]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads((Path(self.out) / f"{RESULT}.json").read_text())
        assert payload["total_occurrences"] == 27
        assert (Path(self.out) / f"{RESULT}.occ.txt").exists()

    def test_count_invalid_delta(self):
        """Test that a malformed delta is a usage error."""
        result = self.runner.invoke(cli, ["count", str(DATA), "-d", "soon"])
        assert result.exit_code == 2
        assert "delta" in result.output

    def test_count_invalid_max_nodes(self):
        result = self.runner.invoke(cli, ["count", str(DATA), "-n", "1"])
        assert result.exit_code == 2

    def test_count_state_cap(self):
        """Test that exceeding --max-states fails cleanly."""
        result = self.runner.invoke(
            cli, ["count", str(DATA), "-u", "--max-states", "3", "-o", self.out]
        )
        assert result.exit_code == 1
        assert "max_states=3" in result.output
        assert not Path(self.out).exists()

    def test_count_missing_file(self):
        result = self.runner.invoke(cli, ["count", os.path.join(self.temp_dir.name, "nope.txt")])
        assert result.exit_code == 2

    def test_summary(self):
        """Test the network summary command."""
        result = self.runner.invoke(cli, ["summary", str(DATA), "-u"])
        assert result.exit_code == 0, result.output
        assert "n_nodes: 4" in result.output
        assert "n_edges: 5" in result.output
        assert "directed: False" in result.output

    def _write_config(self, **output):
        path = os.path.join(self.temp_dir.name, "run.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({
                "input": {"path": str(DATA), "directed": False},
                "search": {"delta": 2},
                "output": {"directory": self.out, **output},
                "logging": {"level": "WARNING"},
            }, f)
        return path

    def test_run_validate_only(self):
        """Test configuration validation without running."""
        result = self.runner.invoke(cli, ["run", self._write_config(), "--validate-only"])
        assert result.exit_code == 0, result.output
        assert "Configuration valid" in result.output
        assert "delta=2" in result.output
        assert not Path(self.out).exists()

    def test_run(self):
        """Test a configured run end to end."""
        result = self.runner.invoke(cli, ["run", self._write_config()])
        assert result.exit_code == 0, result.output
        assert "(13 occurrences)" in result.output
        assert (Path(self.out) / "[D2-N5-E5]example_network.txt.csv").exists()

    def test_run_bad_config(self):
        path = os.path.join(self.temp_dir.name, "bad.yaml")
        with open(path, "w") as f:
            f.write("input:\n  path: x.txt\n  format: gml\n")
        result = self.runner.invoke(cli, ["run", path])
        assert result.exit_code == 1
        assert "Configuration error" in result.output
