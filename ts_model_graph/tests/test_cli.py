"""
End-to-end tests of the command line and the generator facade.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from click.testing import CliRunner

from ts_model_graph import ModelGraphConfig, ModelGraphGenerator, OutputFormat
from ts_model_graph.ts_model_graph import ts_model_graph

TEST_DATA = Path(__file__).parent / "test_data"


def copy_dump(directory: Path) -> Path:
    path = directory / "library.json"
    shutil.copy(TEST_DATA / "library.json", path)
    return path


class TestCommandLine:
    def test_json_output(self, tmp_path):
        dump = copy_dump(tmp_path)
        output = tmp_path / "graph.json"

        result = CliRunner().invoke(ts_model_graph, [str(dump), str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert len(data["models"]) == 10
        assert data["$comment"].startswith("Generated by ts_model_graph v")
        assert "from library" in data["$comment"]

    def test_mermaid_output_with_name(self, tmp_path):
        dump = copy_dump(tmp_path)
        output = tmp_path / "graph.mmd"

        result = CliRunner().invoke(ts_model_graph, ["--format", "mermaid", "--name", "Library", str(dump), str(output)])

        assert result.exit_code == 0, result.output
        text = output.read_text()
        assert text.startswith("%% Generated by ts_model_graph v")
        assert "from Library" in text
        assert "classDiagram" in text

    def test_config_file(self, tmp_path):
        dump = copy_dump(tmp_path)
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {
                    "add_generation_comment": False,
                    "ignore_declarations": ["Visitor"],
                    "output": {"format": "json", "indent": 0},
                }
            )
        )
        output = tmp_path / "graph.json"

        result = CliRunner().invoke(ts_model_graph, ["-c", str(config), "-w", "2", str(dump), str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert "$comment" not in data
        assert [m["id"] for m in data["models"]][-1] == "Guest"

    def test_format_flag_overrides_config(self, tmp_path):
        dump = copy_dump(tmp_path)
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"output": {"format": "json"}}))
        output = tmp_path / "graph.mmd"

        result = CliRunner().invoke(ts_model_graph, ["-c", str(config), "-f", "mermaid", str(dump), str(output)])

        assert result.exit_code == 0, result.output
        assert "classDiagram" in output.read_text()

    def test_invalid_workers(self, tmp_path):
        dump = copy_dump(tmp_path)
        result = CliRunner().invoke(ts_model_graph, ["-w", "0", str(dump), str(tmp_path / "out.json")])
        assert result.exit_code != 0

    def test_missing_input(self, tmp_path):
        result = CliRunner().invoke(ts_model_graph, [str(tmp_path / "missing.json"), str(tmp_path / "out.json")])
        assert result.exit_code != 0


class TestModelGraphGenerator:
    def test_generate_without_cli(self, library_dump):
        generator = ModelGraphGenerator("library", library_dump, output_format="mermaid")
        output = generator.generate()

        assert output.startswith("%% Generated by ts_model_graph v")
        assert output.rstrip().endswith("Guest ..> Visitor")

    def test_build(self, library_dump):
        graph = ModelGraphGenerator("library", library_dump).build()
        assert len(graph) == 10

    def test_format_override_leaves_config_untouched(self, library_dump):
        config = ModelGraphConfig()
        mermaid = ModelGraphGenerator("library", library_dump, config, output_format="mermaid").generate()
        data = json.loads(ModelGraphGenerator("library", library_dump, config).generate())

        assert config.output.format == OutputFormat.JSON
        assert "classDiagram" in mermaid
        assert len(data["models"]) == 10
