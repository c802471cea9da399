"""Tests for config loading, TemplateRenderer and the batch CLI."""

import json
from pathlib import Path

import pytest

import batch_render
from habe import ArityError
from habe.config import ConfigLoader, DataLoader
from habe.rendering import TemplateRenderer

REPO_ROOT = Path(__file__).parent.parent


# Test fixtures
@pytest.fixture
def workspace(tmp_path):
    """Config and data directories with a few template configs."""
    templates_dir = tmp_path / "configs" / "templates"
    templates_dir.mkdir(parents=True)
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    (data_dir / "scores.json").write_text(json.dumps({
        "teams": {
            "red": [{"name": "Ada", "points": 12}, {"name": "Bo", "points": 0}],
            "blue": [{"name": "Cy", "points": 7}],
        }
    }))

    configs = {
        "leaderboard": {
            "source": "scores",
            "foreach": "$.teams.${team}[*]",
            "template": "{{name}}: {{or points \"no points\"}}",
        },
        "scorers": {
            "source": "scores",
            "foreach": "$.teams.red[*]",
            "filter": "gt points 0",
            "template": "{{name}}",
        },
        "blank": {
            "source": "scores",
            "foreach": "$.teams.red[*]",
            "template": "{{#if (gt points 10)}}{{name}}{{/if}}",
        },
        "broken": {
            "source": "scores",
            "template": "{{add 1}}",
        },
        "no_source": {
            "template": "{{x}}",
        },
    }
    for name, config in configs.items():
        (templates_dir / f"{name}.json").write_text(json.dumps(config))

    return tmp_path


@pytest.fixture
def config_loader(workspace):
    return ConfigLoader(config_dir=str(workspace / "configs"))


@pytest.fixture
def data_loader(workspace):
    return DataLoader(data_dir=str(workspace / "data"))


@pytest.fixture
def renderer(config_loader, data_loader):
    return TemplateRenderer(config_loader, data_loader)


# ============================================================================
# Loaders
# ============================================================================

class TestLoaders:

    def test_load_template(self, config_loader):
        config = config_loader.load_template("scorers")
        assert config["source"] == "scores"
        assert config["filter"] == "gt points 0"

    def test_missing_template(self, config_loader):
        with pytest.raises(FileNotFoundError, match="Template config not found: nope"):
            config_loader.load_template("nope")

    def test_missing_required_field(self, config_loader):
        with pytest.raises(ValueError, match="missing required 'source'"):
            config_loader.load_template("no_source")

    def test_available_templates(self, config_loader):
        assert config_loader.get_available_templates() == [
            "blank", "broken", "leaderboard", "no_source", "scorers",
        ]

    def test_load_data(self, data_loader):
        assert "teams" in data_loader.load_data("scores")

    def test_missing_dataset(self, data_loader):
        with pytest.raises(FileNotFoundError, match="Dataset not found: nope"):
            data_loader.load_data("nope")

    def test_available_datasets(self, data_loader):
        assert data_loader.get_available_datasets() == ["scores"]


# ============================================================================
# TemplateRenderer
# ============================================================================

class TestTemplateRenderer:

    def test_render_with_variables(self, renderer):
        assert renderer.render("leaderboard", {"team": "red"}) == ["Ada: 12", "Bo: no points"]
        assert renderer.render("leaderboard", {"team": "blue"}) == ["Cy: 7"]

    def test_filter_uses_lispy_truthiness(self, renderer):
        assert renderer.render("scorers") == ["Ada"]

    def test_blank_outputs_are_dropped(self, renderer):
        assert renderer.render("blank") == ["Ada"]

    def test_template_errors_propagate(self, renderer):
        with pytest.raises(ArityError):
            renderer.render("broken")

    def test_render_string(self, renderer):
        assert renderer.render_string("{{add a b}}", {"a": 1, "b": 2}) == "3"

    def test_sample_configuration(self):
        """The shipped sample config renders against the shipped dataset."""
        renderer = TemplateRenderer(
            ConfigLoader(str(REPO_ROOT / "configs")),
            DataLoader(str(REPO_ROOT / "data")),
        )
        assert renderer.render("order_summary") == [
            "A100 for Ada: tea x2=6.5 cake x1=4",
            "A101 for Bobo: coffee x3=7.5 (discount 1.5)",
        ]


# ============================================================================
# Batch CLI
# ============================================================================

class TestBatchRender:

    def test_parse_variables(self):
        assert batch_render.parse_variables(["team=red", "x=a=b"]) == {"team": "red", "x": "a=b"}
        assert batch_render.parse_variables(None) == {}

    def test_parse_variables_rejects_malformed(self):
        with pytest.raises(ValueError):
            batch_render.parse_variables(["team"])

    def test_main_prints_outputs(self, workspace, capsys):
        code = batch_render.main([
            "scorers",
            "-c", str(workspace / "configs"),
            "-d", str(workspace / "data"),
        ])
        assert code == 0
        assert capsys.readouterr().out == "Ada\n"

    def test_main_writes_files(self, workspace):
        out_dir = workspace / "out"
        code = batch_render.main([
            "leaderboard", "scorers",
            "-c", str(workspace / "configs"),
            "-d", str(workspace / "data"),
            "-o", str(out_dir),
            "--var", "team=blue",
        ])
        assert code == 0
        assert (out_dir / "leaderboard.txt").read_text() == "Cy: 7\n"
        assert (out_dir / "scorers.txt").read_text() == "Ada\n"

    def test_main_reports_failures(self, workspace):
        code = batch_render.main([
            "scorers", "broken", "missing",
            "-c", str(workspace / "configs"),
            "-d", str(workspace / "data"),
        ])
        assert code == 1

    def test_main_rejects_bad_variable(self, workspace):
        code = batch_render.main(["scorers", "--var", "oops"])
        assert code == 1
