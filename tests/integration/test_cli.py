"""
Integration tests for the CLI.
"""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from openapi_autodoc.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Write an application module exposing routes in several forms."""
    (tmp_path / "cli_app.py").write_text(
        "\n".join(
            [
                "from openapi_autodoc import RouteInfo, RouteRegistry",
                "",
                "registry = RouteRegistry()",
                "registry.add('POST', '/users', 'sample_api.users.handlers:create_user')",
                "registry.add('GET', '/users/{id}', 'sample_api.users.handlers:annotated_handler')",
                "",
                "route_list = registry.get_all()",
                "",
                "",
                "def make_routes():",
                "    return registry",
                "",
                "",
                "class App:",
                "    routes = route_list",
                "",
                "",
                "app = App()",
                "not_routes = 42",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture(autouse=True)
def _sample_api_importable(sample_api: Path) -> None:
    """Make the handler package importable for every CLI test."""


class TestCLI:
    """Integration tests for the CLI."""

    def test_version(self, runner: CliRunner) -> None:
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "openapi-autodoc" in result.output

    def test_help(self, runner: CliRunner) -> None:
        """Test the help option."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "OpenAPI Autodoc" in result.output

    def test_generate_help(self, runner: CliRunner) -> None:
        """Test the generate command help."""
        result = runner.invoke(cli, ["generate", "--help"])
        assert result.exit_code == 0
        for option in ("--app", "--title", "--api-version", "--format", "--workers", "--strict"):
            assert option in result.output

    def test_generate_json(self, runner: CliRunner, app_dir: Path, tmp_path: Path) -> None:
        """Test generating a JSON document into a file."""
        output = tmp_path / "openapi.json"
        result = runner.invoke(cli, [
            "generate",
            "--app", "cli_app:registry",
            "--app-dir", str(app_dir),
            "--title", "CLI API",
            "--api-version", "2.0.0",
            "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["info"] == {"title": "CLI API", "version": "2.0.0"}
        assert document["paths"]["/users"]["post"]["operationId"] == "create-user"
        assert "201" in document["paths"]["/users"]["post"]["responses"]
        assert document["paths"]["/users/{id}"]["get"]["operationId"] == "fetch-the-user"

    @pytest.mark.parametrize("attribute", ["route_list", "make_routes", "app"])
    def test_route_sources(self, runner: CliRunner, app_dir: Path, tmp_path: Path, attribute: str) -> None:
        """Test the accepted forms of the application attribute."""
        output = tmp_path / "openapi.yaml"
        result = runner.invoke(cli, [
            "generate",
            "--app", f"cli_app:{attribute}",
            "--app-dir", str(app_dir),
            "--title", "CLI API",
            "--api-version", "1",
            "--format", "yaml",
            "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert list(document["paths"]) == ["/users", "/users/{id}"]

    def test_generate_workers(self, runner: CliRunner, app_dir: Path, tmp_path: Path) -> None:
        """Test generating with worker threads."""
        output = tmp_path / "openapi.json"
        result = runner.invoke(cli, [
            "generate",
            "--app", "cli_app:registry",
            "--app-dir", str(app_dir),
            "--title", "T",
            "--api-version", "1",
            "--workers", "3",
            "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert len(json.loads(output.read_text(encoding="utf-8"))["paths"]) == 2

    def test_generate_not_routes(self, runner: CliRunner, app_dir: Path) -> None:
        """Test that attributes without routes fail."""
        result = runner.invoke(cli, [
            "generate",
            "--app", "cli_app:not_routes",
            "--app-dir", str(app_dir),
            "--title", "T",
            "--api-version", "1",
        ])

        assert result.exit_code != 0
        assert "does not provide routes" in result.output

    def test_generate_invalid_reference(self, runner: CliRunner, app_dir: Path) -> None:
        """Test that references without an attribute fail."""
        result = runner.invoke(cli, [
            "generate",
            "--app", "cli_app",
            "--app-dir", str(app_dir),
            "--title", "T",
            "--api-version", "1",
        ])

        assert result.exit_code != 0
        assert "module:attribute" in result.output

    def test_generate_strict_missing_source(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that --strict fails on handlers without source."""
        (tmp_path / "strict_app.py").write_text(
            "from openapi_autodoc import RouteRegistry\n"
            "registry = RouteRegistry()\n"
            "registry.add('GET', '/', 'sample_api.users.handlers:not_declared')\n",
            encoding="utf-8",
        )
        result = runner.invoke(cli, [
            "generate",
            "--app", "strict_app:registry",
            "--app-dir", str(tmp_path),
            "--title", "T",
            "--api-version", "1",
            "--strict",
        ])

        assert result.exit_code != 0
        assert "GET /" in result.output

    def test_config_file(self, runner: CliRunner, app_dir: Path, tmp_path: Path) -> None:
        """Test that the configuration file sets the output format."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output:\n  format: yaml\n", encoding="utf-8")
        output = tmp_path / "out.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "generate",
            "--app", "cli_app:registry",
            "--app-dir", str(app_dir),
            "--title", "T",
            "--api-version", "1",
            "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").startswith("openapi: 3.1.0")

    def test_list(self, runner: CliRunner, app_dir: Path) -> None:
        """Test listing routes."""
        result = runner.invoke(cli, ["list", "--app", "cli_app:registry", "--app-dir", str(app_dir)])

        assert result.exit_code == 0, result.output
        assert "create-user" in result.output
        assert "fetch-the-user" in result.output
        assert "201" in result.output

    def test_generate_handler_module_not_imported(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that handlers named by string are found in modules the routes never import."""
        (tmp_path / "lazy_handlers.py").write_text(
            "def fetch_thing():\n"
            '    """\n'
            "    @ID custom-fetch\n"
            "    @Summary Custom summary\n"
            '    """\n'
            "    return None\n",
            encoding="utf-8",
        )
        (tmp_path / "lazy_routes.py").write_text(
            "from openapi_autodoc import RouteRegistry\n"
            "registry = RouteRegistry()\n"
            "registry.add('GET', '/things', 'lazy_handlers:fetch_thing')\n",
            encoding="utf-8",
        )
        output = tmp_path / "openapi.json"

        result = runner.invoke(cli, [
            "generate",
            "--app", "lazy_routes:registry",
            "--app-dir", str(tmp_path),
            "--title", "T",
            "--api-version", "1",
            "--strict",
            "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        operation = json.loads(output.read_text(encoding="utf-8"))["paths"]["/things"]["get"]
        assert operation["operationId"] == "custom-fetch"
        assert operation["summary"] == "Custom summary"
