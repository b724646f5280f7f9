"""
Tests for the jsmods command line.
"""

import json

from typer.testing import CliRunner

from jsmods import __version__
from jsmods.main import app


runner = CliRunner()


def invoke(*args):
    return runner.invoke(app, [str(arg) for arg in args])


class TestChecks:
    """Test the yes/no commands."""

    def test_version(self):
        result = invoke("version")
        assert result.exit_code == 0
        assert result.stdout.strip() == __version__

    def test_imported(self, project_copy):
        result = invoke("imported", project_copy / "app.js", "phoenix")
        assert result.exit_code == 0
        assert result.stdout.strip() == "true"

        result = invoke("imported", project_copy / "app.js", "react")
        assert result.stdout.strip() == "false"

    def test_imported_stylesheet(self, project_copy):
        result = invoke("imported", project_copy / "app.css", "theme.css")
        assert result.stdout.strip() == "true"

    def test_live_socket(self, project_copy):
        assert invoke("live-socket", project_copy / "app.js").stdout.strip() == "true"
        assert invoke("live-socket", project_copy / "stats.js").stdout.strip() == "false"

    def test_var_exists_json(self, project_copy):
        result = invoke("var-exists", project_copy / "app.js", "Hooks", "--json")
        assert json.loads(result.stdout) == {
            "status": "ok",
            "operation": "exist_var",
            "payload": True,
            "error": None,
        }


class TestMutations:
    """Test commands that print or write source."""

    def test_prints_without_writing(self, project_copy):
        path = project_copy / "app.js"
        before = path.read_text()

        result = invoke("extend-hooks", path, "-n", "Chart")
        assert result.exit_code == 0
        assert "    Chart,\n" in result.stdout
        assert path.read_text() == before

    def test_write(self, project_copy):
        path = project_copy / "app.js"

        result = invoke("extend-hooks", path, "-n", "Chart", "--write")
        assert result.exit_code == 0
        assert "Updated" in result.stdout
        assert "    Chart,\n" in path.read_text()

    def test_write_unchanged(self, project_copy):
        path = project_copy / "app.css"
        assert "Updated" in invoke("hide-scrollbar", path, "--write").stdout

        result = invoke("hide-scrollbar", path, "--write", "--json")
        assert json.loads(result.stdout)["payload"] == {"file": str(path), "changed": False}

    def test_insert_and_remove_imports(self, project_copy):
        path = project_copy / "stats.js"

        invoke("insert-imports", path, "-l", 'import a from "a"', "--write")
        assert 'import topbar from "../vendor/topbar"\nimport a from "a"\n' in path.read_text()

        invoke("remove-imports", path, "a", "phoenix", "--write")
        assert path.read_text().startswith('import topbar from "../vendor/topbar"\n\n')

    def test_extend_var(self, project_copy):
        result = invoke("extend-var", project_copy / "app.js", "Hooks", "-n", "Chart")
        assert "let Hooks = { Chart }" in result.stdout


class TestStats:
    """Test the stats command."""

    def test_json(self, project_copy):
        result = invoke("stats", project_copy / "stats.js", "--json")
        assert result.exit_code == 0
        payload = json.loads(result.stdout)["payload"]
        assert payload["functions"] == 1
        assert payload["debuggers"] == 2

    def test_table(self, project_copy):
        result = invoke("stats", project_copy / "stats.js")
        assert result.exit_code == 0
        assert "debuggers" in result.stdout


class TestErrors:
    """Test error exits."""

    def test_missing_live_socket(self, project_copy):
        result = invoke("remove-hooks", project_copy / "stats.js", "-n", "Chart")
        assert result.exit_code == 1
        assert "liveSocket not found." in result.stdout

    def test_missing_file(self, tmp_path):
        result = invoke("stats", tmp_path / "missing.js", "--json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["status"] == "error"

    def test_check_error(self, project_copy):
        result = invoke("var-exists", project_copy / "app.css", "Hooks")
        assert result.exit_code == 1
        assert "Error (exist_var)" in result.stdout
