import json
from pathlib import Path

from click.testing import CliRunner

from swag.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


def _write_config(tmp_path, text: str) -> Path:
    path = tmp_path / "swag.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestCliGenerate:
    def test_generate_to_file(self, tmp_path):
        output = tmp_path / "docs" / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "swag.yaml"),
            "-o", str(output),
            "--app-dir", str(FIXTURES),
        ])

        assert result.exit_code == 0, result.output
        assert output.exists()
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["info"]["title"] == "Sample API"
        assert "Documented 3 of 4 routes." in result.output

    def test_generate_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(FIXTURES / "swag.yaml")])

        assert result.exit_code == 0, result.output
        assert '"openapi":"3.0.3"' in result.output
        assert '"/api/users/{id}"' in result.output

    def test_locale_option(self, tmp_path):
        output = tmp_path / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "swag.yaml"),
            "-o", str(output),
            "--locale", "fr",
        ])

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["paths"]["/api/users/{id}"]["get"]["summary"] == "Obtenir un utilisateur"

    def test_strict_fails_on_unresolved_refs(self, tmp_path):
        config = _write_config(tmp_path, "router: sample_app:router\n")
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(config), "-o", str(tmp_path / "out.json"), "--strict"])

        assert result.exit_code == 1
        assert "Unresolved schema references" in result.output

    def test_invalid_config(self, tmp_path):
        config = _write_config(tmp_path, "router: ghost_module_for_swag:router\n")
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(config)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_config_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0


class TestCliSchemas:
    def test_lists_component_schemas(self):
        runner = CliRunner()
        result = runner.invoke(main, ["schemas", str(FIXTURES / "swag.yaml")])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "Comment", "NotFound", "PaginationHeaders", "Parent", "User",
        ]

    def test_lists_unresolved_references(self, tmp_path):
        config = _write_config(tmp_path, "router: sample_app:router\n")
        runner = CliRunner()
        result = runner.invoke(main, ["schemas", str(config)])

        assert result.exit_code == 0, result.output
        assert "User (unresolved)" in result.output
        assert "NotFound (unresolved)" in result.output
