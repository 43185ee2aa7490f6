from pathlib import Path

from click.testing import CliRunner

from gql_docgen.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliGenerate:
    def test_generate_capture_to_file(self, tmp_path):
        output_file = tmp_path / "docs" / "api.md"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.capture.yaml"),
            "-o", str(output_file),
            "--author", "ana",
        ])

        assert result.exit_code == 0, result.output
        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("# Pets API\n")
        assert "\n## Pets\n" in content
        assert "\n## Admin\n" in content
        assert "by ana.</small>" in content

    def test_generate_resolves_graphql_variables(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.capture.yaml"),
            "--request", "List pets",
        ])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("### List pets\n")
        assert '"owner": "ana"' in result.output
        assert '"limit": 10' in result.output
        assert "offset" not in result.output
        assert "<summary>GraphQL: Query</summary>" in result.output
        assert "Authorization:  Bearer s3cret" in result.output
        assert "<!--" not in result.output

    def test_generate_postman(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(FIXTURES / "sample.postman.json")])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("# Shop API\n")
        assert "### Search orders" in result.output
        assert "GraphQL: Mutation" in result.output

    def test_unknown_request(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.capture.yaml"),
            "--request", "Nope",
        ])

        assert result.exit_code != 0
        assert "No request named Nope" in result.output

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(path)])

        assert result.exit_code != 0
        assert "must contain a mapping" in result.output

    def test_malformed_postman_collection(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text('{"item": [{"name": "r", "request": {"method": null}}]}')
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(path), "--format", "postman"])

        assert result.exit_code == 1
        assert "Invalid Postman collection" in result.output

    def test_config_author(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "sample.capture.yaml"),
            "--request", "Ping",
            "--config", str(FIXTURES / "settings.yaml"),
        ], env={"GQL_DOCGEN_AUTHOR": ""})

        assert result.exit_code == 0, result.output
        assert "by docs-bot." in result.output
        assert "Generated " in result.output


class TestCliVariables:
    def test_resolve_payload(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "variables", str(FIXTURES / "variables.json"),
            "--env", "env-token=abc",
        ])

        assert result.exit_code == 0, result.output
        assert result.output == (
            "{\n"
            '  "token": "abc",\n'
            '  "signature": "[HMACDynamicValue is not yet supported.]"\n'
            "}\n"
        )

    def test_missing_variable(self):
        runner = CliRunner()
        result = runner.invoke(main, ["variables", str(FIXTURES / "variables.json")])

        assert result.exit_code == 0, result.output
        assert '"token": "null"' in result.output

    def test_bad_env_pair(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "variables", str(FIXTURES / "variables.json"),
            "--env", "novalue",
        ])

        assert result.exit_code == 2
