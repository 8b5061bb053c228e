"""Smoke tests for CLI commands."""

import json

from click.testing import CliRunner

from er2code import __version__
from er2code.cli.main import cli


def test_cli_help():
    """Test that main CLI help works."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "--help"])
    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_generate_command_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", "--help"])
    assert result.exit_code == 0
    assert "--output-dir" in result.output


def test_info():
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "info"])
    assert result.exit_code == 0
    assert f"er2code version: {__version__}" in result.output
    assert "csharp" in result.output


def test_generate_to_stdout(blog_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", str(blog_file)])
    assert result.exit_code == 0
    assert "// Entities.cs" in result.output
    assert "public class User" in result.output
    assert "// AppDbContext.cs" in result.output
    assert "public DbSet<Post> Posts" in result.output


def test_generate_from_stdin(owned_diagram):
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", "-"], input=owned_diagram)
    assert result.exit_code == 0
    assert ".OwnsOne(e => e.UserProfile);" in result.output


def test_generate_to_directory(blog_file, tmp_path):
    output_dir = tmp_path / "generated"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "--env",
            "test",
            "generate",
            str(blog_file),
            "-o",
            str(output_dir),
            "--context-name",
            "BlogContext",
            "--namespace",
            "Blog.Data",
        ],
    )
    assert result.exit_code == 0

    entities = (output_dir / "Entities.cs").read_text(encoding="utf-8")
    context = (output_dir / "AppDbContext.cs").read_text(encoding="utf-8")
    assert entities.startswith("namespace Blog.Data;")
    assert "public class BlogContext : DbContext" in context


def test_generate_invalid_context_name(blog_file):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--env", "test", "generate", str(blog_file), "--context-name", "Bad Name"]
    )
    assert result.exit_code == 2


def test_generate_unresolved_reference(tmp_path):
    diagram = tmp_path / "broken.mmd"
    diagram.write_text("USER {\nint id PK\n}\nUSER ||--o{ GHOST : haunts\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", str(diagram)])
    assert result.exit_code == 1
    assert "Traceback" not in result.output


def test_generate_missing_file():
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", "/definitely/does/not/exist.mmd"])
    assert result.exit_code != 0


def test_inspect_table(join_table_diagram):
    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "inspect", "-"], input=join_table_diagram)
    assert result.exit_code == 0
    assert "POST_TAG" in result.output
    assert "join_table" in result.output


def test_inspect_json_output(blog_file, tmp_path):
    output = tmp_path / "schema.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--env", "test", "inspect", str(blog_file), "--output", str(output)]
    )
    assert result.exit_code == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert [e["name"] for e in data["entities"]] == ["USER", "POST"]
    assert data["relationships"][0]["label"] == "writes"


def test_invalid_config_file(tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("global:\n  log_level: LOUD\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "--config", str(config), "info"])
    assert result.exit_code == 1


def test_generate_uses_configured_output_dir(blog_file, tmp_path, monkeypatch):
    output_dir = tmp_path / "configured"
    monkeypatch.setenv("ER2CODE_CODEGEN_OUTPUT_DIR", str(output_dir))

    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", str(blog_file)])
    assert result.exit_code == 0
    assert "public class User" not in result.output
    assert "public class User" in (output_dir / "Entities.cs").read_text(encoding="utf-8")
    assert (output_dir / "AppDbContext.cs").exists()


def test_generate_stdout_overrides_configured_output_dir(blog_file, tmp_path, monkeypatch):
    output_dir = tmp_path / "configured"
    monkeypatch.setenv("ER2CODE_CODEGEN_OUTPUT_DIR", str(output_dir))

    runner = CliRunner()
    result = runner.invoke(cli, ["--env", "test", "generate", str(blog_file), "--stdout"])
    assert result.exit_code == 0
    assert "public class User" in result.output
    assert not output_dir.exists()
