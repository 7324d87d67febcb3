"""Tests for CLI entry point."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from loguru import logger

from javaimport.__main__ import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


def test_cli_help(runner: CliRunner) -> None:
    """Test CLI help command."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Java import index generator" in result.output
    assert "scan" in result.output
    assert "pattern" in result.output


def test_cli_version(runner: CliRunner) -> None:
    """Test CLI version command."""
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output.lower()


def test_scan_command_help(runner: CliRunner) -> None:
    """Test scan command help text."""
    result = runner.invoke(cli, ["scan", "--help"])
    assert result.exit_code == 0
    assert "--classpath" in result.output
    assert "--sourcepath" in result.output
    assert "--exclude" in result.output
    assert "--include" in result.output


def test_pattern_command(runner: CliRunner) -> None:
    """Test pattern command prints both compiled patterns."""
    result = runner.invoke(cli, ["pattern", "-e", "java.lang,javax", "-i", "sun,sunw"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == r"exclude: ^(?:java(?:/lang/|x/)|.*\$[0-9]+\.class\Z)"
    assert lines[1] == "include: sun(?:w/|/)"


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_writes_json_lines(
    mock_configure: MagicMock,
    runner: CliRunner,
    make_jar: Callable[..., Path],
    class_bytes: Callable[..., bytes],
) -> None:
    """Test scan emits one JSON line per type."""
    jar = make_jar(
        {
            "java/lang/String.class": class_bytes("java/lang/String"),
            "com/acme/Widget.class": class_bytes("com/acme/Widget"),
        }
    )

    result = runner.invoke(cli, ["scan", "--cp", str(jar), "-e", "java"])

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [(r["package"], r["simpleName"]) for r in records] == [("com.acme", "Widget")]
    mock_configure.assert_called_once()


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_verbose_sets_debug(
    mock_configure: MagicMock, runner: CliRunner, tmp_path: Path
) -> None:
    """Test --verbose raises the log level to DEBUG."""
    result = runner.invoke(cli, ["scan", "--sp", str(tmp_path), "-v"])

    assert result.exit_code == 0
    assert mock_configure.call_args.kwargs == {"verbose": True}


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_missing_entry_still_succeeds(
    mock_configure: MagicMock, runner: CliRunner, tmp_path: Path
) -> None:
    """Test a failing classpath entry does not change the exit code."""
    warnings: list[str] = []
    handler_id = logger.add(warnings.append, level="WARNING", format="{message}")
    try:
        result = runner.invoke(cli, ["scan", "--cp", str(tmp_path / "missing.jar")])
    finally:
        logger.remove(handler_id)

    assert result.exit_code == 0
    assert any("1 of 1 entries could not be walked" in w for w in warnings)


def test_scan_command_invalid_config(runner: CliRunner, tmp_path: Path) -> None:
    """Test scan exits with an error on a bad config file."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("filter: [unclosed")

    result = runner.invoke(cli, ["scan", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Error" in result.output


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_reads_config(
    mock_configure: MagicMock,
    runner: CliRunner,
    tmp_path: Path,
    make_jar: Callable[..., Path],
    class_bytes: Callable[..., bytes],
) -> None:
    """Test classpath and filters can come from the config file."""
    jar = make_jar(
        {
            "java/lang/String.class": class_bytes("java/lang/String"),
            "org/demo/App.class": class_bytes("org/demo/App"),
        }
    )
    config_file = tmp_path / "javaimport.yaml"
    config_file.write_text(f"filter:\n  excludes: org\nscan:\n  classpath:\n    - {jar}\n")

    result = runner.invoke(cli, ["scan", "-c", str(config_file)])

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [r["simpleName"] for r in records] == ["String"]


@pytest.fixture
def two_jars(
    make_jar: Callable[..., Path], class_bytes: Callable[..., bytes]
) -> tuple[Path, Path]:
    """A jar named in the config file and one passed on the command line."""
    configured = make_jar({"org/demo/App.class": class_bytes("org/demo/App")}, "configured.jar")
    given = make_jar(
        {
            "java/lang/String.class": class_bytes("java/lang/String"),
            "org/demo/Tool.class": class_bytes("org/demo/Tool"),
        },
        "given.jar",
    )
    return configured, given


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_options_replace_config(
    mock_configure: MagicMock,
    runner: CliRunner,
    tmp_path: Path,
    two_jars: tuple[Path, Path],
) -> None:
    """Test command line options replace the matching config values."""
    configured, given = two_jars
    config_file = tmp_path / "javaimport.yaml"
    config_file.write_text(
        f"filter:\n  excludes: org\nscan:\n  classpath:\n    - {configured}\n"
    )

    result = runner.invoke(
        cli, ["scan", "-c", str(config_file), "-e", "java", "--cp", str(given)]
    )

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [r["simpleName"] for r in records] == ["Tool"]


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_keeps_config_for_omitted_options(
    mock_configure: MagicMock,
    runner: CliRunner,
    tmp_path: Path,
    two_jars: tuple[Path, Path],
) -> None:
    """Test options left off the command line fall back to the config file."""
    _, given = two_jars
    config_file = tmp_path / "javaimport.yaml"
    config_file.write_text("filter:\n  excludes: org\n")

    result = runner.invoke(cli, ["scan", "-c", str(config_file), "--cp", str(given)])

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [r["simpleName"] for r in records] == ["String"]


@patch("javaimport.utils.logging.configure_logging")
def test_scan_command_environment_classpath(
    mock_configure: MagicMock,
    runner: CliRunner,
    two_jars: tuple[Path, Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test a plain classpath string from the environment is scanned."""
    _, given = two_jars
    monkeypatch.setenv("JAVAIMPORT_SCAN__CLASSPATH", str(given))
    monkeypatch.setenv("JAVAIMPORT_FILTER__EXCLUDES", "java.lang,javax")

    result = runner.invoke(cli, ["scan"])

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [r["simpleName"] for r in records] == ["Tool"]


def test_scan_command_unparsable_environment(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test unparsable environment settings exit with an error message."""
    monkeypatch.setenv("JAVAIMPORT_LOGGING", "not json")

    result = runner.invoke(cli, ["scan"])

    assert result.exit_code == 1
    assert "Error: Invalid configuration in environment" in result.output


def test_scan_command_rejects_stdout_log_file(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test a log file on stdout is refused before anything is written."""
    monkeypatch.setenv("JAVAIMPORT_LOGGING__FILE", "/dev/stdout")

    result = runner.invoke(cli, ["scan"])

    assert result.exit_code == 1
    assert "reserved for the JSON-lines index" in result.output
