"""Tests for CLI module."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from bibfield.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


@pytest.fixture
def records_file(write_records: Callable[..., Path]) -> Path:
    """Small record file with years, authors and links."""
    return write_records(
        [
            {
                "entry_type": "article",
                "citation_key": "smith1999",
                "fields": {"author": "John Smith", "year": "1999", "url": "doi:10.1000/a"},
            },
            {
                "entry_type": "book",
                "citation_key": "adams2010",
                "fields": {"author": "Adams, Zoe", "year": "2010"},
            },
        ]
    )


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "bibfield" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "sort" in result.output
    assert "clean-links" in result.output
    assert "sanitize-url" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# sort command
# ---------------------------------------------------------------------------


@pytest.mark.integration
def test_sort_command(runner: CliRunner, records_file: Path, tmp_path: Path) -> None:
    """Test sort writes records ordered by the requested keys."""
    output = tmp_path / "sorted.jsonl"

    result = runner.invoke(cli, ["sort", str(records_file), "-o", str(output), "--by", "author"])

    assert result.exit_code == 0, result.output
    assert "Successfully wrote 2 records" in result.output
    keys = [json.loads(line)["citation_key"] for line in output.read_text().splitlines()]
    assert keys == ["adams2010", "smith1999"]


@pytest.mark.integration
def test_sort_command_reversed_with_log(
    runner: CliRunner, records_file: Path, tmp_path: Path
) -> None:
    """Test a reversed key and an audit log path."""
    output = tmp_path / "sorted.jsonl"
    log_path = tmp_path / "logs" / "events.jsonl"

    result = runner.invoke(
        cli,
        ["sort", str(records_file), "-o", str(output), "--by", "-year", "--log", str(log_path), "-v"],
    )

    assert result.exit_code == 0, result.output
    keys = [json.loads(line)["citation_key"] for line in output.read_text().splitlines()]
    assert keys == ["smith1999", "adams2010"]
    assert log_path.exists()


@pytest.mark.unit
def test_sort_command_bad_keys(runner: CliRunner, records_file: Path, tmp_path: Path) -> None:
    """Test an invalid sort specification exits with an error."""
    result = runner.invoke(
        cli, ["sort", str(records_file), "-o", str(tmp_path / "o.jsonl"), "--by", "year:up"]
    )

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.unit
def test_sort_command_missing_input(runner: CliRunner, tmp_path: Path) -> None:
    """Test a missing input file is rejected by click."""
    result = runner.invoke(cli, ["sort", str(tmp_path / "nope.jsonl"), "-o", "x.jsonl"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# clean-links command
# ---------------------------------------------------------------------------


@pytest.mark.integration
def test_clean_links_command(runner: CliRunner, records_file: Path, tmp_path: Path) -> None:
    """Test clean-links resolves DOI links in the url field."""
    output = tmp_path / "clean.jsonl"

    result = runner.invoke(cli, ["clean-links", str(records_file), "-o", str(output)])

    assert result.exit_code == 0, result.output
    first = json.loads(output.read_text().splitlines()[0])
    assert first["fields"]["url"] == "https://doi.org/10.1000/a"


# ---------------------------------------------------------------------------
# sanitize-url command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_sanitize_url_command(runner: CliRunner) -> None:
    """Test each link is printed sanitized on its own line."""
    result = runner.invoke(
        cli,
        [
            "sanitize-url",
            "doi:10.1000/xyz",
            "https://www.google.com/url?url=http%3A%2F%2Fexample.com%2Fpaper.pdf&sa=t",
        ],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "https://doi.org/10.1000/xyz",
        "http://example.com/paper.pdf",
    ]


@pytest.mark.unit
def test_sanitize_url_requires_links(runner: CliRunner) -> None:
    """Test at least one link is required."""
    result = runner.invoke(cli, ["sanitize-url"])

    assert result.exit_code != 0
