"""Tests for the public API."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from bibfield import (
    BibRecord,
    RecordFileError,
    read_jsonl,
    sanitize_records,
    sort_file,
    write_jsonl,
)
from bibfield.api import clean_links_file
from bibfield.audit import AuditLogger
from bibfield.config import LinkConfig


def _read_events(path: Path) -> list[dict]:
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


# ---------------------------------------------------------------------------
# read_jsonl / write_jsonl
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_read_jsonl(write_records: Callable[..., Path]) -> None:
    """Test records are read in order and blank lines skipped."""
    path = write_records(
        [
            {"entry_type": "article", "citation_key": "a", "fields": {"year": "2000"}},
            {"entry_type": "book", "fields": {}},
        ]
    )
    path.write_text(path.read_text() + "\n\n", encoding="utf-8")

    records = read_jsonl(path)

    assert [r.entry_type for r in records] == ["article", "book"]
    assert records[0].get_field("year") == "2000"


@pytest.mark.unit
def test_read_jsonl_missing_file(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        read_jsonl(tmp_path / "missing.jsonl")


@pytest.mark.unit
def test_read_jsonl_invalid_json(tmp_path: Path) -> None:
    """Test malformed JSON reports file and line."""
    path = tmp_path / "bad.jsonl"
    path.write_text('{"entry_type": "article"}\n{not json}\n', encoding="utf-8")

    with pytest.raises(RecordFileError) as exc_info:
        read_jsonl(path)

    assert exc_info.value.line == 2
    assert exc_info.value.file == str(path)
    assert "bad.jsonl:2" in str(exc_info.value)


@pytest.mark.unit
def test_read_jsonl_schema_violation(write_records: Callable[..., Path]) -> None:
    """Test records that do not match the schema are rejected."""
    path = write_records([{"fields": {"title": "no type"}}])

    with pytest.raises(RecordFileError, match="invalid record"):
        read_jsonl(path)


@pytest.mark.unit
def test_write_then_read(tmp_path: Path) -> None:
    """Test written records read back equal, creating parent directories."""
    records = [
        BibRecord("article", "k1", {"title": "Caf\u00e9", "year": "2001"}),
        BibRecord("misc", None, {}),
    ]
    path = tmp_path / "out" / "records.jsonl"

    assert write_jsonl(records, path) == 2
    assert read_jsonl(path) == records


# ---------------------------------------------------------------------------
# sanitize_records
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_sanitize_records(make_record: Callable[..., BibRecord]) -> None:
    """Test link fields are cleaned and other fields left alone."""
    records = [
        make_record(
            key="a",
            url="https://www.google.com/url?url=http%3A%2F%2Fexample.com%2Fpaper.pdf&sa=t",
            title="T",
        ),
        make_record(key="b", url="http://example.com/ok"),
        make_record(key="c"),
    ]

    cleaned = sanitize_records(records)

    assert cleaned[0].get_field("url") == "http://example.com/paper.pdf"
    assert cleaned[0].get_field("title") == "T"
    assert cleaned[1] is records[1]
    assert cleaned[2] is records[2]


@pytest.mark.unit
def test_sanitize_records_without_redirects(make_record: Callable[..., BibRecord]) -> None:
    """Test redirect unwrapping can be turned off."""
    url = "https://www.google.com/url?url=http%3A%2F%2Fexample.com&sa=t"

    cleaned = sanitize_records([make_record(url=url)], clean_redirects=False)

    assert cleaned[0].get_field("url") == "https://www.google.com/url?url=http://example.com&sa=t"


@pytest.mark.unit
def test_sanitize_records_logs_rewrites(
    make_record: Callable[..., BibRecord], tmp_path: Path
) -> None:
    """Test every changed value produces one link_rewritten event."""
    records = [
        make_record(key="a", url="doi:10.1000/xyz", pdf="http://example.com/a b"),
        make_record(key="b", url="http://example.com/"),
    ]
    log_path = tmp_path / "events.jsonl"

    with AuditLogger(run_id="r", log_path=log_path) as logger:
        sanitize_records(records, ["url", "pdf"], logger=logger)

    events = _read_events(log_path)
    assert [(e["rid"], e["data"]["field"]) for e in events] == [("a", "url"), ("a", "pdf")]
    assert events[0]["data"]["after"] == "https://doi.org/10.1000/xyz"


# ---------------------------------------------------------------------------
# sort_file / clean_links_file
# ---------------------------------------------------------------------------


@pytest.mark.integration
def test_sort_file_with_audit_log(write_records: Callable[..., Path], tmp_path: Path) -> None:
    """Test sort_file writes sorted output and a complete event log."""
    path = write_records(
        [
            {"entry_type": "article", "citation_key": "old", "fields": {"year": "1990"}},
            {"entry_type": "article", "citation_key": "new", "fields": {"year": "2020"}},
            {"entry_type": "article", "citation_key": "none", "fields": {}},
        ]
    )
    output = tmp_path / "sorted.jsonl"
    log_path = tmp_path / "events.jsonl"

    count = sort_file(path, output, "year", audit_log=log_path)

    assert count == 3
    assert [r.citation_key for r in read_jsonl(output)] == ["new", "old", "none"]

    events = _read_events(log_path)
    assert [e["event"] for e in events] == [
        "run_started",
        "stage_started",
        "stage_finished",
        "records_written",
        "run_finished",
    ]
    assert events[0]["data"]["parameters"]["sort_keys"] == ["year"]
    assert events[-1]["data"]["status"] == "success"
    assert len({e["run_id"] for e in events}) == 1


@pytest.mark.integration
def test_sort_file_failure_is_logged(write_records: Callable[..., Path], tmp_path: Path) -> None:
    """Test a comparison error is logged and re-raised."""
    path = write_records(
        [
            {"entry_type": "article", "fields": {"year": "in press"}},
            {"entry_type": "article", "fields": {"year": "2020"}},
        ]
    )
    log_path = tmp_path / "events.jsonl"

    with pytest.raises(ValueError):
        sort_file(path, tmp_path / "sorted.jsonl", "year", audit_log=log_path)

    events = _read_events(log_path)
    assert events[-2]["event"] == "error"
    assert events[-2]["stage"] == "sort"
    assert events[-1]["data"]["status"] == "failed"
    assert not (tmp_path / "sorted.jsonl").exists()


@pytest.mark.integration
def test_sort_file_null_and_float_years(write_records: Callable[..., Path], tmp_path: Path) -> None:
    """Test a null year sorts last and a float year matches its integer form."""
    path = write_records(
        [
            {"entry_type": "article", "citation_key": "null", "fields": {"year": None}},
            {"entry_type": "article", "citation_key": "float", "fields": {"year": 1999.0}},
            {"entry_type": "article", "citation_key": "text", "fields": {"year": "1999"}},
            {"entry_type": "article", "citation_key": "new", "fields": {"year": "2000"}},
        ]
    )
    output = tmp_path / "sorted.jsonl"

    records = read_jsonl(path)
    sort_file(path, output, "year")

    assert records[0].get_field("year") is None
    assert records[1].get_field("year") == records[2].get_field("year") == "1999"
    assert [r.citation_key for r in read_jsonl(output)] == ["new", "float", "text", "null"]


@pytest.mark.integration
def test_sort_file_without_log(write_records: Callable[..., Path], tmp_path: Path) -> None:
    """Test no log file is created unless requested."""
    path = write_records([{"entry_type": "book"}, {"entry_type": "article"}])

    sort_file(path, tmp_path / "sorted.jsonl", "entrytype")

    assert [r.entry_type for r in read_jsonl(tmp_path / "sorted.jsonl")] == ["article", "book"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["records.jsonl", "sorted.jsonl"]


@pytest.mark.integration
def test_clean_links_file(write_records: Callable[..., Path], tmp_path: Path) -> None:
    """Test clean_links_file rewrites configured fields only."""
    path = write_records(
        [
            {
                "entry_type": "article",
                "citation_key": "a",
                "fields": {"url": "\\url{doi:10.1000/xyz}", "doi": "10.1000/xyz"},
            }
        ]
    )
    output = tmp_path / "clean.jsonl"
    log_path = tmp_path / "events.jsonl"

    count = clean_links_file(path, output, LinkConfig(fields=["url"], audit_log=log_path))

    record = read_jsonl(output)[0]
    assert count == 1
    assert record.get_field("url") == "https://doi.org/10.1000/xyz"
    assert record.get_field("doi") == "10.1000/xyz"
    assert "link_rewritten" in [e["event"] for e in _read_events(log_path)]
