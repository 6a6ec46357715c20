"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibfield.models import BibRecord  # noqa: E402


@pytest.fixture
def make_record() -> Callable[..., BibRecord]:
    """Factory for test records with minimal boilerplate.

    Keyword arguments other than entry_type and key become fields;
    None values are left unset.
    """

    def _factory(
        entry_type: str = "article",
        *,
        key: str | None = "key1",
        **fields: str | None,
    ) -> BibRecord:
        return BibRecord(
            entry_type=entry_type,
            citation_key=key,
            fields={name: value for name, value in fields.items() if value is not None},
        )

    return _factory


@pytest.fixture
def write_records(tmp_path: Path) -> Callable[..., Path]:
    """Write record dicts to a JSONL file under tmp_path and return its path."""
    import json

    def _write(records: list[dict], name: str = "records.jsonl") -> Path:
        path = tmp_path / name
        with path.open("w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record) + "\n")
        return path

    return _write
