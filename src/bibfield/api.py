"""Public API for bibfield.

This module provides the high-level entry points:
- Reading and writing JSONL record files
- Sorting record files by one or more fields
- Cleaning link fields of records
"""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import jsonschema

from bibfield.audit import AuditLogger, generate_run_id
from bibfield.config import LinkConfig, SortConfig
from bibfield.links import clean_search_redirect, sanitize_url
from bibfield.models import BibRecord, validate_record_dict
from bibfield.sorting import SortKey, sort_records

__all__ = [
    "RecordFileError",
    "read_jsonl",
    "write_jsonl",
    "sort_file",
    "sanitize_records",
    "clean_links_file",
]


class RecordFileError(Exception):
    """Raised when a record file cannot be read."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize record file error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        line : int | None, optional
            1-based line number where error occurred.
        """
        super().__init__(message)
        self.file = file
        self.line = line


def read_jsonl(path: str | Path) -> list[BibRecord]:
    """Read records from a JSONL file.

    Parameters
    ----------
    path : str | Path
        JSONL file, one record object per line. Blank lines are skipped.

    Returns
    -------
    list[BibRecord]
        Records in file order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    RecordFileError
        If a line is not valid JSON or does not match the record schema.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records: list[BibRecord] = []
    with file_path.open(encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
                validate_record_dict(data)
            except json.JSONDecodeError as e:
                raise RecordFileError(
                    f"{file_path.name}:{line_no}: invalid JSON: {e.msg}",
                    file=str(file_path),
                    line=line_no,
                ) from e
            except jsonschema.ValidationError as e:
                raise RecordFileError(
                    f"{file_path.name}:{line_no}: invalid record: {e.message}",
                    file=str(file_path),
                    line=line_no,
                ) from e
            records.append(BibRecord.from_dict(data))

    return records


def write_jsonl(records: Iterable[BibRecord], path: str | Path) -> int:
    """Write records to a JSONL file.

    Parameters
    ----------
    records : Iterable[BibRecord]
        Records to write.
    path : str | Path
        Output file. Parent directories are created if needed.

    Returns
    -------
    int
        Number of records written.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with output_path.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False))
            f.write("\n")
            count += 1
    return count


def sanitize_records(
    records: Iterable[BibRecord],
    fields: Sequence[str] = ("url",),
    *,
    clean_redirects: bool = True,
    logger: AuditLogger | None = None,
) -> list[BibRecord]:
    """Clean link fields of records.

    Parameters
    ----------
    records : Iterable[BibRecord]
        Input records.
    fields : Sequence[str], optional
        Fields holding links, by default ("url",).
    clean_redirects : bool, optional
        Unwrap search-engine redirects before sanitizing, by default True.
    logger : AuditLogger | None, optional
        If given, a link_rewritten event is logged for every changed value.

    Returns
    -------
    list[BibRecord]
        New records; unchanged records are returned as-is.
    """
    cleaned: list[BibRecord] = []
    for record in records:
        for name in fields:
            before = record.get_field(name)
            if before is None:
                continue
            after = clean_search_redirect(before) if clean_redirects else before
            after = sanitize_url(after)
            if after != before:
                record = record.with_field(name, after)
                if logger is not None:
                    logger.link_rewritten(record.citation_key, name.lower(), before, after)
        cleaned.append(record)
    return cleaned


def sort_file(
    input_path: str | Path,
    output_path: str | Path,
    sort_keys: Sequence[SortKey] | str = "author",
    *,
    audit_log: str | Path | None = None,
) -> int:
    """Sort a JSONL record file.

    Parameters
    ----------
    input_path : str | Path
        Input JSONL file.
    output_path : str | Path
        Output JSONL file.
    sort_keys : Sequence[SortKey] | str, optional
        Sort keys or specification string, by default "author".
    audit_log : str | Path | None, optional
        JSONL audit log path.

    Returns
    -------
    int
        Number of records written.

    Examples
    --------
        >>> from bibfield import sort_file
        >>> sort_file("refs.jsonl", "sorted.jsonl", "year,author")
    """
    keys = sort_keys if isinstance(sort_keys, str) else list(sort_keys)
    config = SortConfig(sort_keys=keys, audit_log=audit_log)

    with _audit_run(config.audit_log, config.to_dict()) as logger:
        records = read_jsonl(input_path)
        with _stage(logger, "sort", len(records)):
            ordered = sort_records(records, config.sort_keys)
        count = write_jsonl(ordered, output_path)
        if logger is not None:
            logger.set_stage(None)
            logger.event("records_written", data={"path": str(output_path), "count": count})
        return count


def clean_links_file(
    input_path: str | Path,
    output_path: str | Path,
    config: LinkConfig | None = None,
) -> int:
    """Clean link fields of a JSONL record file.

    Parameters
    ----------
    input_path : str | Path
        Input JSONL file.
    output_path : str | Path
        Output JSONL file.
    config : LinkConfig | None, optional
        Link fields and options, by default LinkConfig().

    Returns
    -------
    int
        Number of records written.
    """
    config = config or LinkConfig()

    with _audit_run(config.audit_log, config.to_dict()) as logger:
        records = read_jsonl(input_path)
        with _stage(logger, "clean_links", len(records)):
            cleaned = sanitize_records(
                records,
                config.fields,
                clean_redirects=config.clean_redirects,
                logger=logger,
            )
        count = write_jsonl(cleaned, output_path)
        if logger is not None:
            logger.set_stage(None)
            logger.event("records_written", data={"path": str(output_path), "count": count})
        return count


@contextmanager
def _audit_run(log_path: Path | None, parameters: dict) -> Iterator[AuditLogger | None]:
    """Open an audit log for one run, or yield None when logging is off."""
    if log_path is None:
        yield None
        return

    start = time.perf_counter()
    with AuditLogger(run_id=generate_run_id(), log_path=log_path) as logger:
        logger.run_started(command=list(sys.argv), parameters=parameters)
        try:
            yield logger
        except Exception as e:
            logger.error(type(e).__name__, str(e))
            logger.run_finished("failed", time.perf_counter() - start)
            raise
        logger.run_finished("success", time.perf_counter() - start)


@contextmanager
def _stage(logger: AuditLogger | None, stage: str, records_in: int) -> Iterator[None]:
    if logger is None:
        yield
        return

    start = time.perf_counter()
    logger.stage_started(stage, expected_records=records_in)
    yield
    logger.stage_finished(
        stage,
        time.perf_counter() - start,
        counters={"records_in": records_in},
    )
