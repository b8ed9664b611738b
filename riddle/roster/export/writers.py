"""CSV and JSON export of loaded records."""

from __future__ import annotations

import csv
import json
import time
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import TextIO

from ..models import Record

CSV_HEADER = ("ID", "Name", "Email", "Role", "TimeZone", "Status", "JobTitle")


class ExportFormat(Enum):
    """Supported export formats."""

    CSV = "csv"
    JSON = "json"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


def csv_row(record: Record) -> list[str]:
    """Flatten a record into the export columns."""
    status = "" if record.invitation_sent is None else str(record.invitation_sent).lower()
    return [
        record.id,
        record.name or "",
        record.email or "",
        record.role or "",
        record.timezone or "",
        status,
        record.job_title or "",
    ]


def write_csv(records: Iterable[Record], stream: TextIO) -> int:
    """Write records as CSV.

    Values containing a comma, quote or newline are quoted, with internal
    quotes doubled.

    Returns:
        Number of records written
    """
    writer = csv.writer(stream, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for record in records:
        writer.writerow(csv_row(record))
        count += 1
    return count


def write_json(records: Iterable[Record], stream: TextIO) -> int:
    """Write records as an indented JSON array of wire documents.

    Unknown fields are included, so the export can be decoded again.
    """
    documents = [record.encode() for record in records]
    json.dump(documents, stream, indent=2, ensure_ascii=False)
    stream.write("\n")
    return len(documents)


_WRITERS = {
    ExportFormat.CSV: write_csv,
    ExportFormat.JSON: write_json,
}


def export_records(
    records: Iterable[Record],
    fmt: ExportFormat,
    directory: Path,
    *,
    stem: str | None = None,
) -> tuple[Path, int]:
    """Export records to a new file in ``directory``.

    Existing files are never overwritten. With the default timestamped name a
    numeric suffix (``_1``, ``_2``, ...) is added until the name is free.

    Args:
        records: Records to export
        fmt: Output format
        directory: Target directory (created if missing)
        stem: File name without suffix (default ``roster_users_<epoch>``)

    Returns:
        (path written, number of records)

    Raises:
        FileExistsError: If an explicit ``stem`` names an existing file
    """
    directory.mkdir(parents=True, exist_ok=True)
    base = stem or f"roster_users_{int(time.time())}"
    attempt = 0
    while True:
        name = base if attempt == 0 else f"{base}_{attempt}"
        path = directory / f"{name}{fmt.suffix}"
        try:
            stream = path.open("x", encoding="utf-8", newline="")
        except FileExistsError:
            if stem is not None:
                raise
            attempt += 1
            continue
        with stream:
            count = _WRITERS[fmt](records, stream)
        return path, count
