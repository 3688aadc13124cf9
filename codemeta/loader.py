"""Load per-line ownership rows from a loc.csv table."""

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from codemeta.models import ROW_COLUMNS, Row

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """A row is missing a required field or carries a malformed value."""


def _parse_row(record: dict[str, str | None], line_no: int) -> Row:
    missing = [c for c in ROW_COLUMNS if not record.get(c)]
    if missing:
        raise ParseError(f"line {line_no}: missing {', '.join(missing)}")

    try:
        return Row(
            commit=record["commit"],
            file=record["file"],
            type=record["type"],
            line=record["line"],
            depth=record["depth"],
            length=record["length"],
            author=record["author"],
            date=f"{record['date']}T00:00:00{record['timezone']}",
            time=record["time"],
            timezone=record["timezone"],
            datetime=record["datetime"],
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ParseError(f"line {line_no}: invalid {fields}") from e


def load_rows(path: Path) -> list[Row]:
    """Read every row of a loc.csv file.

    Fails fast: the first bad row raises ParseError and nothing is returned.
    """
    rows: list[Row] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        # Header is line 1
        for line_no, record in enumerate(reader, start=2):
            rows.append(_parse_row(record, line_no))

    logger.info("Loaded %d rows from %s", len(rows), path)
    return rows


def write_rows(rows: list[Row], path: Path) -> Path:
    """Write rows in the loc.csv column layout."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=ROW_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow({
                "commit": row.commit,
                "file": row.file,
                "author": row.author,
                "date": row.date.date().isoformat(),
                "time": row.time,
                "timezone": row.timezone,
                "datetime": row.datetime.isoformat(),
                "line": row.line,
                "depth": row.depth,
                "length": row.length,
                "type": row.type,
            })

    logger.info("Wrote %d rows to %s", len(rows), path)
    return path
