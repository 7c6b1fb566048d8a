from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from winadmin.errors import InputError
from winadmin.models import CleanupEntry, UserRecord

logger = logging.getLogger(__name__)

USERNAME_COLUMN = "UserName"
USER_COLUMNS = (USERNAME_COLUMN, "FirstName", "LastName", "Department")


def _column_key(name: str) -> str:
    # "UserName", "username", "user_name" and "User Name" are the same column
    return name.replace("_", "").replace(" ", "").lower()


def read_rows(
    path: str | Path,
    required: set[str],
    columns: Iterable[str] = (),
) -> list[dict[str, str]]:
    """Read a CSV file into dict rows keyed by canonical column names.

    Headers matching one of *columns* or *required* (ignoring case, spaces
    and underscores) are renamed to that spelling; others are only stripped.
    Raises :class:`InputError` when the file cannot be read or a required
    column is missing; there is nothing to process without it.
    """
    path = Path(path)
    canonical = {_column_key(name): name for name in (*columns, *required)}

    def rename(header: str | None) -> str:
        header = (header or "").strip()
        return canonical.get(_column_key(header), header)

    try:
        # utf-8-sig: Excel and Export-Csv both like to write a BOM
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            headers = {rename(h) for h in reader.fieldnames or []}
            missing = required - headers
            if missing:
                raise InputError(f"{path}: missing column(s) {', '.join(sorted(missing))}")
            return [
                {rename(key): value for key, value in row.items()}
                for row in reader
            ]
    except OSError as exc:
        raise InputError(f"cannot read {path}: {exc}") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise InputError(f"cannot parse {path}: {exc}") from exc


def load_user_records(path: str | Path) -> list[UserRecord]:
    records: list[UserRecord] = []
    rows = read_rows(path, {USERNAME_COLUMN}, columns=USER_COLUMNS)
    for line_no, row in enumerate(rows, start=2):
        record = UserRecord.model_validate(row)
        if not record.username:
            logger.warning("Skipping row %d of %s: empty %s", line_no, path, USERNAME_COLUMN)
            continue
        records.append(record)
    return records


def load_cleanup_entries(path: str | Path) -> list[CleanupEntry]:
    return [CleanupEntry.model_validate(row) for row in read_rows(path, {USERNAME_COLUMN})]
