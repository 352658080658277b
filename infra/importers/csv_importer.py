"""Spreadsheet exports (CSV) to ``ImportRecord`` rows for ``ImportApplications``."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from types import MappingProxyType

from domain.models import ImportRecord

HEADER_SYNONYMS = MappingProxyType(
    {
        "company": "company",
        "company name": "company",
        "companyname": "company",
        "employer": "company",
        "organization": "company",
        "org": "company",
        "position": "position",
        "job title": "position",
        "jobtitle": "position",
        "title": "position",
        "role": "position",
        "job role": "position",
        "status": "status",
        "application status": "status",
        "state": "status",
        "stage": "status",
        "applied_date": "applied_date",
        "applieddate": "applied_date",
        "applied date": "applied_date",
        "date applied": "applied_date",
        "dateapplied": "applied_date",
        "date": "applied_date",
        "application date": "applied_date",
        "url": "url",
        "link": "url",
        "job url": "url",
        "joburl": "url",
        "job link": "url",
        "joblink": "url",
        "website": "url",
        "notes": "notes",
        "note": "notes",
        "comments": "notes",
        "comment": "notes",
        "description": "notes",
        "details": "notes",
    }
)


class CSVImportError(ValueError):
    """Raised when the CSV has no header row or cannot be decoded."""


def normalize_header(header: str) -> str:
    key = header.strip().lower()
    return HEADER_SYNONYMS.get(key, key)


def parse_csv_text(text: str) -> list[ImportRecord]:
    """
    Map each non-empty row to an ``ImportRecord``.

    Unknown columns are ignored; blank cells become ``None``. Values are
    passed through raw so the import use case owns validation.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if not reader.fieldnames:
        raise CSVImportError("CSV file has no header row")

    columns = {name: normalize_header(name) for name in reader.fieldnames if name}
    records: list[ImportRecord] = []
    for row in reader:
        mapped: dict[str, str] = {}
        for original, field in columns.items():
            value = (row.get(original) or "").strip()
            if value and field not in mapped:
                mapped[field] = value
        if not mapped:
            continue
        records.append(
            ImportRecord(
                company=mapped.get("company"),
                position=mapped.get("position"),
                status=mapped.get("status"),
                applied_date=mapped.get("applied_date"),
                notes=mapped.get("notes"),
                url=mapped.get("url"),
            )
        )
    return records


def read_csv_file(path: str) -> list[ImportRecord]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CSVImportError(f"Cannot decode {path} as UTF-8: {exc}") from exc
    return parse_csv_text(text)
