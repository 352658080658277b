"""Account data download as a two-section CSV: the profile, then every application."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from domain.models import DataExport

PROFILE_HEADER = ("Name", "Email", "Phone", "Skills")
APPLICATION_HEADER = ("Company", "Position", "Status", "Applied Date", "Notes", "URL")


def render_export_csv(export: DataExport) -> str:
    """
    Section titles and column headers are written bare; every value is quoted.

    A missing profile still produces its header and one empty row.
    """
    buffer = io.StringIO()
    plain = csv.writer(buffer, lineterminator="\n")
    quoted = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_ALL)

    profile = export.profile
    plain.writerow(["PROFILE"])
    plain.writerow(PROFILE_HEADER)
    if profile is None:
        quoted.writerow([""] * len(PROFILE_HEADER))
    else:
        quoted.writerow(
            [
                profile.name or "",
                profile.email or "",
                profile.phone or "",
                ", ".join(profile.skills),
            ]
        )
    buffer.write("\n")

    plain.writerow(["APPLICATIONS"])
    plain.writerow(APPLICATION_HEADER)
    for app in export.applications:
        quoted.writerow(
            [
                app.company,
                app.position,
                app.status.value,
                app.applied_date.isoformat() if app.applied_date else "",
                app.notes or "",
                app.url or "",
            ]
        )
    return buffer.getvalue()


def write_export_csv(export: DataExport, directory: str | Path = ".") -> Path:
    """Write the export as ``nexcareer_export_<date>.csv`` in ``directory``."""
    target = Path(directory) / export.file_name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_export_csv(export), encoding="utf-8")
    return target
