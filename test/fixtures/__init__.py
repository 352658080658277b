"""Builders for domain entities and documents used across unit and integration tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from domain.models import (
    Application,
    ApplicationStatus,
    InterviewQuestion,
    InterviewType,
    PracticeSession,
    Profile,
)

# A Wednesday; the analytics week starts on Sunday 2025-03-09.
NOW = datetime(2025, 3, 12, 12, 0, tzinfo=timezone.utc)


def make_application(**overrides: Any) -> Application:
    values: dict[str, Any] = {
        "id": "app-1",
        "user_id": "u1",
        "company": "Acme",
        "position": "Engineer",
        "status": ApplicationStatus.SAVED,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Application(**values)


def make_profile(**overrides: Any) -> Profile:
    values: dict[str, Any] = {
        "id": "profile-1",
        "user_id": "u1",
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Profile(**values)


def make_session(**overrides: Any) -> PracticeSession:
    values: dict[str, Any] = {
        "id": "session-1",
        "user_id": "u1",
        "type": InterviewType.BEHAVIORAL,
        "questions": [InterviewQuestion(question=f"Question {i}?") for i in range(1, 6)],
        "created_at": NOW,
    }
    values.update(overrides)
    return PracticeSession(**values)


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def minimal_pdf(*lines: str) -> bytes:
    """A one-page PDF with each line drawn in Helvetica; xref offsets are exact."""
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for i, line in enumerate(lines):
        if i:
            ops.append("0 -16 Td")
        ops.append(f"({_pdf_escape(line)}) Tj")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode()
    return bytes(out)
