from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from .application import Application
from .profile import Profile


@dataclass(frozen=True)
class DataExport:
    """Everything a user can download from their account, newest applications first."""

    exported_on: date
    profile: Profile | None = None
    applications: Sequence[Application] = field(default_factory=tuple)

    @property
    def file_name(self) -> str:
        return f"nexcareer_export_{self.exported_on.isoformat()}.csv"
