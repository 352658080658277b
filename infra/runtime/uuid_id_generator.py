from __future__ import annotations

import uuid


class UuidIdGenerator:
    """Random UUID4 identifiers, the same shape the hosted database assigns."""

    def new_id(self) -> str:
        return str(uuid.uuid4())
