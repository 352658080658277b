from __future__ import annotations

from domain.models import NewProfile, Profile, ProfileUpdate
from infra.persistence.mappers import new_profile_to_row, profile_fields_to_row, profile_from_row

from ._base import SupabaseTableAdapter


class SupabaseProfileRepository(SupabaseTableAdapter):
    """``ProfileRepositoryPort`` over the hosted ``profiles`` table (unique on ``user_id``)."""

    table_name = "profiles"

    async def find_by_user_id(self, user_id: str) -> Profile | None:
        rows = await self._read(
            self._table().select("*").eq("user_id", user_id).limit(1),
            "find_by_user_id",
        )
        return profile_from_row(rows[0]) if rows else None

    async def create(self, profile: NewProfile) -> Profile:
        rows = await self._write(
            self._table().insert(new_profile_to_row(profile)),
            "Failed to create profile",
        )
        return profile_from_row(rows[0])

    async def update(self, user_id: str, update: ProfileUpdate) -> Profile:
        rows = await self._write(
            self._table().update(profile_fields_to_row(update.provided())).eq("user_id", user_id),
            "Failed to update profile",
        )
        return profile_from_row(rows[0])

    async def upsert(self, profile: NewProfile) -> Profile:
        rows = await self._write(
            self._table().upsert(new_profile_to_row(profile), on_conflict="user_id"),
            "Failed to upsert profile",
        )
        return profile_from_row(rows[0])
