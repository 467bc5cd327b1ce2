"""Supabase-backed profile repository."""

from dataclasses import dataclass

from supabase import Client

from zola_studio.domain.users import Profile
from zola_studio.services.session_projector import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("profiles")
            .select("username, avatar_url")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(username=row.get("username"), avatar_url=row.get("avatar_url"))
