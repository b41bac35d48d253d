"""In-memory profile repository for testing."""

from typing import Optional

from tenantlink.domain.model import Profile
from tenantlink.domain.repository import ProfileRepository
from tenantlink.domain.value import UserId, UserRole

from .database import InMemorySession, yield_to_loop


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, session: InMemorySession) -> None:
        self.session = session
        self._profiles = session.database.profiles

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by user ID."""
        await yield_to_loop()
        return self._profiles.get(user_id)

    async def fill_role_if_empty(self, user_id: UserId, role: UserRole) -> bool:
        """Write the role only where none is recorded."""
        await yield_to_loop()
        profile = self._profiles.get(user_id)
        if profile is None or profile.role is not None:
            return False
        self.session.put(
            self._profiles, user_id, profile.model_copy(update={"role": role})
        )
        return True

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        self.session.put(self._profiles, profile.id, profile)
        return profile
