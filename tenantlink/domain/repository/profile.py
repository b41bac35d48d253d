"""Profile repository interface."""

from abc import ABC, abstractmethod

from tenantlink.domain.model.profile import Profile
from tenantlink.domain.value import UserId, UserRole


class ProfileRepository(ABC):
    """Access to user profiles owned by the wider application."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Profile | None:
        """Find a profile by user ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def fill_role_if_empty(self, user_id: UserId, role: UserRole) -> bool:
        """Set the profile role only when none is recorded yet.

        Args:
            user_id: The user
            role: Role to record

        Returns:
            True if the role was written, False if one was already set or
            the profile doesn't exist
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass
