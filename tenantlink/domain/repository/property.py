"""Property repository interface."""

from abc import ABC, abstractmethod

from tenantlink.domain.model.property import Property, PropertySummary
from tenantlink.domain.value import PropertyId, UserId


class PropertyRepository(ABC):
    """Read access to properties owned by the wider application."""

    @abstractmethod
    async def find_by_id(self, property_id: PropertyId) -> Property | None:
        """Find a property by ID.

        Args:
            property_id: The property's unique identifier

        Returns:
            The property if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_summary(self, property_id: PropertyId) -> PropertySummary | None:
        """Build the redeemer-facing descriptor of a property.

        Args:
            property_id: The property's unique identifier

        Returns:
            Summary with the owner's display name, None if the property is gone
        """
        pass

    @abstractmethod
    async def is_owned_by(self, property_id: PropertyId, user_id: UserId) -> bool:
        """Check property ownership.

        Args:
            property_id: The property
            user_id: The candidate owner

        Returns:
            True if the property exists and user_id owns it
        """
        pass

    @abstractmethod
    async def save(self, property: Property) -> Property:
        """Save a property (create or update).

        Args:
            property: The property to save

        Returns:
            The saved property
        """
        pass
