"""In-memory property repository for testing."""

from typing import Optional

from tenantlink.domain.model import Property, PropertySummary
from tenantlink.domain.repository import PropertyRepository
from tenantlink.domain.value import PropertyId, UserId

from .database import InMemorySession, yield_to_loop


class InMemoryPropertyRepository(PropertyRepository):
    """In-memory implementation of PropertyRepository for testing."""

    def __init__(self, session: InMemorySession) -> None:
        self.session = session
        self._properties = session.database.properties
        self._profiles = session.database.profiles

    async def find_by_id(self, property_id: PropertyId) -> Optional[Property]:
        """Find a property by ID."""
        await yield_to_loop()
        return self._properties.get(property_id)

    async def get_summary(self, property_id: PropertyId) -> Optional[PropertySummary]:
        """Build a property summary with the owner's display name."""
        await yield_to_loop()
        listing = self._properties.get(property_id)
        if listing is None:
            return None
        owner = self._profiles.get(listing.owner_id)
        return PropertySummary(
            id=listing.id,
            name=listing.name,
            address=listing.address,
            owner_display_name=owner.display_name if owner else None,
        )

    async def is_owned_by(self, property_id: PropertyId, user_id: UserId) -> bool:
        """Check property ownership."""
        await yield_to_loop()
        listing = self._properties.get(property_id)
        return listing is not None and listing.owner_id == user_id

    async def save(self, property: Property) -> Property:
        """Save a property (create or update)."""
        self.session.put(self._properties, property.id, property)
        return property
