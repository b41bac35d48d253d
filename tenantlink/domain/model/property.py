"""Property collaborator records.

Properties are owned by the wider application. The invite engine reads
them to authorize invite creation and to describe the property to a
redeemer.
"""

from typing import Optional

from tenantlink.domain.model.common import DomainModel
from tenantlink.domain.value import PropertyId, UserId


class Property(DomainModel):
    """Property record as seen by the invite engine."""

    id: PropertyId
    owner_id: UserId
    name: str
    address: Optional[str] = None


class PropertySummary(DomainModel):
    """Redeemer-facing property descriptor.

    Safe to show to anyone holding a valid token: no owner id, no internal
    references beyond the property id.
    """

    id: PropertyId
    name: str
    address: Optional[str] = None
    owner_display_name: Optional[str] = None
