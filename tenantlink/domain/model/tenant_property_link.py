"""Tenant-property link entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from tenantlink.domain.model.common import DomainModel
from tenantlink.domain.value import InviteId, LinkId, PropertyId, UserId
from tenantlink.util.time import utcnow


class TenantPropertyLink(DomainModel):
    """Grants a tenant ongoing access to a property.

    Created only by invite acceptance; (tenant_id, property_id) is unique.
    Deactivation belongs to the wider application, not to this engine.
    """

    id: LinkId
    tenant_id: UserId
    property_id: PropertyId
    landlord_id: UserId  # Property owner at acceptance time
    invite_id: Optional[InviteId] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
