"""Profile collaborator record."""

from typing import Optional

from tenantlink.domain.model.common import DomainModel
from tenantlink.domain.value import UserId, UserRole


class Profile(DomainModel):
    """User profile fields the invite engine reads or fills."""

    id: UserId
    display_name: Optional[str] = None
    role: Optional[UserRole] = None
