"""Response items shared by invite use cases."""

from pydantic import BaseModel

from tenantlink.domain.model import PropertySummary


class PropertyItem(BaseModel):
    """Property as shown to a redeemer."""

    property_id: str
    name: str
    address: str | None = None
    owner_display_name: str | None = None

    @classmethod
    def from_summary(cls, summary: PropertySummary | None) -> "PropertyItem | None":
        if summary is None:
            return None
        return cls(
            property_id=str(summary.id),
            name=summary.name,
            address=summary.address,
            owner_display_name=summary.owner_display_name,
        )
