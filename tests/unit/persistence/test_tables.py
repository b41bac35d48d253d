"""Unit tests for the invites table definition."""

from sqlalchemy import CheckConstraint

from tenantlink.config import MAX_USES_CEILING
from tenantlink.persistence.tables import invites_table


def _check(name: str) -> CheckConstraint:
    return next(
        c
        for c in invites_table.constraints
        if isinstance(c, CheckConstraint) and c.name == name
    )


class TestInvitesTable:
    """Constraints that must agree with each other and with settings."""

    def test_deleting_acceptor_profile_is_restricted(self):
        """SET NULL would break the paired acceptance check."""
        (fk,) = invites_table.c.accepted_by.foreign_keys

        assert fk.ondelete == "RESTRICT"
        assert "(accepted_at IS NULL) = (accepted_by IS NULL)" in str(
            _check("invite_acceptance_paired").sqltext
        )

    def test_max_uses_range_matches_settings_ceiling(self):
        sqltext = str(_check("invite_max_uses_range").sqltext)

        assert sqltext == f"max_uses BETWEEN 1 AND {MAX_USES_CEILING}"
