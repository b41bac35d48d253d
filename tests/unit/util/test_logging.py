"""Unit tests for log redaction."""

from tenantlink.util.logging import redact_token


class TestRedactToken:
    """Tests for redact_token."""

    def test_keeps_only_ends(self):
        assert redact_token("aB3dE5gH7jK9") == "aB…K9"

    def test_strips_whitespace_first(self):
        assert redact_token("  aB3dE5gH7jK9\n") == "aB…K9"

    def test_short_or_missing_values_fully_hidden(self):
        assert redact_token("abc") == "…"
        assert redact_token("") == "…"
        assert redact_token(None) == "…"
