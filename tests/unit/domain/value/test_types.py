"""Unit tests for value object validation."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from certis.domain.error import NotFoundError, ValidationError
from certis.domain.value import (
    DomainName,
    InvitationStatus,
    normalize_email,
    parse_invitation_token,
)


class TestNormalizeEmail:
    def test_lower_cases_and_strips(self):
        assert normalize_email("  Ada@Example.COM ") == "ada@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "two@@example.com"])
    def test_rejects_malformed(self, email):
        with pytest.raises(ValidationError):
            normalize_email(email)


class TestDomainName:
    def test_normalized_to_lower_case(self):
        assert DomainName("Acme.Example.COM").root == "acme.example.com"

    @pytest.mark.parametrize("domain", ["localhost", "-bad.com", "no_underscores.com"])
    def test_rejects_invalid(self, domain):
        with pytest.raises(PydanticValidationError):
            DomainName(domain)


class TestInvitationStatus:
    def test_only_pending_is_non_terminal(self):
        assert not InvitationStatus.PENDING.is_terminal
        assert InvitationStatus.ACCEPTED.is_terminal
        assert InvitationStatus.EXPIRED.is_terminal
        assert InvitationStatus.REVOKED.is_terminal


class TestParseInvitationToken:
    def test_accepts_issued_token_shape(self):
        assert parse_invitation_token("abc_DEF-123").root == "abc_DEF-123"

    @pytest.mark.parametrize("raw", ["", "x" * 300])
    def test_impossible_token_reads_as_not_found(self, raw):
        with pytest.raises(NotFoundError):
            parse_invitation_token(raw)
