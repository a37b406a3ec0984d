"""
Unit tests for ApprovalTokenManager and the jose signer.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.services.approval_token_manager import (
    ApprovalTokenManager,
    hash_token_id,
)
from src.domain.exceptions.provider_error import ProviderConfigurationError
from src.domain.exceptions.token_error import (
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenInvalidError,
    TokenProposalMismatchError,
)
from src.infrastructure.security.jose_signer import JoseTokenSigner


class TestApprovalTokenManager:
    """Test cases for ApprovalTokenManager."""

    @pytest.fixture
    def manager(self, token_signer, mock_used_token_repository):
        """Token manager with a 30 day lifetime."""
        return ApprovalTokenManager(
            signer=token_signer,
            used_tokens=mock_used_token_repository,
            ttl_days=30,
        )

    def test_issue_and_verify(self, manager):
        """An issued token verifies back to its claims."""
        proposal_id = uuid4()

        issued = manager.issue(proposal_id, version=2)
        claims = manager.verify(issued.token)

        assert claims == issued.claims
        assert claims.proposal_id == proposal_id
        assert claims.version == 2
        assert claims.expires_at - claims.issued_at == timedelta(days=30)

    def test_each_issue_is_unique(self, manager):
        """Two links for the same proposal have different token ids."""
        proposal_id = uuid4()

        first = manager.issue(proposal_id)
        second = manager.issue(proposal_id)

        assert first.token != second.token
        assert first.claims.token_hash != second.claims.token_hash

    def test_expired_token(self, token_signer, mock_used_token_repository):
        """Tokens past their expiry are rejected as expired."""
        issued_long_ago = ApprovalTokenManager(
            signer=token_signer,
            used_tokens=mock_used_token_repository,
            ttl_days=30,
            clock=lambda: datetime.now(timezone.utc) - timedelta(days=31),
        )
        token = issued_long_ago.issue(uuid4()).token

        with pytest.raises(TokenExpiredError):
            issued_long_ago.verify(token)

    def test_tampered_token(self, manager):
        """Any change to the token breaks the signature."""
        token = manager.issue(uuid4()).token
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(TokenInvalidError):
            manager.verify(tampered)

    def test_token_signed_with_other_secret(self, manager, mock_used_token_repository):
        """Tokens from another signer are rejected."""
        other = ApprovalTokenManager(
            signer=JoseTokenSigner("another-secret"),
            used_tokens=mock_used_token_repository,
        )
        token = other.issue(uuid4()).token

        with pytest.raises(TokenInvalidError):
            manager.verify(token)

    def test_missing_token(self, manager):
        """An empty token is invalid."""
        with pytest.raises(TokenInvalidError):
            manager.verify("")

    def test_malformed_claims(self, token_signer, manager):
        """Correctly signed tokens without the expected claims are invalid."""
        token = token_signer.sign({"pid": "not-a-uuid", "jti": "x", "iat": 0, "exp": 9999999999})

        with pytest.raises(TokenInvalidError):
            manager.verify(token)

    def test_verify_for_other_proposal(self, manager):
        """A token bound to one proposal cannot be used for another."""
        token = manager.issue(uuid4()).token

        with pytest.raises(TokenProposalMismatchError):
            manager.verify_for_proposal(token, uuid4())

    @pytest.mark.asyncio
    async def test_is_used_checks_hash(self, manager, mock_used_token_repository):
        """Consumption is looked up by the hashed token id."""
        # Arrange
        issued = manager.issue(uuid4())
        mock_used_token_repository.exists = AsyncMock(return_value=True)

        # Act
        result = await manager.is_used(issued.claims)

        # Assert
        assert result is True
        mock_used_token_repository.exists.assert_called_once_with(
            issued.claims.proposal_id, hash_token_id(issued.claims.token_id)
        )

    @pytest.mark.asyncio
    async def test_mark_used_replay(self, manager, mock_used_token_repository):
        """A second consumption surfaces the repository's replay error."""
        # Arrange
        issued = manager.issue(uuid4())
        mock_used_token_repository.add = AsyncMock(
            side_effect=[None, TokenAlreadyUsedError(issued.claims.proposal_id)]
        )

        # Act
        await manager.mark_used(issued.claims)

        # Assert
        with pytest.raises(TokenAlreadyUsedError):
            await manager.mark_used(issued.claims)


class TestJoseTokenSigner:
    """Test cases for JoseTokenSigner."""

    def test_requires_secret(self):
        """An empty secret is a configuration error."""
        with pytest.raises(ProviderConfigurationError):
            JoseTokenSigner("")

    def test_round_trip(self, token_signer):
        """Signed claims verify unchanged."""
        claims = {"pid": "abc", "exp": int(datetime.now(timezone.utc).timestamp()) + 60}

        assert token_signer.verify(token_signer.sign(claims)) == claims

    def test_garbage_token(self, token_signer):
        """Non-JWT input is invalid."""
        with pytest.raises(TokenInvalidError):
            token_signer.verify("not.a.token")
