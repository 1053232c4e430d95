"""Unit tests for the bearer-token gate state machine."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from motomarket.api.auth import parse_bearer, resolve_identity
from motomarket.infra.jwt.jwt_token_codec import JWTTokenCodec
from motomarket.services._shared.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedError,
    UnauthenticatedError,
)
from motomarket.services._shared.identity import Identity

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


class TestParseBearer:
    @pytest.mark.parametrize("header", ["Bearer abc", "bearer abc", "BEARER   abc"])
    def test_accepts_bearer_shape(self, header):
        assert parse_bearer(header) == "abc"

    @pytest.mark.parametrize(
        "header", ["abc", "Basic abc", "Bearer", "Bearer a b", "Token abc"]
    )
    def test_rejects_other_shapes(self, header):
        with pytest.raises(MalformedError):
            parse_bearer(header)


class TestResolveIdentity:
    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header_is_unauthenticated(self, codec, header):
        with pytest.raises(UnauthenticatedError):
            resolve_identity(header, codec, NOW)

    def test_malformed_header_is_malformed(self, codec):
        with pytest.raises(MalformedError):
            resolve_identity("Token abc", codec, NOW)

    def test_expired_token_is_unauthenticated(self, codec):
        token = codec.issue(1, NOW - timedelta(hours=25))

        with pytest.raises(UnauthenticatedError) as excinfo:
            resolve_identity(f"Bearer {token}", codec, NOW)

        assert isinstance(excinfo.value.__cause__, ExpiredTokenError)

    def test_foreign_signature_is_unauthenticated(self, codec):
        token = JWTTokenCodec(secret="another-secret").issue(1, NOW)

        with pytest.raises(UnauthenticatedError) as excinfo:
            resolve_identity(f"Bearer {token}", codec, NOW)

        assert isinstance(excinfo.value.__cause__, InvalidSignatureError)

    def test_valid_token_yields_identity(self, codec):
        token = codec.issue(1, NOW)

        assert resolve_identity(f"Bearer {token}", codec, NOW) == Identity(subject_id=1)
