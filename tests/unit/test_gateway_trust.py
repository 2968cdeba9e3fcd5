"""Unit tests for gateway-trust header checks and unverified claim decoding."""

import pytest
from jose import jwt

from src.us_gateway.auth.gateway_trust import (
    MalformedTokenError,
    Principal,
    decode_unverified_claims,
    extract_bearer_token,
    is_gateway_call,
    is_internal_call,
    principal_from_claims,
)
from tests.fakes import make_token


class TestHeaders:
    def test_internal_call_requires_exact_true(self) -> None:
        assert is_internal_call({"X-Internal-Call": "true"})
        assert not is_internal_call({"X-Internal-Call": "TRUE"})
        assert not is_internal_call({})

    def test_gateway_name_is_case_insensitive(self) -> None:
        headers = {"X-Internal-Call": "true", "X-Source-Service": "gateway"}
        assert is_gateway_call(headers)

    def test_missing_source_service(self) -> None:
        assert not is_gateway_call({"X-Internal-Call": "true"})

    def test_other_source_service(self) -> None:
        assert not is_gateway_call({"X-Internal-Call": "true", "X-Source-Service": "billing"})

    def test_source_without_internal_flag(self) -> None:
        assert not is_gateway_call({"X-Source-Service": "GATEWAY"})


class TestExtractBearerToken:
    def test_extracts_token(self) -> None:
        assert extract_bearer_token({"Authorization": "Bearer a.b.c"}) == "a.b.c"

    def test_two_part_token_accepted(self) -> None:
        assert extract_bearer_token({"Authorization": "Bearer a.b"}) == "a.b"

    def test_single_segment_rejected(self) -> None:
        assert extract_bearer_token({"Authorization": "Bearer abc"}) is None

    def test_non_bearer_scheme(self) -> None:
        assert extract_bearer_token({"Authorization": "Basic dXNlcjpwYXNz"}) is None

    def test_missing_header(self) -> None:
        assert extract_bearer_token({}) is None


class TestDecodeClaims:
    def test_signed_token_decoded_without_key(self) -> None:
        token = jwt.encode({"sub": "42", "roles": ["ADMIN"]}, "gateway-secret", algorithm="HS256")
        assert decode_unverified_claims(token) == {"sub": "42", "roles": ["ADMIN"]}

    def test_unsigned_two_part_token(self) -> None:
        assert decode_unverified_claims(make_token({"sub": "7"}))["sub"] == "7"

    def test_garbage_payload(self) -> None:
        with pytest.raises(MalformedTokenError):
            decode_unverified_claims("aGVhZGVy.!!!notbase64!!!")

    def test_non_object_payload(self) -> None:
        with pytest.raises(MalformedTokenError):
            decode_unverified_claims("aGVhZGVy.WzEsMl0")  # "[1,2]"


class TestPrincipalFromClaims:
    def test_roles_become_authorities(self) -> None:
        principal = principal_from_claims({"sub": "42", "roles": ["ADMIN"]})
        assert principal == Principal("42", frozenset({"ROLE_ADMIN"}))
        assert principal.has_role("ADMIN")
        assert not principal.has_role("USER")

    def test_missing_roles_means_no_authorities(self) -> None:
        assert principal_from_claims({"sub": "42"}).authorities == frozenset()

    def test_missing_sub(self) -> None:
        with pytest.raises(MalformedTokenError):
            principal_from_claims({"roles": ["USER"]})

    def test_roles_must_be_list(self) -> None:
        with pytest.raises(MalformedTokenError):
            principal_from_claims({"sub": "42", "roles": "ADMIN"})
