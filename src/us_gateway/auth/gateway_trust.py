"""Gateway-trust identity: derive a principal from an already-verified JWT.

SECURITY ASSUMPTION: the API gateway verifies every JWT signature and is the
only network path to this service. Here the token payload is only decoded,
never verified. Deploying this service where clients can reach it directly
lets anyone forge an identity by sending the two trust headers.

Protocol:
  1. X-Internal-Call must be exactly "true" and X-Source-Service must name
     the gateway (case-insensitive). Otherwise: no identity.
  2. Authorization must be "Bearer <token>" with >= 2 dot-separated parts.
  3. The middle segment is base64url-decoded to a JSON object of claims.
  4. sub → principal name; roles (default []) → "ROLE_<role>" authorities.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from jose.utils import base64url_decode

from config.settings import settings

INTERNAL_CALL_HEADER = "X-Internal-Call"
SOURCE_SERVICE_HEADER = "X-Source-Service"
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "
ROLE_PREFIX = "ROLE_"


class MalformedTokenError(ValueError):
    """Token present but its payload cannot be turned into a principal."""


@dataclass(frozen=True)
class Principal:
    name: str
    authorities: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return f"{ROLE_PREFIX}{role}" in self.authorities


def is_internal_call(headers: Mapping[str, str]) -> bool:
    return headers.get(INTERNAL_CALL_HEADER) == "true"


def is_gateway_call(headers: Mapping[str, str]) -> bool:
    source = headers.get(SOURCE_SERVICE_HEADER)
    return (
        is_internal_call(headers)
        and source is not None
        and source.strip().lower() == settings.GATEWAY_SERVICE_NAME.lower()
    )


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    auth_header = headers.get(AUTHORIZATION_HEADER)
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    token = auth_header[len(BEARER_PREFIX):].strip()
    if len(token.split(".")) < 2:
        return None
    return token


def decode_unverified_claims(token: str) -> dict:
    """Decode the claims segment. The signature is NOT checked."""
    try:
        payload = base64url_decode(token.split(".")[1].encode("ascii"))
        claims = json.loads(payload.decode("utf-8"))
    except (ValueError, UnicodeError) as exc:
        raise MalformedTokenError(f"Unreadable JWT payload: {exc}") from exc
    if not isinstance(claims, dict):
        raise MalformedTokenError("JWT payload is not a JSON object")
    return claims


def principal_from_claims(claims: Mapping[str, object]) -> Principal:
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise MalformedTokenError("JWT has no usable 'sub' claim")

    roles = claims.get("roles") or []
    if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
        raise MalformedTokenError("JWT 'roles' claim must be a list of strings")

    return Principal(
        name=subject,
        authorities=frozenset(f"{ROLE_PREFIX}{role}" for role in roles),
    )
