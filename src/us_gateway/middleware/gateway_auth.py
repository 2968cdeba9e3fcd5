"""Gateway-trust authentication middleware.

Runs once per request before routing and leaves the outcome on
request.state.principal:
  - Principal(name, authorities) for a gateway call with a readable token
  - None otherwise (non-gateway call, missing/malformed token, bad payload)

It never rejects a request. Route dependencies in us_gateway/auth/dependencies.py
decide whether a missing identity or a missing role is acceptable.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.us_gateway.auth.gateway_trust import (
    Principal,
    decode_unverified_claims,
    extract_bearer_token,
    is_gateway_call,
    principal_from_claims,
)

logger = logging.getLogger("us.gateway")


def resolve_principal(request: Request) -> Principal | None:
    headers = request.headers
    if not is_gateway_call(headers):
        logger.debug("Non-gateway call to %s, no identity established", request.url.path)
        return None

    logger.info("Request received from gateway, processing JWT payload")
    token = extract_bearer_token(headers)
    if token is None:
        logger.warning("No usable Bearer token in gateway request to %s", request.url.path)
        return None

    principal = principal_from_claims(decode_unverified_claims(token))
    logger.info(
        "Identity set for %s with authorities %s",
        principal.name,
        sorted(principal.authorities),
    )
    return principal


class GatewayAuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.principal = None
        try:
            request.state.principal = resolve_principal(request)
        except Exception as exc:  # noqa: BLE001  any failure means "no identity"
            request.state.principal = None
            logger.error("Authentication processing failed: %s", exc, exc_info=True)
        return await call_next(request)
