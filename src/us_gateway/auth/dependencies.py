"""FastAPI dependencies for authorization on top of the gateway-trust identity.

Usage in any protected router:
    from src.us_gateway.auth.dependencies import require_authenticated

    router = APIRouter(dependencies=[Depends(require_authenticated)])

    @router.delete("/{id}", dependencies=[Depends(require_role("ADMIN"))])
    async def delete(...): ...
"""

from collections.abc import Callable

from fastapi import Depends, Request

from src.us_common.errors import AuthenticationFailedError, AuthorizationDeniedError
from src.us_gateway.auth.gateway_trust import Principal, is_internal_call


def get_principal(request: Request) -> Principal | None:
    """Identity installed by GatewayAuthMiddleware, if any."""
    return getattr(request.state, "principal", None)


def require_authenticated(
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    """Raises 401 (AuthenticationFailedError) when the request carries no identity."""
    if principal is None:
        raise AuthenticationFailedError()
    return principal


def require_role(role: str) -> Callable[[Principal], Principal]:
    """Build a dependency that raises 403 unless the principal holds ROLE_<role>."""

    def _check(principal: Principal = Depends(require_authenticated)) -> Principal:
        if not principal.has_role(role):
            raise AuthorizationDeniedError(f"Access denied: role {role} required")
        return principal

    return _check


def require_internal_call(request: Request) -> None:
    """Service-to-service routes: X-Internal-Call: true or 403. No principal needed."""
    if not is_internal_call(request.headers):
        raise AuthorizationDeniedError("Internal endpoint: X-Internal-Call header required")
