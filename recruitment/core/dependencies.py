from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recruitment.core.logger_setup import setup_logger
from recruitment.core.security import Identity, Role, verify_token

logger = setup_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Authenticate the request from its ``Authorization: Bearer`` header.

    Raises:
        HTTPException: 401 when the header is missing or the token does not verify
    """
    if credentials is None or not credentials.credentials:
        logger.warning(f"Missing bearer token on {request.method} {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    identity = verify_token(credentials.credentials)
    if identity is None:
        logger.warning(f"Invalid or expired token on {request.method} {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    request.state.identity = identity
    return identity


def require_roles(*roles: Role):
    """Dependency factory: pass only identities whose role is in ``roles``."""
    allowed = tuple(roles)

    async def role_gate(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            logger.warning(
                f"Role {identity.role.value} denied; required one of {[r.value for r in allowed]}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Access denied. Insufficient permissions.",
                    "requiredRoles": [r.value for r in allowed],
                    "userRole": identity.role.value,
                },
            )
        return identity

    return role_gate


require_admin = require_roles(Role.ADMIN)
require_company = require_roles(Role.COMPANY)
require_candidate = require_roles(Role.CANDIDATE)
