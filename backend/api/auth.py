"""
Credential gate: bearer token → authenticated principal
"""

import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_identity_client
from domain.auth.identity_client import SupabaseIdentityClient
from domain.auth.types import AuthenticatedPrincipal
from core.config import settings
from core.exceptions import AuthError, ForbiddenError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported with our own error envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_client: SupabaseIdentityClient = Depends(get_identity_client),
) -> AuthenticatedPrincipal:
    """
    Resolve the caller from `Authorization: Bearer <token>`.

    Runs before the request body is validated, so unauthenticated requests
    never reach a handler or an external provider.
    """
    token = credentials.credentials.strip() if credentials else ""
    if not token:
        raise AuthError(error_code="missing_bearer_token")

    principal = await identity_client.get_user(token)
    request.state.principal = principal
    return principal


async def require_admin(
    principal: AuthenticatedPrincipal = Depends(require_user),
) -> AuthenticatedPrincipal:
    """require_user, plus the configured admin role"""
    if not principal.has_role(settings.admin_role):
        logger.warning(f"Admin endpoint refused for user {principal.id}")
        raise ForbiddenError()
    return principal
