"""
Supabase Auth client: resolves a bearer token to the user it belongs to
"""

import logging
from typing import Any, Optional
import httpx

from domain.auth.types import AuthenticatedPrincipal
from core.config import settings
from core.exceptions import AuthError

logger = logging.getLogger(__name__)


class SupabaseIdentityClient:
    """
    Verifies access tokens by asking Supabase for the token's user
    (GET /auth/v1/user).

    Unlike local JWT verification this also rejects tokens whose account was
    deleted or banned after the token was issued.
    """

    def __init__(
        self,
        url: str = None,
        service_key: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url if url is not None else settings.supabase_url).rstrip("/")
        self.service_key = service_key if service_key is not None else settings.supabase_service_role_key
        self.timeout = timeout or settings.auth_timeout

        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.service_key)

    def config_status(self) -> str:
        """Which settings are set, naming every environment variable checked for each"""
        return ", ".join(
            f"{' / '.join(settings.env_names(field))} {'SET' if value else 'NOT SET'}"
            for field, value in (("supabase_url", self.url), ("supabase_service_role_key", self.service_key))
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"apikey": self.service_key},
            )
        return self._client

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            body: Any = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            for key in ("msg", "message", "error_description", "error"):
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]
        return None

    async def get_user(self, token: str) -> AuthenticatedPrincipal:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthError: invalid_token when Supabase rejects the token,
                       authentication_error when Supabase cannot be asked
        """
        if not self.is_configured:
            logger.error(f"Supabase is not configured: {self.config_status()}")
            raise AuthError(
                "Supabase URL and Service Role Key must be configured",
                error_code="authentication_error",
            )

        try:
            client = await self._get_client()
            response = await client.get(
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase auth request failed: {e}")
            raise AuthError("Identity provider unavailable", error_code="authentication_error")

        # 4xx: the token itself was refused. 429 and 5xx: provider trouble.
        if 400 <= response.status_code < 500 and response.status_code != 429:
            raise AuthError(
                self._error_message(response) or "Invalid or expired token",
                error_code="invalid_token",
            )
        if response.is_error:
            logger.error(f"Supabase auth error: {response.status_code} - {response.text}")
            raise AuthError(
                self._error_message(response) or "Identity provider error",
                error_code="authentication_error",
            )

        try:
            user = response.json()
        except ValueError:
            raise AuthError("Malformed identity provider response", error_code="authentication_error")

        if not isinstance(user, dict) or not user.get("id"):
            raise AuthError("User not found", error_code="invalid_token")

        return AuthenticatedPrincipal.from_user(user)

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
