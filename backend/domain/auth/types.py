"""
Authentication data types
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class AuthenticatedPrincipal(BaseModel):
    """Identity verified for the current request. Never persisted."""
    id: str
    email: Optional[str] = None
    role: Optional[str] = None
    app_metadata: Dict[str, Any] = Field(default_factory=dict)
    user_metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user(cls, user: Dict[str, Any]) -> "AuthenticatedPrincipal":
        """Build from a Supabase user object"""
        return cls(
            id=str(user["id"]),
            email=user.get("email"),
            role=user.get("role"),
            app_metadata=user.get("app_metadata") or {},
            user_metadata=user.get("user_metadata") or {},
        )

    def has_role(self, role: str) -> bool:
        """
        Role claims are read from app_metadata (server-controlled), either as
        "role" or a "roles" list, and from the top-level role.
        """
        if self.app_metadata.get("role") == role:
            return True
        roles = self.app_metadata.get("roles")
        if isinstance(roles, list) and role in roles:
            return True
        return self.role == role
