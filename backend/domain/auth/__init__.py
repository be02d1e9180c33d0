"""
Identity provider integration
"""

from domain.auth.identity_client import SupabaseIdentityClient
from domain.auth.types import AuthenticatedPrincipal

__all__ = [
    "AuthenticatedPrincipal",
    "SupabaseIdentityClient",
]
