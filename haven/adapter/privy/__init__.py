"""Privy identity provider adapter."""

from .client import MockIdentityClient, PrivyIdentityClient

__all__ = ["PrivyIdentityClient", "MockIdentityClient"]
