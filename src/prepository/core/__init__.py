"""Core utilities and configuration for Prepository.

This module contains:
- Configuration and settings management
- Domain error taxonomy
- Security utilities (password hashing, access tokens)
"""
from .config import Settings, get_settings
from .security import TokenClaims, TokenService, hash_password, verify_password

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Security - Password
    "hash_password",
    "verify_password",
    # Security - Tokens
    "TokenClaims",
    "TokenService",
]
