"""
Authentication Module
JWT identity, role guards and verification code hashing
"""

from campushub.auth.codes import hash_code, verify_code, generate_numeric_code
from campushub.auth.dependencies import (
    create_access_token,
    decode_access_token,
    get_current_user,
    get_optional_user,
    get_platform_admin,
    get_club_manager
)

__all__ = [
    "hash_code",
    "verify_code",
    "generate_numeric_code",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "get_platform_admin",
    "get_club_manager",
]
