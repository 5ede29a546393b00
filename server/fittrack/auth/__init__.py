"""
Auth package for JWT authentication
"""

from .jwt_auth import (
    create_access_token,
    get_current_user,
    get_current_user_id,
    hash_password,
    verify_password,
    verify_token,
)

__all__ = [
    "create_access_token",
    "get_current_user",
    "get_current_user_id",
    "hash_password",
    "verify_password",
    "verify_token",
]
