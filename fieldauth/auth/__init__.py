"""
Authentication module.

Provides opaque credential generation and bearer header verification
shared by the server, coordinator and member flows.
"""

from .tokens import BearerAuthenticator, generate_token
from .phone import is_valid_phone, decode_project_name

__all__ = [
    "BearerAuthenticator",
    "generate_token",
    "is_valid_phone",
    "decode_project_name",
]
