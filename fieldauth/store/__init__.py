"""
Credential storage for coordinators and members.
"""

from .credentials import CredentialStore
from .models import Coordinator, Member, utc_now

__all__ = [
    "CredentialStore",
    "Coordinator",
    "Member",
    "utc_now",
]
