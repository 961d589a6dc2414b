"""
Credential record models.

Records are serialized with camelCase keys so the JSON file stays
readable by the rest of the platform.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Coordinator:
    """A phone number bound to exactly one project."""
    phone_number: str
    project_name: str
    created_at: str
    token: Optional[str] = None  # Set on login, overwritten by every login

    def with_token(self, token: str) -> "Coordinator":
        """Copy of this record carrying a fresh token and timestamp."""
        return replace(self, token=token, created_at=utc_now())

    def to_dict(self) -> dict:
        data = {
            "phoneNumber": self.phone_number,
            "projectName": self.project_name,
            "createdAt": self.created_at,
        }
        if self.token is not None:
            data["token"] = self.token
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinator":
        return cls(
            phone_number=data["phoneNumber"],
            project_name=data["projectName"],
            created_at=data.get("createdAt", utc_now()),
            token=data.get("token"),
        )


@dataclass(frozen=True)
class Member:
    """A phone number granted project access by a coordinator."""
    phone_number: str
    token: str
    coordinator_phone: str  # Reference only; members outlive their coordinator
    project_name: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "phoneNumber": self.phone_number,
            "token": self.token,
            "coordinatorPhone": self.coordinator_phone,
            "projectName": self.project_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        return cls(
            phone_number=data["phoneNumber"],
            token=data["token"],
            coordinator_phone=data["coordinatorPhone"],
            project_name=data["projectName"],
            created_at=data.get("createdAt", utc_now()),
        )
