"""
Credential storage.

Stores coordinators and members in a JSON file for simplicity.
Can be replaced with a database as long as the method contract holds.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional, List

from .models import Coordinator, Member

logger = logging.getLogger(__name__)

COORDINATORS = "coordinators"
MEMBERS = "members"


class CredentialStore:
    """
    JSON-based credential storage.

    Coordinators and members are each indexed by phone number (primary key).
    Every public method runs under a re-entrant lock, so a single call never
    observes a half-written file.
    """

    def __init__(self, file_path: Path):
        """
        Initialize credential store.

        Args:
            file_path: Path to the credentials JSON file
        """
        self.file_path = Path(file_path)
        self._lock = threading.RLock()
        self._ensure_file()

    def _ensure_file(self):
        """Ensure the storage file and directory exist."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists() or self.file_path.stat().st_size == 0:
            self._save_all({COORDINATORS: {}, MEMBERS: {}})

    def _load_all(self) -> dict:
        """Load all records from file."""
        with open(self.file_path, "r") as f:
            data = json.load(f)
        data.setdefault(COORDINATORS, {})
        data.setdefault(MEMBERS, {})
        return data

    def _save_all(self, data: dict):
        """Save all records to file."""
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.file_path)

    # Coordinators

    def find_coordinator_by_phone(self, phone_number: str) -> Optional[Coordinator]:
        """Get the coordinator bound to a phone number."""
        with self._lock:
            record = self._load_all()[COORDINATORS].get(phone_number)
        return Coordinator.from_dict(record) if record else None

    def find_coordinator_by_project(self, project_name: str) -> Optional[Coordinator]:
        """Get the coordinator currently bound to a project name."""
        with self._lock:
            records = self._load_all()[COORDINATORS]
        for record in records.values():
            if record.get("projectName") == project_name:
                return Coordinator.from_dict(record)
        return None

    def find_project_by_coordinator_phone(self, phone_number: str) -> Optional[str]:
        """Get the project name bound to a coordinator phone number."""
        coordinator = self.find_coordinator_by_phone(phone_number)
        return coordinator.project_name if coordinator else None

    def save_coordinator(self, coordinator: Coordinator) -> Coordinator:
        """
        Create or replace a coordinator record.

        Raises:
            ValueError: If the record has no phone number
        """
        if not coordinator.phone_number:
            raise ValueError("Coordinator phone number is required")

        with self._lock:
            data = self._load_all()
            data[COORDINATORS][coordinator.phone_number] = coordinator.to_dict()
            self._save_all(data)

        logger.debug(f"Saved coordinator: {coordinator.phone_number}")
        return coordinator

    def delete_coordinator_by_phone(self, phone_number: str) -> bool:
        """
        Delete a coordinator record.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            data = self._load_all()
            if phone_number not in data[COORDINATORS]:
                return False
            del data[COORDINATORS][phone_number]
            self._save_all(data)

        logger.debug(f"Deleted coordinator: {phone_number}")
        return True

    def list_coordinators(self) -> List[Coordinator]:
        """List all coordinators."""
        with self._lock:
            records = self._load_all()[COORDINATORS]
        return [Coordinator.from_dict(r) for r in records.values()]

    # Members

    def find_member_by_phone(self, phone_number: str) -> Optional[Member]:
        """Get the member registered with a phone number."""
        with self._lock:
            record = self._load_all()[MEMBERS].get(phone_number)
        return Member.from_dict(record) if record else None

    def save_member(self, member: Member) -> Member:
        """
        Create a member record.

        Raises:
            ValueError: If the record has no phone number or the phone is taken
        """
        if not member.phone_number:
            raise ValueError("Member phone number is required")

        with self._lock:
            data = self._load_all()
            if member.phone_number in data[MEMBERS]:
                raise ValueError(f"Member with phone {member.phone_number} already exists")
            data[MEMBERS][member.phone_number] = member.to_dict()
            self._save_all(data)

        logger.debug(f"Saved member: {member.phone_number}")
        return member

    def list_members(self, coordinator_phone: Optional[str] = None) -> List[Member]:
        """
        List members.

        Args:
            coordinator_phone: If given, only members delegated by this coordinator
        """
        with self._lock:
            records = self._load_all()[MEMBERS]
        members = [Member.from_dict(r) for r in records.values()]
        if coordinator_phone is not None:
            members = [m for m in members if m.coordinator_phone == coordinator_phone]
        return members
