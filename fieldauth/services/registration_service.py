"""
Coordinator registration service.

Binds a coordinator phone number to exactly one project name, and removes
that binding again on request.
"""

import logging
from dataclasses import dataclass

from .base import BaseService
from ..auth import decode_project_name
from ..errors import ErrorKind, ServiceResult
from ..locks import coordinator_key, project_key
from ..registry import find_project
from ..store import Coordinator, utc_now

logger = logging.getLogger(__name__)


@dataclass
class CoordinatorBinding:
    """A registered coordinator's identity and project."""
    phone_number: str
    project_name: str

    def to_dict(self) -> dict:
        return {"phoneNumber": self.phone_number, "projectName": self.project_name}


@dataclass
class Confirmation:
    message: str

    def to_dict(self) -> dict:
        return {"message": self.message}


class RegistrationService(BaseService):
    """
    Service for coordinator registration.

    Handles:
    - Registering (or re-registering) a phone number for a project
    - Unregistering a phone number
    """

    def register(self, phone_number: str, project_name: str) -> ServiceResult[CoordinatorBinding]:
        """
        Register a coordinator for a project.

        Any existing binding for the phone number is discarded first, so a
        coordinator re-registering its own project name does not conflict
        with itself. The old binding stays discarded even if the new name
        then conflicts.

        Args:
            phone_number: Coordinator phone number
            project_name: URL-encoded project name

        Returns:
            ServiceResult with the stored binding
        """
        logger.info(f"Attempting coordinator registration for phone: {phone_number}")

        try:
            decoded_name = decode_project_name(project_name)
        except ValueError as e:
            logger.warning(str(e))
            return ServiceResult.fail(ErrorKind.BAD_REQUEST, "Invalid project name encoding")

        with self.locks.hold(coordinator_key(phone_number), project_key(decoded_name)):
            existing = self.store.find_coordinator_by_phone(phone_number)
            if existing:
                logger.info(f"Coordinator exists with project: {existing.project_name}, will be removed")
                self.store.delete_coordinator_by_phone(phone_number)
                logger.info(f"Deleted existing coordinator: {phone_number}")

            if self.store.find_coordinator_by_project(decoded_name):
                logger.warning(f"Project name already exists: {decoded_name}")
                return ServiceResult.fail(ErrorKind.CONFLICT, "Project name already exists")

            if find_project(self.registry, decoded_name):
                logger.warning(f"Project name already exists in registry: {decoded_name}")
                return ServiceResult.fail(ErrorKind.CONFLICT, "Project name already exists")

            coordinator = self.store.save_coordinator(Coordinator(
                phone_number=phone_number,
                project_name=decoded_name,
                created_at=utc_now(),
            ))

        logger.info(f"Registered new coordinator for project: {decoded_name}")
        return ServiceResult.ok(CoordinatorBinding(
            phone_number=coordinator.phone_number,
            project_name=coordinator.project_name,
        ))

    def unregister(self, phone_number: str) -> ServiceResult[Confirmation]:
        """
        Remove a coordinator binding.

        Members delegated by this coordinator are left in place.

        Args:
            phone_number: Coordinator phone number

        Returns:
            ServiceResult with a confirmation message
        """
        logger.info(f"Attempting to unregister coordinator: {phone_number}")

        with self.locks.hold(coordinator_key(phone_number)):
            if not self.store.find_coordinator_by_phone(phone_number):
                logger.warning(f"No coordinator found for phone: {phone_number}")
                return ServiceResult.fail(ErrorKind.NOT_FOUND, "Coordinator not found")

            self.store.delete_coordinator_by_phone(phone_number)

        logger.info(f"Successfully unregistered coordinator: {phone_number}")
        return ServiceResult.ok(Confirmation(message="Coordinator successfully unregistered"))
