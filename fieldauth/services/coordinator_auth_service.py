"""
Coordinator login service.

Exchanges a coordinator's phone number and project name for a session token.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .base import BaseService
from ..auth import decode_project_name, generate_token
from ..errors import ErrorKind, ServiceResult
from ..locks import coordinator_key
from ..registry import find_project

logger = logging.getLogger(__name__)

# Same message for unknown phone and wrong project, to avoid identity probing
INVALID_CREDENTIALS = "Invalid phone number or project name"


@dataclass
class IssuedToken:
    """A freshly minted credential and the project it grants."""
    token: str
    project_name: str

    def to_dict(self) -> dict:
        return {"token": self.token, "projectName": self.project_name}


class CoordinatorAuthService(BaseService):
    """Service for coordinator login."""

    def login(self, phone_number: str, project_name: str) -> ServiceResult[IssuedToken]:
        """
        Log a coordinator in.

        The supplied project name is compared with the stored one as-is;
        only the stored name is decoded for the registry lookup. Each
        successful login replaces the previous token.

        Args:
            phone_number: Coordinator phone number
            project_name: Project name exactly as stored at registration

        Returns:
            ServiceResult with the new token and the stored project name
        """
        logger.info(f"Attempting coordinator login for phone: {phone_number}")

        with self.locks.hold(coordinator_key(phone_number)):
            coordinator = self.store.find_coordinator_by_phone(phone_number)
            if not coordinator:
                logger.warning(f"No coordinator found for phone: {phone_number}")
                return ServiceResult.fail(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)
            logger.info(f"Found coordinator with project: {coordinator.project_name}")

            if coordinator.project_name != project_name:
                logger.warning(f"Invalid project name provided for coordinator: {phone_number}")
                return ServiceResult.fail(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)
            logger.info("Coordinator project name verified")

            decoded_name = self._decode_stored_name(coordinator.project_name)
            project = find_project(self.registry, decoded_name) if decoded_name is not None else None
            if not project:
                logger.error(f"Project not found: {coordinator.project_name}")
                return ServiceResult.fail(ErrorKind.PROJECT_NOT_FOUND, "Project not found")
            logger.info(f"Found matching project: {project.name}")

            token = generate_token()
            self.store.save_coordinator(coordinator.with_token(token))

        logger.info(f"Saved coordinator with new token: {phone_number}")
        return ServiceResult.ok(IssuedToken(token=token, project_name=coordinator.project_name))

    @staticmethod
    def _decode_stored_name(project_name: str) -> Optional[str]:
        try:
            return decode_project_name(project_name)
        except ValueError as e:
            logger.warning(f"Stored project name cannot be decoded: {e}")
            return None
