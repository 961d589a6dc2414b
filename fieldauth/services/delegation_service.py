"""
Member delegation service.

Lets a logged-in coordinator mint a token for a member joining the
coordinator's project.
"""

import logging
from typing import Optional

from .base import BaseService
from .coordinator_auth_service import IssuedToken
from ..auth import generate_token, is_valid_phone
from ..errors import ErrorKind, ServiceResult
from ..locks import member_key
from ..store import Member, utc_now

logger = logging.getLogger(__name__)


class DelegationService(BaseService):
    """Service for delegating member access."""

    def delegate_member(
        self,
        coord_phone_number: str,
        member_phone_number: str,
        bearer_token: Optional[str]
    ) -> ServiceResult[IssuedToken]:
        """
        Issue a member token on behalf of a coordinator.

        Args:
            coord_phone_number: Phone number of the delegating coordinator
            member_phone_number: Phone number of the new member
            bearer_token: Presented bearer credential; must be the
                coordinator's current login token

        Returns:
            ServiceResult with the member token and project name
        """
        try:
            return self._delegate(coord_phone_number, member_phone_number, bearer_token)
        except Exception:
            logger.exception(f"Error registering member {member_phone_number} for coordinator {coord_phone_number}")
            raise

    def _delegate(
        self,
        coord_phone_number: str,
        member_phone_number: str,
        bearer_token: Optional[str]
    ) -> ServiceResult[IssuedToken]:
        coordinator = self.store.find_coordinator_by_phone(coord_phone_number)
        if not coordinator or not coordinator.token:
            logger.warning(f"No logged-in coordinator found for phone: {coord_phone_number}")
            return ServiceResult.fail(ErrorKind.UNAUTHORIZED, "Invalid coordinator phone number")
        logger.info(f"Found coordinator with phone: {coordinator.phone_number}")

        project_name = self.store.find_project_by_coordinator_phone(coord_phone_number)
        if not project_name:
            logger.warning(f"No project found for coordinator: {coord_phone_number}")
            return ServiceResult.fail(ErrorKind.UNAUTHORIZED, "No project found for coordinator")
        logger.info(f"Found project: {project_name} for coordinator")

        if not self.context.bearer.verify(bearer_token, coordinator.token):
            logger.warning(f"Bearer token mismatch for coordinator: {coord_phone_number}")
            return ServiceResult.fail(ErrorKind.UNAUTHORIZED, "Invalid bearer token")

        logger.info(f"Attempting to register member with phone: {member_phone_number}")

        if not is_valid_phone(member_phone_number):
            logger.warning(f"Invalid phone number format: {member_phone_number}")
            return ServiceResult.fail(ErrorKind.BAD_REQUEST, "Invalid phone number format")

        with self.locks.hold(member_key(member_phone_number)):
            if self.store.find_member_by_phone(member_phone_number):
                logger.warning(f"Member already exists with phone: {member_phone_number}")
                return ServiceResult.fail(ErrorKind.BAD_REQUEST, "Phone number already registered")

            member_token = generate_token()
            self.store.save_member(Member(
                phone_number=member_phone_number,
                token=member_token,
                coordinator_phone=coordinator.phone_number,
                project_name=project_name,
                created_at=utc_now(),
            ))

        logger.info(f"Successfully registered member with phone: {member_phone_number}")
        return ServiceResult.ok(IssuedToken(token=member_token, project_name=project_name))
