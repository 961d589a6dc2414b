"""
API dependencies.

Provides dependency injection for services and server authentication.
"""

import logging
from typing import Optional, Annotated
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fieldauth.config import load_config, Config
from fieldauth.errors import ErrorKind, ServiceError
from fieldauth.services import (
    ServiceContext,
    RegistrationService,
    CoordinatorAuthService,
    DelegationService,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for all services."""
    config: Config
    context: ServiceContext
    registration: RegistrationService
    coordinator_auth: CoordinatorAuthService
    delegation: DelegationService


# Global services instance (singleton)
_services: Optional[Services] = None


def get_services() -> Services:
    """
    Get or create the services singleton.

    This initializes all services on first call.
    """
    global _services

    if _services is None:
        logger.info("Initializing services...")

        config = load_config()
        if not config.server.bearer_token:
            logger.warning(
                "SERVER_BEARER_TOKEN not set! Registration and login endpoints "
                "will reject every request."
            )

        context = ServiceContext.create(config=config)

        _services = Services(
            config=config,
            context=context,
            registration=RegistrationService(context),
            coordinator_auth=CoordinatorAuthService(context),
            delegation=DelegationService(context),
        )

        logger.info("Services initialized successfully")

    return _services


def close_services():
    """Close and cleanup services."""
    global _services
    if _services:
        _services.context.close()
        _services = None
        logger.info("Services closed")


# Dependency for getting services
def services_dep() -> Services:
    """FastAPI dependency for services."""
    return get_services()


ServicesDep = Annotated[Services, Depends(services_dep)]

# Security scheme
security = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]


def bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Presented bearer token, or None when the header is absent or malformed."""
    if credentials is None:
        return None
    return credentials.credentials


def require_server_token(services: ServicesDep, credentials: BearerCredentials) -> None:
    """
    Require the server bearer token.

    Raises ServiceError(UNAUTHORIZED) if the header is missing or wrong.
    """
    if not services.context.bearer.verify(bearer_token(credentials), services.config.server.bearer_token):
        logger.warning("Rejected request with invalid server bearer token")
        raise ServiceError(ErrorKind.UNAUTHORIZED, "Invalid bearer token")


ServerAuth = Depends(require_server_token)
