"""
Services layer for the field project credential service.

This module provides the core business logic as reusable services
that can be consumed by the API, the admin CLI, or any other interface.
"""

from .base import BaseService, ServiceContext
from .registration_service import RegistrationService, CoordinatorBinding, Confirmation
from .coordinator_auth_service import CoordinatorAuthService, IssuedToken
from .delegation_service import DelegationService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Services
    "RegistrationService",
    "CoordinatorAuthService",
    "DelegationService",
    # Data classes
    "CoordinatorBinding",
    "Confirmation",
    "IssuedToken",
]


def create_services(context: ServiceContext = None):
    """
    Factory function to create all services with proper dependencies.

    Args:
        context: Optional ServiceContext (creates one if not provided)

    Returns:
        Tuple of (context, registration, coordinator_auth, delegation)
    """
    if context is None:
        context = ServiceContext.create()

    registration = RegistrationService(context)
    coordinator_auth = CoordinatorAuthService(context)
    delegation = DelegationService(context)

    return context, registration, coordinator_auth, delegation
