"""
System endpoints.

Health checks and system status.
"""

from fastapi import APIRouter

from ..deps import ServicesDep, ServerAuth

router = APIRouter()


@router.get("/status", dependencies=[ServerAuth])
def get_status(services: ServicesDep):
    """
    Service status.

    Reports record counts from the credential store. Requires the server
    bearer token.
    """
    store = services.context.store
    return {
        "status": "healthy",
        "service": services.config.server.service_name,
        "coordinators": len(store.list_coordinators()),
        "members": len(store.list_members())
    }
