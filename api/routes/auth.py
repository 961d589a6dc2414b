"""
Authentication endpoints.

Handles coordinator registration, unregistration, login, and member
delegation. Handlers are plain functions so FastAPI runs the blocking
store and registry calls in its threadpool.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from ..deps import ServicesDep, ServerAuth, BearerCredentials, bearer_token

logger = logging.getLogger(__name__)

router = APIRouter()


# Request/Response models

class CamelModel(BaseModel):
    """Accepts and emits the camelCase field names used on the wire."""
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(CamelModel):
    """Coordinator registration request."""
    phone_number: str = Field(..., alias="phoneNumber", description="Coordinator phone number")
    project_name: str = Field(..., alias="projectName", description="URL-encoded project name")


class UnregisterRequest(CamelModel):
    """Coordinator unregistration request."""
    phone_number: str = Field(..., alias="phoneNumber", description="Coordinator phone number")


class CoordinatorLoginRequest(CamelModel):
    """Coordinator login request."""
    phone_number: str = Field(..., alias="phoneNumber", description="Coordinator phone number")
    project_name: str = Field(..., alias="projectName", description="Project name as registered")


class MemberRequest(CamelModel):
    """Member delegation request."""
    coord_phone_number: str = Field(..., alias="coordPhoneNumber", description="Delegating coordinator phone")
    member_phone_number: str = Field(..., alias="memberPhoneNumber", description="New member phone (E.164)")


class CoordinatorData(CamelModel):
    phone_number: str = Field(..., alias="phoneNumber")
    project_name: str = Field(..., alias="projectName")


class MessageData(CamelModel):
    message: str


class CoordinatorTokenData(CamelModel):
    token: str
    project_name: str = Field(..., alias="projectName")


class MemberTokenData(CamelModel):
    token: str


class RegisterResponse(CamelModel):
    data: CoordinatorData


class UnregisterResponse(CamelModel):
    data: MessageData


class CoordinatorLoginResponse(CamelModel):
    data: CoordinatorTokenData


class MemberResponse(CamelModel):
    data: MemberTokenData


# Endpoints

@router.post("/register", response_model=RegisterResponse, dependencies=[ServerAuth])
def register(request: RegisterRequest, services: ServicesDep):
    """
    Register a coordinator for a project.

    Replaces any existing binding for the phone number. Fails with 409 if the
    project name is held by another coordinator or already exists in the
    project registry.
    """
    binding = services.registration.register(
        phone_number=request.phone_number,
        project_name=request.project_name
    ).unwrap()

    return RegisterResponse(data=CoordinatorData(
        phone_number=binding.phone_number,
        project_name=binding.project_name
    ))


@router.delete("/unregister", response_model=UnregisterResponse, dependencies=[ServerAuth])
def unregister(request: UnregisterRequest, services: ServicesDep):
    """Remove a coordinator binding."""
    confirmation = services.registration.unregister(request.phone_number).unwrap()
    return UnregisterResponse(data=MessageData(message=confirmation.message))


@router.post("/coordinator", response_model=CoordinatorLoginResponse, dependencies=[ServerAuth])
def coordinator_login(request: CoordinatorLoginRequest, services: ServicesDep):
    """
    Log a coordinator in.

    Returns a new coordinator token; any previous token stops working.
    """
    issued = services.coordinator_auth.login(
        phone_number=request.phone_number,
        project_name=request.project_name
    ).unwrap()

    return CoordinatorLoginResponse(data=CoordinatorTokenData(
        token=issued.token,
        project_name=issued.project_name
    ))


@router.post("/member", response_model=MemberResponse)
def delegate_member(
    request: MemberRequest,
    services: ServicesDep,
    credentials: BearerCredentials
):
    """
    Issue a member token.

    Authenticated with the coordinator's own login token, not the server
    token.
    """
    logger.info("POST /auth/member request received")

    issued = services.delegation.delegate_member(
        coord_phone_number=request.coord_phone_number,
        member_phone_number=request.member_phone_number,
        bearer_token=bearer_token(credentials)
    ).unwrap()

    return MemberResponse(data=MemberTokenData(token=issued.token))
