"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing:
- Credential store on a temporary file
- In-memory project registry
- Wired services
- API client
"""

import os
import sys
import json
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before imports
os.environ["SERVER_BEARER_TOKEN"] = "test_server_bearer_token"

from fieldauth.config import Config, ServerConfig, StorageConfig
from fieldauth.registry import StaticProjectRegistry
from fieldauth.services import (
    ServiceContext,
    RegistrationService,
    CoordinatorAuthService,
    DelegationService,
)
from fieldauth.store import CredentialStore


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def test_config():
    """Test configuration values."""
    return {
        "server_token": "test_server_bearer_token",
        "coord_phone": "+15550001111",
        "other_coord_phone": "+15550002222",
        "member_phone": "+15551234567",
        "project_name": "Field1",
        "existing_project": "Existing Project",
    }


# =============================================================================
# Store and Registry Fixtures
# =============================================================================

@pytest.fixture
def temp_credentials_file() -> Generator[Path, None, None]:
    """Create a temporary file for credential storage."""
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.json', delete=False
    ) as f:
        json.dump({}, f)
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def credential_store(temp_credentials_file) -> CredentialStore:
    """Create a CredentialStore with temporary file."""
    return CredentialStore(file_path=temp_credentials_file)


@pytest.fixture
def project_registry(test_config) -> StaticProjectRegistry:
    """Registry that already holds one project."""
    return StaticProjectRegistry([test_config["existing_project"]])


@pytest.fixture
def app_config(test_config, temp_credentials_file) -> Config:
    return Config(
        server=ServerConfig(bearer_token=test_config["server_token"]),
        storage=StorageConfig(credentials_file=temp_credentials_file),
    )


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def service_context(app_config, credential_store, project_registry) -> ServiceContext:
    return ServiceContext(
        config=app_config,
        store=credential_store,
        registry=project_registry
    )


@pytest.fixture
def registration_service(service_context) -> RegistrationService:
    return RegistrationService(service_context)


@pytest.fixture
def coordinator_auth_service(service_context) -> CoordinatorAuthService:
    return CoordinatorAuthService(service_context)


@pytest.fixture
def delegation_service(service_context) -> DelegationService:
    return DelegationService(service_context)


@pytest.fixture
def logged_in_coordinator(
    registration_service,
    coordinator_auth_service,
    project_registry,
    test_config
) -> str:
    """
    Register and log in the test coordinator.

    The project only shows up in the registry after registration, the way a
    coordinator creates it in the field app between the two calls.

    Returns:
        The coordinator's login token
    """
    registration_service.register(test_config["coord_phone"], test_config["project_name"]).unwrap()
    project_registry.add(test_config["project_name"])
    issued = coordinator_auth_service.login(
        test_config["coord_phone"], test_config["project_name"]
    ).unwrap()
    return issued.token


# =============================================================================
# API Client Fixtures
# =============================================================================

@pytest.fixture
def services(app_config, service_context, registration_service, coordinator_auth_service, delegation_service):
    """Services container wired to the temporary store."""
    from api.deps import Services

    return Services(
        config=app_config,
        context=service_context,
        registration=registration_service,
        coordinator_auth=coordinator_auth_service,
        delegation=delegation_service
    )


@pytest.fixture
def api_app():
    """Create FastAPI app for testing."""
    from api.main import app
    return app


@pytest.fixture
def api_client(api_app, services) -> Generator[TestClient, None, None]:
    """Test client whose services use the temporary store."""
    with patch("api.deps.get_services", return_value=services):
        yield TestClient(api_app)


@pytest.fixture
def server_headers(test_config) -> dict:
    return {"Authorization": f"Bearer {test_config['server_token']}"}


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as API endpoint test"
    )
