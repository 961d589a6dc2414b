"""Configuration module for the field project credential service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CREDENTIALS_FILE = Path(__file__).parent.parent / "data" / "credentials.json"


@dataclass
class ServerConfig:
    """Server-level authentication settings."""
    # Shared secret that authorizes coordinator registration and login
    bearer_token: str = field(default_factory=lambda: os.getenv("SERVER_BEARER_TOKEN", ""))
    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "fieldauth-api"))
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))


@dataclass
class StorageConfig:
    """Credential store location."""
    credentials_file: Path = field(
        default_factory=lambda: Path(os.getenv("CREDENTIALS_FILE", str(DEFAULT_CREDENTIALS_FILE)))
    )


@dataclass
class RegistryConfig:
    """External project registry connection."""
    base_url: str = field(default_factory=lambda: os.getenv("PROJECT_REGISTRY_URL", "http://localhost:8080"))
    token: str = field(default_factory=lambda: os.getenv("PROJECT_REGISTRY_TOKEN", ""))
    timeout_seconds: float = field(default_factory=lambda: float(os.getenv("PROJECT_REGISTRY_TIMEOUT", "10")))


@dataclass
class Config:
    """Main configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


def load_config() -> Config:
    """Load configuration from environment variables."""
    return Config()
