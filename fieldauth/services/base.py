"""
Base service classes and shared context.

The ServiceContext holds the collaborators every service needs. It is built
once by the composition root (API or CLI) and handed to each service, so
services never reach for a global store.
"""

import logging
from typing import Optional
from dataclasses import dataclass, field

from ..auth import BearerAuthenticator
from ..config import Config, load_config
from ..locks import KeyedLock
from ..registry import HTTPProjectRegistry, ProjectRegistry
from ..store import CredentialStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """
    Shared context for all services.

    One context per process: the keyed locks only serialize requests that
    go through the same context.
    """
    config: Config
    store: CredentialStore
    registry: ProjectRegistry
    bearer: BearerAuthenticator = field(default_factory=BearerAuthenticator)
    locks: KeyedLock = field(default_factory=KeyedLock)

    @classmethod
    def create(
        cls,
        config: Optional[Config] = None,
        store: Optional[CredentialStore] = None,
        registry: Optional[ProjectRegistry] = None
    ) -> "ServiceContext":
        """
        Factory method to create a ServiceContext with all dependencies.

        Args:
            config: Optional config (loads from env if not provided)
            store: Optional credential store (file from config if not provided)
            registry: Optional project registry (HTTP client from config if not provided)

        Returns:
            Configured ServiceContext
        """
        cfg = config or load_config()
        store = store or CredentialStore(cfg.storage.credentials_file)
        registry = registry or HTTPProjectRegistry(cfg.registry)

        logger.info(f"Credential store at {store.file_path}")
        return cls(config=cfg, store=store, registry=registry)

    def close(self):
        """Clean up resources."""
        close = getattr(self.registry, "close", None)
        if close:
            close()


class BaseService:
    """
    Base class for all services.

    Each service receives the shared context and provides focused functionality.
    """

    def __init__(self, context: ServiceContext):
        self.context = context

    @property
    def config(self) -> Config:
        return self.context.config

    @property
    def store(self) -> CredentialStore:
        return self.context.store

    @property
    def registry(self) -> ProjectRegistry:
        return self.context.registry

    @property
    def locks(self) -> KeyedLock:
        return self.context.locks
