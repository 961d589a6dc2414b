"""Project registry client.

The registry is the source of truth for which projects exist. This service
only ever lists projects to check names against it.
"""

import httpx
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Iterable, Protocol

from .config import RegistryConfig

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """A project known to the registry."""
    name: str
    project_id: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            name=data.get("name") or "",
            project_id=data.get("projectId") or data.get("id"),
            raw=data,
        )


class ProjectRegistryError(Exception):
    """Raised when the registry cannot be reached or answers badly."""


class ProjectRegistry(Protocol):
    def list_projects(self) -> List[Project]:
        ...


def find_project(registry: ProjectRegistry, name: str) -> Optional[Project]:
    """Return the registry project with exactly this name, if any."""
    for project in registry.list_projects():
        if project.name == name:
            return project
    return None


class HTTPProjectRegistry:
    """Client for the project registry HTTP API."""

    def __init__(self, config: RegistryConfig, client: Optional[httpx.Client] = None):
        """
        Initialize the registry client.

        Args:
            config: Registry base URL, token and timeout
            client: Optional preconfigured httpx client (tests, shared pools)
        """
        self.base_url = config.base_url.rstrip("/")
        self._token = config.token
        self._client = client or httpx.Client(timeout=config.timeout_seconds)

    def _get_headers(self) -> dict:
        """Get headers for registry requests."""
        headers = {"accept": "application/json"}
        if self._token:
            headers["authorization"] = f"Bearer {self._token}"
        return headers

    def list_projects(self) -> List[Project]:
        """
        List all projects in the registry.

        Accepts either a bare JSON list or a `{"data": [...]}` envelope.

        Raises:
            ProjectRegistryError: On transport errors, non-2xx responses,
                or a body that is not a project list
        """
        url = f"{self.base_url}/projects"
        try:
            response = self._client.get(url, headers=self._get_headers())
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Project registry request failed: {e}")
            raise ProjectRegistryError(f"Could not list projects: {e}") from e
        except ValueError as e:
            logger.error(f"Project registry returned a non-JSON body: {e}")
            raise ProjectRegistryError("Project registry returned a non-JSON body") from e

        items = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            logger.error(f"Unexpected project registry payload: {type(items).__name__}")
            raise ProjectRegistryError("Project registry returned an unexpected payload")

        projects = [Project.from_dict(item) for item in items if isinstance(item, dict)]
        logger.debug(f"Found {len(projects)} total projects")
        return projects

    def close(self):
        """Close the HTTP client."""
        self._client.close()


class StaticProjectRegistry:
    """In-memory registry, used for local runs and tests."""

    def __init__(self, names: Iterable[str] = ()):
        self._projects = [Project(name=name) for name in names]

    def add(self, name: str) -> Project:
        project = Project(name=name)
        self._projects.append(project)
        return project

    def remove(self, name: str):
        self._projects = [p for p in self._projects if p.name != name]

    def list_projects(self) -> List[Project]:
        return list(self._projects)

    def close(self):
        pass
