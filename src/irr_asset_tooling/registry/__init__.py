"""Registry REST API client (ARIN Reg-RWS)."""

from .client import (
    DEFAULT_API_URL,
    DEFAULT_PATHS,
    ObjectAction,
    ObjectType,
    RegistryClient,
    RegistryError,
    TaskResult,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_PATHS",
    "ObjectAction",
    "ObjectType",
    "RegistryClient",
    "RegistryError",
    "TaskResult",
]
