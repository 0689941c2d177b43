"""ORM models."""

from componentsmith.models.base import Base
from componentsmith.models.component import GeneratedComponent
from componentsmith.models.version import ComponentVersion, VersionSummary

__all__ = [
    "Base",
    "ComponentVersion",
    "GeneratedComponent",
    "VersionSummary",
]
