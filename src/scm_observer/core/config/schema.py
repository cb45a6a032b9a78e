"""Configuration schema module.

This module defines the data structures used for configuration in
scm_observer. The schemas are designed to be minimal but extensible through
Pydantic.
"""

import logging as _logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from scm_observer.discovery.attributes import AttributeSchema, parse_type_name
from scm_observer.discovery.collecting import CollectingObserver

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Level for the ``scm_observer`` logger
        components: Per-logger level overrides, keyed by logger name
    """

    level: str = "INFO"
    components: Dict[str, str] = Field(default_factory=dict)

    # Allow arbitrary extension
    model_config = {"extra": "allow"}

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        return _normalize_level(value)

    @field_validator("components")
    @classmethod
    def _check_components(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {name: _normalize_level(level) for name, level in value.items()}

    def numeric_level(self) -> int:
        return _logging.getLevelName(self.level)


class DiscoveryConfig(BaseModel):
    """Configuration for discovery runs.

    Attributes:
        includes: Project names to restrict discovery to, or None for all
        organization_attributes: Organization attribute vocabulary (key -> type name)
        project_attributes: Project attribute vocabulary (key -> type name)
    """

    includes: Optional[List[str]] = None
    organization_attributes: Dict[str, str] = Field(default_factory=dict)
    project_attributes: Dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "allow"}

    @field_validator("includes", mode="before")
    @classmethod
    def _split_includes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    @field_validator("organization_attributes", "project_attributes")
    @classmethod
    def _check_type_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for type_name in value.values():
            parse_type_name(type_name)
        return value

    def organization_schema(self) -> AttributeSchema:
        return AttributeSchema.from_type_names(self.organization_attributes)

    def project_schema(self) -> AttributeSchema:
        return AttributeSchema.from_type_names(self.project_attributes)


class ObserverConfig(BaseModel):
    """Root configuration with minimal required sections.

    Attributes:
        logging: Logging configuration
        discovery: Discovery configuration
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)

    # Allow arbitrary extension
    model_config = {"extra": "allow"}

    def create_observer(self, context: Any, **kwargs: Any) -> CollectingObserver:
        """Build a :class:`CollectingObserver` using the configured vocabularies.

        Args:
            context: Who is asking for sources
            **kwargs: Extra keyword arguments for ``CollectingObserver``

        Returns:
            Observer configured with this config's includes and schemas
        """
        kwargs.setdefault("includes", self.discovery.includes)
        kwargs.setdefault("organization_schema", self.discovery.organization_schema())
        kwargs.setdefault("project_schema", self.discovery.project_schema())
        return CollectingObserver(context, **kwargs)


def _normalize_level(value: str) -> str:
    normalized = str(value).strip().upper()
    if normalized not in _LEVELS:
        raise ValueError(f"Unknown logging level '{value}'. Expected one of {', '.join(_LEVELS)}")
    return normalized
