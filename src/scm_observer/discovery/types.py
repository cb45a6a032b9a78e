"""Shared dataclasses for project discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CandidateSource:
    """Descriptor of one source a navigator found inside a project.

    Observers accept any object as a source; this DTO is what the bundled
    navigator emits. Observers never mutate it.
    """

    id: str
    remote: str
    kind: str = "git"
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class ProjectRecord:
    """Snapshot of everything a consumer recorded for one observed project."""

    name: str
    sources: Tuple[Any, ...] = field(default_factory=tuple)
    attributes: Mapping[str, Any] = field(default_factory=dict)
    completed: bool = False


__all__ = ["CandidateSource", "ProjectRecord"]
