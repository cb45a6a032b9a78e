"""In-memory consumer that records everything a navigator reports.

:class:`CollectingObserver` is the reference implementation of the consumer
side of the contract: it rejects repeated project names, validates attributes
against its vocabularies and refuses a second ``complete``. Results are
available as :class:`~scm_observer.discovery.types.ProjectRecord` snapshots.

Examples:
    >>> observer = CollectingObserver(context="acme")
    >>> project = observer.observe("widgets")
    >>> project.add_source("git@example.com:acme/widgets.git")
    >>> project.complete()
    >>> observer.projects["widgets"].completed
    True
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from scm_observer._internal.exceptions import (
    DiscoveryCancelledError,
    InvalidArgumentError,
    InvalidStateError,
)
from scm_observer.discovery.attributes import AttributeSchema, AttributeSet
from scm_observer.discovery.observer import ProjectObserver, SourceObserver
from scm_observer.discovery.types import ProjectRecord

logger = logging.getLogger(__name__)

DEFAULT_LISTENER_NAME = "scm_observer.discovery"


class _CollectingProjectObserver(ProjectObserver):
    def __init__(self, owner: "CollectingObserver", name: str, schema: AttributeSchema) -> None:
        self._owner = owner
        self._name = name
        self._sources: List[Any] = []
        self._attributes = AttributeSet(schema)
        self._completed = False
        self._retired = False

    @property
    def name(self) -> str:
        return self._name

    # Mutations hold the owner's lock; ``CollectingObserver.projects`` reads under it.

    def add_source(self, source: Any) -> None:
        with self._owner._lock:
            self._check_open("add a source to")
            self._sources.append(source)

    def add_attribute(self, key: str, value: Any) -> None:
        with self._owner._lock:
            self._check_open("add an attribute to")
            self._attributes.add(key, value)

    def complete(self) -> None:
        with self._owner._lock:
            if self._retired:
                raise InvalidStateError(f"Project '{self._name}' was already completed")
            self._retired = True
            cancel_event = self._owner.cancel_event
            if cancel_event is not None and cancel_event.is_set():
                raise DiscoveryCancelledError(self._name)
            self._completed = True
        logger.info("Completed project %s with %d source(s)", self._name, len(self._sources))
        self._owner.listener.info("Found project %s", self._name)

    def snapshot(self) -> ProjectRecord:
        return ProjectRecord(
            name=self._name,
            sources=tuple(self._sources),
            attributes=dict(self._attributes.as_dict()),
            completed=self._completed,
        )

    def _check_open(self, action: str) -> None:
        if self._retired:
            raise InvalidStateError(f"Cannot {action} project '{self._name}' after complete()")


class CollectingObserver(SourceObserver):
    """Source observer that keeps discovered projects in memory.

    Distinct project names may be observed from several threads. The project
    map and every project's sources and attributes are guarded by one lock,
    so ``projects`` can be read while a navigator is still reporting. Each
    returned project observer should still be driven by a single thread.
    """

    def __init__(
        self,
        context: Any,
        *,
        listener: Optional[logging.Logger] = None,
        includes: Optional[Iterable[str]] = None,
        organization_schema: Optional[AttributeSchema] = None,
        project_schema: Optional[AttributeSchema] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Initialize the observer.

        Args:
            context: Who is asking for sources; must not be None.
            listener: Progress sink. Defaults to the ``scm_observer.discovery``
                logger.
            includes: Optional hint naming the projects this observer wants.
            organization_schema: Vocabulary for organization attributes.
                Defaults to an empty vocabulary.
            project_schema: Vocabulary for project attributes. Defaults to an
                empty vocabulary.
            cancel_event: When set, ``complete()`` raises
                :class:`DiscoveryCancelledError`.

        Raises:
            InvalidArgumentError: If ``context`` is None.
        """
        if context is None:
            raise InvalidArgumentError("context must not be None")
        self._context = context
        self._listener = listener or logging.getLogger(DEFAULT_LISTENER_NAME)
        self._includes = frozenset(includes) if includes is not None else None
        self._project_schema = project_schema or AttributeSchema()
        self._attributes = AttributeSet(organization_schema)
        self._projects: Dict[str, _CollectingProjectObserver] = {}
        self._lock = threading.RLock()
        self.cancel_event = cancel_event

    @property
    def context(self) -> Any:
        return self._context

    @property
    def listener(self) -> logging.Logger:
        return self._listener

    @property
    def includes(self) -> Optional[FrozenSet[str]]:
        return self._includes

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Organization attributes recorded so far."""
        with self._lock:
            return dict(self._attributes.as_dict())

    @property
    def projects(self) -> Dict[str, ProjectRecord]:
        """Snapshots of every observed project, in observation order."""
        with self._lock:
            return {name: project.snapshot() for name, project in self._projects.items()}

    def completed_projects(self) -> List[ProjectRecord]:
        """Return snapshots of the projects whose ``complete()`` succeeded."""
        return [record for record in self.projects.values() if record.completed]

    def observe(self, project_name: str) -> ProjectObserver:
        with self._lock:
            if project_name in self._projects:
                raise InvalidArgumentError(
                    f"Project '{project_name}' has already been observed",
                    project_name=project_name,
                )
            project = _CollectingProjectObserver(self, project_name, self._project_schema)
            self._projects[project_name] = project
        logger.debug("Observing project %s", project_name)
        return project

    def add_attribute(self, key: str, value: Any) -> None:
        with self._lock:
            self._attributes.add(key, value)

    def __repr__(self) -> str:
        return f"CollectingObserver(context={self._context!r})"


__all__ = ["CollectingObserver", "DEFAULT_LISTENER_NAME"]
