"""Producers that drive a :class:`SourceObserver` through a discovery run."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from scm_observer._internal.exceptions import DiscoveryCancelledError, ObserverError
from scm_observer.discovery.observer import FilteredObserver, SourceObserver

logger = logging.getLogger(__name__)


class Navigator(ABC):
    """Enumerates the projects of an organization and reports them."""

    @abstractmethod
    def visit_sources(self, observer: SourceObserver) -> int:
        """Report every project to ``observer``.

        Implementations call ``observe`` at most once per project name, call
        ``complete`` on every project observer they obtain, and let errors
        raised by the observer propagate.

        Returns:
            int: Number of ``observe`` calls made, including calls a filtering
            observer absorbed.
        """

    def visit_source(self, project_name: str, observer: SourceObserver) -> int:
        """Report a single named project to ``observer``.

        The default implementation runs a full visit through a filter that
        lets only ``project_name`` through, and returns whatever
        :meth:`visit_sources` returns. A navigator that ignores the
        ``includes`` hint therefore reports every project it walked, not 1.
        Navigators that can look a project up directly should override it.
        """
        return self.visit_sources(SourceObserver.filter(observer, project_name))


class StaticNavigator(Navigator):
    """Navigator over a fixed, in-memory organization.

    Examples:
        >>> navigator = StaticNavigator({"api": ["git@example.com:acme/api.git"]})
        >>> navigator.visit_sources(observer)  # doctest: +SKIP
        1
    """

    def __init__(
        self,
        projects: Mapping[str, Iterable[Any]],
        *,
        attributes: Optional[Mapping[str, Any]] = None,
        project_attributes: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        """Initialize the navigator.

        Args:
            projects: Project name to the candidate sources it contains.
            attributes: Organization attributes reported before any project.
            project_attributes: Per-project attributes keyed by project name.
        """
        self._projects: Dict[str, Tuple[Any, ...]] = {
            name: tuple(sources) for name, sources in projects.items()
        }
        self._attributes = dict(attributes or {})
        self._project_attributes = {
            name: dict(values) for name, values in (project_attributes or {}).items()
        }

    @property
    def project_names(self) -> Tuple[str, ...]:
        return tuple(self._projects)

    def visit_sources(self, observer: SourceObserver) -> int:
        listener = observer.listener
        includes = observer.includes

        try:
            for key, value in self._attributes.items():
                observer.add_attribute(key, value)
        except ObserverError as exc:
            listener.warning("Could not record organization attributes: %s", exc)
            raise

        observed = 0
        for project_name, sources in self._projects.items():
            if isinstance(observer, FilteredObserver) and observer.exhausted:
                logger.debug("All requested projects observed; stopping early")
                break
            if includes is not None and project_name not in includes:
                logger.debug("Skipping project %s (not included)", project_name)
                continue

            listener.info("Checking project %s", project_name)
            try:
                self._visit_project(observer, project_name, sources)
            except DiscoveryCancelledError:
                listener.warning("Discovery cancelled while processing %s", project_name)
                raise
            except ObserverError as exc:
                listener.warning("Aborting discovery at project %s: %s", project_name, exc)
                raise
            observed += 1

        return observed

    def _visit_project(
        self, observer: SourceObserver, project_name: str, sources: Tuple[Any, ...]
    ) -> None:
        project = observer.observe(project_name)
        for source in sources:
            project.add_source(source)
        for key, value in self._project_attributes.get(project_name, {}).items():
            project.add_attribute(key, value)
        project.complete()


__all__ = ["Navigator", "StaticNavigator"]
