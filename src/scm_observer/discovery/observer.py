"""Callbacks a navigator uses to report discovered projects.

A navigator walks an organization (a set of remote repositories) and reports
what it finds to a :class:`SourceObserver`. Each call to
:meth:`SourceObserver.observe` hands back a :class:`ProjectObserver` which the
navigator fills with candidate sources and attributes before calling
:meth:`ProjectObserver.complete` exactly once.

Observers compose through :class:`WrappedObserver`, which forwards every call
to a delegate. :class:`FilteredObserver` builds on it to let only a fixed set
of project names through, each at most once.

Examples:
    >>> filtered = SourceObserver.filter(consumer, "api", "web")  # doctest: +SKIP
    >>> navigator.visit_sources(filtered)  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Generic, Iterable, Optional, Set, TypeVar, Union

logger = logging.getLogger(__name__)

O = TypeVar("O", bound="SourceObserver")


class ProjectObserver(ABC):
    """Secondary callback produced by :meth:`SourceObserver.observe`."""

    @abstractmethod
    def add_source(self, source: Any) -> None:
        """Add a candidate source found in this project.

        Args:
            source: Opaque source descriptor. Ownership passes to whatever
                later instantiates it; observers must not mutate it.
        """

    @abstractmethod
    def add_attribute(self, key: str, value: Any) -> None:
        """Add extra metadata about this project.

        Args:
            key: Attribute name from the consumer's vocabulary.
            value: Value of the type the attribute expects, possibly None if
                the attribute allows it.

        Raises:
            InvalidArgumentError: If the key is unrecognized or already set.
            AttributeTypeError: If the value has the wrong type.
        """

    @abstractmethod
    def complete(self) -> None:
        """Finish defining this project.

        Raises:
            InvalidStateError: If called more than once.
            DiscoveryCancelledError: If finishing the project was interrupted.
                Navigators must let this propagate and stop enumerating.
        """


class SourceObserver(ABC):
    """Callback used by navigators to report the projects they discover."""

    @property
    @abstractmethod
    def context(self) -> Any:
        """Who is asking for sources. Never None."""

    @property
    @abstractmethod
    def listener(self) -> logging.Logger:
        """Where progress should be reported. Never None."""

    @property
    def includes(self) -> Optional[FrozenSet[str]]:
        """Project names this observer is interested in, or None for all.

        This is a hint for navigators so they can skip work; implementations
        must not assume it is honoured.
        """
        return None

    @abstractmethod
    def observe(self, project_name: str) -> ProjectObserver:
        """Declare that a new project, such as a repository, has been found.

        Args:
            project_name: Name of the project within the organization.

        Returns:
            ProjectObserver: Callback for the project; the caller must call
            :meth:`ProjectObserver.complete` on it.

        Raises:
            InvalidArgumentError: If this name has already been observed.
        """

    @abstractmethod
    def add_attribute(self, key: str, value: Any) -> None:
        """Add extra metadata about the overall organization.

        Raises:
            InvalidArgumentError: If the key is unrecognized or already set.
            AttributeTypeError: If the value has the wrong type.
        """

    @staticmethod
    def filter(delegate: O, *project_names: str) -> "FilteredObserver[O]":
        """Create an observer that passes only ``project_names`` to ``delegate``.

        Args:
            delegate: Observer receiving the watched projects.
            *project_names: Names to watch for; duplicates are ignored.

        Returns:
            FilteredObserver: Observer wrapping ``delegate``.
        """
        return FilteredObserver(delegate, project_names)


class NoOpProjectObserver(ProjectObserver):
    """Project observer that accepts every call and records nothing."""

    _instance: Optional["NoOpProjectObserver"] = None
    _instance_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "NoOpProjectObserver":
        """Return the shared no-op observer."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def add_source(self, source: Any) -> None:
        pass

    def add_attribute(self, key: str, value: Any) -> None:
        pass

    def complete(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NoOpProjectObserver()"


class WrappedObserver(SourceObserver, Generic[O]):
    """Observer that forwards every call to a delegate.

    Subclasses override only the calls they change. Errors from the delegate
    propagate unchanged and returned objects are passed through as-is.
    """

    def __init__(self, delegate: O) -> None:
        self._delegate = delegate

    @property
    def delegate(self) -> O:
        return self._delegate

    @property
    def context(self) -> Any:
        return self._delegate.context

    @property
    def listener(self) -> logging.Logger:
        return self._delegate.listener

    @property
    def includes(self) -> Optional[FrozenSet[str]]:
        return self._delegate.includes

    def observe(self, project_name: str) -> ProjectObserver:
        return self._delegate.observe(project_name)

    def add_attribute(self, key: str, value: Any) -> None:
        self._delegate.add_attribute(key, value)


class FilteredObserver(WrappedObserver[O]):
    """Observer that lets each watched project name through at most once.

    Names outside the watch set, and watched names that were already
    forwarded, get the shared :class:`NoOpProjectObserver` instead of
    reaching the delegate.

    Attributes:
        _watch_set: Names requested at construction; never changes.
        _remaining: Watched names not yet forwarded. Guarded by ``_lock``.
    """

    def __init__(self, delegate: O, project_names: Union[str, Iterable[str]] = ()) -> None:
        super().__init__(delegate)
        if isinstance(project_names, str):
            project_names = (project_names,)
        self._watch_set: FrozenSet[str] = frozenset(project_names)
        self._remaining: Set[str] = set(self._watch_set)
        self._lock = threading.Lock()

    @property
    def includes(self) -> FrozenSet[str]:
        return self._watch_set

    @property
    def remaining(self) -> FrozenSet[str]:
        """Snapshot of the watched names not yet forwarded."""
        with self._lock:
            return frozenset(self._remaining)

    @property
    def exhausted(self) -> bool:
        """True once every watched name has been forwarded."""
        with self._lock:
            return not self._remaining

    def observe(self, project_name: str) -> ProjectObserver:
        if self._claim(project_name):
            logger.debug("Forwarding project %s to %r", project_name, self._delegate)
            return super().observe(project_name)
        logger.debug("Ignoring project %s (not watched or already observed)", project_name)
        return NoOpProjectObserver.instance()

    def _claim(self, project_name: str) -> bool:
        with self._lock:
            if project_name in self._remaining:
                self._remaining.remove(project_name)
                return True
            return False

    def __repr__(self) -> str:
        return f"FilteredObserver(delegate={self._delegate!r}, includes={sorted(self._watch_set)!r})"


def filter_observer(delegate: O, *project_names: str) -> FilteredObserver[O]:
    """Module-level alias for :meth:`SourceObserver.filter`."""
    return SourceObserver.filter(delegate, *project_names)


__all__ = [
    "ProjectObserver",
    "SourceObserver",
    "NoOpProjectObserver",
    "WrappedObserver",
    "FilteredObserver",
    "filter_observer",
]
