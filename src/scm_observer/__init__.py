"""
scm_observer: callbacks for incremental repository discovery
============================================================

A navigator walks an organization's repositories and reports each project it
finds to a :class:`SourceObserver`. The observer hands back a
:class:`ProjectObserver` per project, which receives candidate sources and
attributes and is completed exactly once.

Examples:
    from scm_observer import CollectingObserver, StaticNavigator, filter_observer

    consumer = CollectingObserver(context="acme")
    navigator = StaticNavigator({
        "api": ["git@example.com:acme/api.git"],
        "web": ["git@example.com:acme/web.git"],
    })

    # Report everything
    navigator.visit_sources(consumer)

    # Or only the projects you care about, each at most once
    navigator.visit_sources(filter_observer(CollectingObserver(context="acme"), "web"))
"""

import importlib.metadata

from scm_observer._internal.exceptions import (
    AttributeTypeError,
    ConfigError,
    DiscoveryCancelledError,
    InvalidArgumentError,
    InvalidStateError,
    ObserverError,
)
from scm_observer.discovery import (
    AttributeSchema,
    AttributeSet,
    CandidateSource,
    CollectingObserver,
    FilteredObserver,
    Navigator,
    NoOpProjectObserver,
    ProjectObserver,
    ProjectRecord,
    SourceObserver,
    StaticNavigator,
    WrappedObserver,
    filter_observer,
)

# Version detection
try:
    __version__ = importlib.metadata.version("scm-observer")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    # Contracts
    "SourceObserver",
    "ProjectObserver",
    "WrappedObserver",
    "FilteredObserver",
    "NoOpProjectObserver",
    "filter_observer",
    # Implementations
    "CollectingObserver",
    "Navigator",
    "StaticNavigator",
    "AttributeSchema",
    "AttributeSet",
    "CandidateSource",
    "ProjectRecord",
    # Exceptions
    "ObserverError",
    "InvalidArgumentError",
    "AttributeTypeError",
    "InvalidStateError",
    "DiscoveryCancelledError",
    "ConfigError",
    "__version__",
]
