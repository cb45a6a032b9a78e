"""Discovery-layer primitives: observer contracts, filters and navigators."""

from .attributes import AttributeSchema, AttributeSet, parse_type_name  # noqa: F401
from .collecting import CollectingObserver  # noqa: F401
from .navigator import Navigator, StaticNavigator  # noqa: F401
from .observer import (  # noqa: F401
    FilteredObserver,
    NoOpProjectObserver,
    ProjectObserver,
    SourceObserver,
    WrappedObserver,
    filter_observer,
)
from .types import CandidateSource, ProjectRecord  # noqa: F401

__all__ = [
    "AttributeSchema",
    "AttributeSet",
    "CandidateSource",
    "CollectingObserver",
    "FilteredObserver",
    "Navigator",
    "NoOpProjectObserver",
    "ProjectObserver",
    "ProjectRecord",
    "SourceObserver",
    "StaticNavigator",
    "WrappedObserver",
    "filter_observer",
    "parse_type_name",
]
