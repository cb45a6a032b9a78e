"""Configure pytest environment for all tests."""

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from scm_observer.discovery.attributes import AttributeSchema  # noqa: E402
from scm_observer.discovery.collecting import CollectingObserver  # noqa: E402
from scm_observer.discovery.observer import ProjectObserver, SourceObserver  # noqa: E402


class SpyProjectObserver(ProjectObserver):
    """Project observer that records what it receives."""

    def __init__(self, name, calls):
        self.name = name
        self.calls = calls
        self.sources = []

    def add_source(self, source):
        self.calls.append(("add_source", self.name, source))
        self.sources.append(source)

    def add_attribute(self, key, value):
        self.calls.append(("project_attribute", self.name, key, value))

    def complete(self):
        self.calls.append(("complete", self.name))


class SpyObserver(SourceObserver):
    """Source observer returning fixed sentinels and recording every call."""

    def __init__(self, context=None, listener=None, includes=None):
        self._context = context if context is not None else object()
        self._listener = listener if listener is not None else logging.getLogger("tests.spy")
        self._includes = includes
        self.calls = []
        self.projects = {}

    @property
    def context(self):
        return self._context

    @property
    def listener(self):
        return self._listener

    @property
    def includes(self):
        return self._includes

    def observe(self, project_name):
        self.calls.append(("observe", project_name))
        project = SpyProjectObserver(project_name, self.calls)
        self.projects[project_name] = project
        return project

    def add_attribute(self, key, value):
        self.calls.append(("attribute", key, value))


@pytest.fixture
def spy():
    return SpyObserver()


@pytest.fixture
def project_schema():
    return AttributeSchema({"description": str, "stars": int, "homepage": str | None})


@pytest.fixture
def consumer(project_schema):
    return CollectingObserver(
        context="acme",
        organization_schema=AttributeSchema({"display_name": str}),
        project_schema=project_schema,
    )
