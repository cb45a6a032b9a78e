import logging
import threading

import pytest

from scm_observer._internal.exceptions import (
    AttributeTypeError,
    DiscoveryCancelledError,
    InvalidArgumentError,
    InvalidStateError,
)
from scm_observer.discovery.collecting import DEFAULT_LISTENER_NAME, CollectingObserver
from scm_observer.discovery.types import CandidateSource


def test_distinct_names_return_distinct_project_observers(consumer):
    names = ["api", "web", "docs", "infra"]

    projects = [consumer.observe(name) for name in names]

    assert len({id(project) for project in projects}) == len(names)
    assert list(consumer.projects) == names


def test_observing_a_name_twice_is_rejected(consumer):
    consumer.observe("api")

    with pytest.raises(InvalidArgumentError) as excinfo:
        consumer.observe("api")

    assert excinfo.value.project_name == "api"
    assert isinstance(excinfo.value, ValueError)
    assert list(consumer.projects) == ["api"]


def test_complete_twice_is_rejected(consumer):
    project = consumer.observe("api")
    project.complete()

    with pytest.raises(InvalidStateError):
        project.complete()


def test_sources_and_attributes_are_recorded(consumer):
    source = CandidateSource(id="api", remote="git@example.com:acme/api.git")
    project = consumer.observe("api")

    project.add_source(source)
    project.add_source(source)
    project.add_attribute("description", "Public API")
    project.add_attribute("homepage", None)
    project.complete()

    record = consumer.projects["api"]
    assert record.sources == (source, source)
    assert record.sources[0] is source
    assert record.attributes == {"description": "Public API", "homepage": None}
    assert record.completed
    assert consumer.completed_projects() == [record]


def test_project_with_no_sources_can_complete(consumer):
    consumer.observe("empty").complete()

    assert consumer.projects["empty"].sources == ()
    assert consumer.projects["empty"].completed


@pytest.mark.parametrize("first_key", [None, "description"])
def test_unknown_project_attribute_is_rejected(consumer, first_key):
    project = consumer.observe("api")
    if first_key:
        project.add_attribute(first_key, "set first")

    with pytest.raises(InvalidArgumentError) as excinfo:
        project.add_attribute("license", "MIT")

    assert excinfo.value.key == "license"


def test_project_attribute_key_can_only_be_set_once(consumer):
    project = consumer.observe("api")
    project.add_attribute("stars", 3)

    with pytest.raises(InvalidArgumentError):
        project.add_attribute("stars", 4)

    project.complete()
    assert consumer.projects["api"].attributes == {"stars": 3}


def test_project_attribute_type_mismatch(consumer):
    project = consumer.observe("api")

    with pytest.raises(AttributeTypeError) as excinfo:
        project.add_attribute("stars", "many")

    assert excinfo.value.key == "stars"
    assert isinstance(excinfo.value, TypeError)
    # a rejected value leaves the key free
    project.add_attribute("stars", 5)


def test_organization_attributes(consumer):
    with pytest.raises(AttributeTypeError):
        consumer.add_attribute("display_name", 7)

    consumer.add_attribute("display_name", "ACME Corp")

    with pytest.raises(InvalidArgumentError):
        consumer.add_attribute("display_name", "Again")
    with pytest.raises(InvalidArgumentError):
        consumer.add_attribute("avatar", "https://example.com/a.png")

    assert consumer.attributes == {"display_name": "ACME Corp"}


def test_default_vocabulary_rejects_every_key():
    observer = CollectingObserver(context="acme")

    with pytest.raises(InvalidArgumentError):
        observer.add_attribute("description", "x")
    with pytest.raises(InvalidArgumentError):
        observer.observe("api").add_attribute("description", "x")


def test_context_and_listener():
    listener = logging.getLogger("tests.listener")
    observer = CollectingObserver(context="acme", listener=listener)

    assert observer.context == "acme"
    assert observer.listener is listener
    assert CollectingObserver(context="acme").listener.name == DEFAULT_LISTENER_NAME


def test_context_is_required():
    with pytest.raises(InvalidArgumentError):
        CollectingObserver(context=None)


def test_includes_hint():
    assert CollectingObserver(context="acme").includes is None
    assert CollectingObserver(context="acme", includes=["a", "a", "b"]).includes == {"a", "b"}


def test_use_after_complete_is_rejected(consumer):
    project = consumer.observe("api")
    project.complete()

    with pytest.raises(InvalidStateError):
        project.add_source("late")
    with pytest.raises(InvalidStateError):
        project.add_attribute("description", "late")


def test_cancelled_complete_raises_and_leaves_project_incomplete(consumer):
    cancel = threading.Event()
    consumer.cancel_event = cancel
    project = consumer.observe("api")
    cancel.set()

    with pytest.raises(DiscoveryCancelledError) as excinfo:
        project.complete()

    assert excinfo.value.project_name == "api"
    assert not consumer.projects["api"].completed
    assert consumer.completed_projects() == []
    with pytest.raises(InvalidStateError):
        project.complete()


def test_completion_is_logged(consumer, caplog):
    with caplog.at_level(logging.INFO, logger=DEFAULT_LISTENER_NAME):
        consumer.observe("api").complete()

    assert "Found project api" in caplog.text


def test_distinct_names_from_many_threads(consumer):
    names = [f"repo-{i}" for i in range(50)]

    def worker(name):
        project = consumer.observe(name)
        project.add_source(f"git@example.com:acme/{name}.git")
        project.complete()

    threads = [threading.Thread(target=worker, args=(name,)) for name in names]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(consumer.projects) == sorted(names)
    assert len(consumer.completed_projects()) == len(names)


def test_snapshots_while_sources_are_added(consumer):
    project = consumer.observe("api")
    sources = [f"git@example.com:acme/api-{i}.git" for i in range(500)]

    def worker():
        for source in sources:
            project.add_source(source)
        project.complete()

    thread = threading.Thread(target=worker)
    thread.start()
    seen = []
    while thread.is_alive():
        record = consumer.projects["api"]
        # a snapshot is always a prefix of what was reported
        assert record.sources == tuple(sources[: len(record.sources)])
        seen.append(len(record.sources))
    thread.join()

    assert seen == sorted(seen)
    assert consumer.projects["api"].sources == tuple(sources)
    assert consumer.projects["api"].completed
