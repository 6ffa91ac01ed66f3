"""Tests for name/type resolution, lifetimes and cycle detection."""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any

import pytest

from compwire import (
    ClassSource,
    CompwireAmbiguousComponentError,
    CompwireCircularDependencyError,
    CompwireComponentNotResolvedError,
    Container,
    NameClue,
    TypeClue,
    autowired,
    component,
)
from compwire._internal.registry import ComponentOrigin, RegistryEntry


class Storage:
    pass


class Notifier(ABC):
    pass


def test_singleton_field_receives_built_in_instance(container: Container) -> None:
    @component
    class Service:
        log = autowired("logger")

    logger_instance = logging.getLogger("compwire.tests.scenario")
    container.autowire(
        components={"logger": logger_instance},
        scans=[ClassSource(Service)],
    )

    assert container.get("Service").log is logger_instance


def test_base_type_lookup_returns_new_subtype_instance_each_call(
    container: Container,
) -> None:
    @component(multiple=True)
    class DiskStorage(Storage):
        pass

    container.autowire(scans=[ClassSource(DiskStorage)])

    first = container.get(Storage)
    second = container.get(Storage)

    assert isinstance(first, DiskStorage)
    assert isinstance(second, DiskStorage)
    assert first is not second


def test_singleton_is_identical_by_name_and_by_type(container: Container) -> None:
    @component("storage")
    class MemoryStorage(Storage):
        pass

    container.autowire(scans=[ClassSource(MemoryStorage)])

    by_name = container.get("storage")
    assert container.get("storage") is by_name
    assert container.get(MemoryStorage) is by_name
    assert container.get(Storage) is by_name


def test_transient_instances_are_wired_independently(container: Container) -> None:
    @component("connection", multiple=True)
    class Connection:
        pass

    @component("repository", multiple=True)
    class Repository:
        connection = autowired("connection")

    container.autowire(scans=[ClassSource(Connection, Repository)])

    first = container.get("repository")
    second = container.get("repository")

    assert first is not second
    assert isinstance(first.connection, Connection)
    assert isinstance(second.connection, Connection)
    assert first.connection is not second.connection


def test_distinct_names_never_share_an_instance(container: Container) -> None:
    @component("primary")
    class Primary:
        pass

    @component("secondary")
    class Secondary:
        pass

    container.autowire(
        components={"config": {"debug": True}},
        scans=[ClassSource(Primary, Secondary)],
    )

    instances = [container.get(name) for name in ("primary", "secondary", "config")]
    assert len({id(instance) for instance in instances}) == 3


def test_type_lookup_is_pinned_by_cache(container: Container) -> None:
    @component(multiple=True)
    class DiskStorage(Storage):
        pass

    class CloudStorage(Storage):
        pass

    container.autowire(scans=[ClassSource(DiskStorage)])
    assert isinstance(container.get(Storage), DiskStorage)

    container._registry.register(
        RegistryEntry(
            name="cloud",
            concrete_type=CloudStorage,
            origin=ComponentOrigin.DISCOVERED,
        ),
    )

    assert isinstance(container.get(Storage), DiskStorage)


def test_base_type_matching_several_components_is_ambiguous(
    container: Container,
) -> None:
    @component("disk")
    class DiskStorage(Storage):
        pass

    @component("cloud")
    class CloudStorage(Storage):
        pass

    container.autowire(scans=[ClassSource(DiskStorage, CloudStorage)])

    with pytest.raises(CompwireAmbiguousComponentError) as exc_info:
        container.get(Storage)

    assert exc_info.value.requested is Storage
    assert exc_info.value.matched_names == ("disk", "cloud")
    assert "disk, cloud" in str(exc_info.value)
    assert isinstance(container.get("disk"), DiskStorage)


def test_exact_type_and_subtype_are_both_matches(container: Container) -> None:
    @component("base")
    class BaseStorage(Storage):
        pass

    @component("derived")
    class DerivedStorage(BaseStorage):
        pass

    container.autowire(scans=[ClassSource(BaseStorage, DerivedStorage)])

    with pytest.raises(CompwireAmbiguousComponentError) as exc_info:
        container.get(BaseStorage)

    assert exc_info.value.matched_names == ("base", "derived")
    assert isinstance(container.get(DerivedStorage), DerivedStorage)


def test_transient_cycle_is_detected(container: Container) -> None:
    @component("x", multiple=True)
    class X:
        y = autowired("y")

    @component("y", multiple=True)
    class Y:
        x = autowired("x")

    container.autowire(scans=[ClassSource(X, Y)])

    with pytest.raises(CompwireCircularDependencyError) as exc_info:
        container.get("x")

    assert exc_info.value.name == "x"
    assert exc_info.value.chain == ("x", "y")
    assert "x -> y -> x" in str(exc_info.value)


def test_transient_self_reference_is_a_cycle(container: Container) -> None:
    @component("node", multiple=True)
    class Node:
        next = autowired("node")

    container.autowire(scans=[ClassSource(Node)])

    with pytest.raises(CompwireCircularDependencyError):
        container.get("node")


def test_shared_transient_dependency_is_not_a_cycle(container: Container) -> None:
    @component("settings")
    class Settings:
        pass

    @component("session", multiple=True)
    class Session:
        settings = autowired("settings")

    @component("reader", multiple=True)
    class Reader:
        session = autowired("session")

    @component("writer", multiple=True)
    class Writer:
        session = autowired("session")

    @component("unit_of_work", multiple=True)
    class UnitOfWork:
        reader = autowired("reader")
        writer = autowired("writer")

    container.autowire(scans=[ClassSource(Settings, Session, Reader, Writer, UnitOfWork)])

    unit = container.get("unit_of_work")

    assert unit.reader.session is not unit.writer.session
    assert unit.reader.session.settings is unit.writer.session.settings


def test_singleton_breaks_cycle_through_transient(container: Container) -> None:
    @component("hub")
    class Hub:
        spoke = autowired("spoke")

    @component("spoke", multiple=True)
    class Spoke:
        hub = autowired("hub")

    container.autowire(scans=[ClassSource(Hub, Spoke)])

    hub = container.get("hub")
    assert hub.spoke.hub is hub
    assert container.get("spoke").hub is hub


def test_options_override_declared_defaults(container: Container) -> None:
    @component("mailer", {"host": "localhost", "port": 25}, multiple=True)
    class Mailer:
        def __init__(self, host: str, port: int) -> None:
            self.host = host
            self.port = port

    container.autowire(scans=[ClassSource(Mailer)])

    default = container.get("mailer")
    custom = container.get("mailer", {"host": "smtp.example.com", "port": 587})

    assert (default.host, default.port) == ("localhost", 25)
    assert (custom.host, custom.port) == ("smtp.example.com", 587)


def test_autowired_options_reach_transient_constructor(container: Container) -> None:
    @component("counter", multiple=True)
    class Counter:
        def __init__(self, start: int = 0) -> None:
            self.value = start

    @component("report", multiple=True)
    class Report:
        counter = autowired("counter", {"start": 10})

    container.autowire(scans=[ClassSource(Counter, Report)])

    assert container.get("report").counter.value == 10
    assert container.get("counter").value == 0


def test_options_are_ignored_for_singletons(container: Container) -> None:
    @component("cache", {"size": 8})
    class Cache:
        def __init__(self, size: int) -> None:
            self.size = size

    container.autowire(scans=[ClassSource(Cache)])

    assert container.get("cache", {"size": 64}).size == 8


def test_built_in_component_is_matched_by_type(container: Container) -> None:
    logger_instance = logging.getLogger("compwire.tests.by_type")

    container.autowire(components={"logger": logger_instance})

    assert container.get(logging.Logger) is logger_instance


def test_falsy_built_in_component_is_returned(container: Container) -> None:
    container.autowire(components={"retries": 0, "tags": []})

    assert container.get("retries") == 0
    assert container.get("tags") == []


def test_virtual_subclass_is_not_a_match(container: Container) -> None:
    @component("email")
    class EmailNotifier:
        pass

    Notifier.register(EmailNotifier)
    container.autowire(scans=[ClassSource(EmailNotifier)])

    with pytest.raises(CompwireComponentNotResolvedError) as exc_info:
        container.get(Notifier)

    assert exc_info.value.clue == TypeClue(Notifier)


def test_unknown_name_is_not_resolved(container: Container) -> None:
    container.autowire()

    with pytest.raises(CompwireComponentNotResolvedError) as exc_info:
        container.get("missing")

    assert exc_info.value.clue == NameClue("missing")
    assert "missing" in str(exc_info.value)


def test_failed_lookup_keeps_cached_entries(container: Container) -> None:
    @component("clock")
    class Clock:
        pass

    container.autowire(scans=[ClassSource(Clock)])
    clock = container.get(Clock)

    with pytest.raises(CompwireComponentNotResolvedError):
        container.get("calendar")

    assert container.get(Clock) is clock
    assert "Clock" in container._resolved


def test_failed_nested_resolution_keeps_earlier_sub_resolutions(
    container: Container,
) -> None:
    @component("engine", multiple=True)
    class Engine:
        pass

    @component("car", multiple=True)
    class Car:
        engine = autowired("engine")
        wheels = autowired("wheels")

    container.autowire(scans=[ClassSource(Engine, Car)])

    with pytest.raises(CompwireComponentNotResolvedError):
        container.get("car")

    assert "engine" in container._resolved
    assert "wheels" not in container._resolved


def test_type_clue_uses_class_name_before_matching(container: Container) -> None:
    @component
    class Storage:
        pass

    @component("other")
    class OtherStorage(Storage):
        pass

    container.autowire(scans=[ClassSource(Storage, OtherStorage)])

    assert type(container.get(Storage)) is Storage


def test_get_accepts_prebuilt_clues(container: Container) -> None:
    @component("pipeline", multiple=True)
    class Pipeline:
        pass

    container.autowire(scans=[ClassSource(Pipeline)])

    assert isinstance(container.get(NameClue("pipeline")), Pipeline)
    assert isinstance(container.get(TypeClue(Pipeline)), Pipeline)


def test_transient_without_autowired_fields_skips_wiring(container: Container) -> None:
    constructed: list[Any] = []

    @component("event", multiple=True)
    class Event:
        def __init__(self) -> None:
            constructed.append(self)

    container.autowire(scans=[ClassSource(Event)])

    event = container.get("event")

    assert constructed == [event]
