import pytest

from engine_components.core.components import (
    ComponentManager,
    apply_filters,
    in_namespace,
    registered,
    with_image,
    with_version,
)
from engine_components.core.errors import (
    NotOwnedError,
    RuntimeMutationError,
    RuntimeQueryError,
)
from engine_components.core.registry import Component, Registry

from conftest import FakeRuntime, RuntimeFailure


def test_list_keeps_owned_images_in_runtime_order(manager):
    assert manager.list() == ["srcd/gitbase:latest", "bblfsh/bblfshd:v2"]


def test_list_uses_first_tag_and_skips_untagged():
    runtime = FakeRuntime(images=[
        [],
        ["other/thing:1.0", "srcd/gitbase:latest"],
        ["pilosa/pilosa:v0.9.0", "other/alias:1"],
    ])
    manager = ComponentManager(runtime)

    assert manager.list() == ["pilosa/pilosa:v0.9.0"]


def test_list_applies_filters_conjunctively():
    runtime = FakeRuntime(images=[
        ["srcd/gitbase:latest"],
        ["srcd/gitbase-web:v1"],
        ["bblfsh/bblfshd:v1"],
        ["pilosa/pilosa:v0.9.0"],
    ])
    manager = ComponentManager(runtime)

    assert manager.list(in_namespace("srcd", "bblfsh"), with_version("v1")) == [
        "srcd/gitbase-web:v1",
        "bblfsh/bblfshd:v1",
    ]
    assert manager.list(with_image("srcd/gitbase")) == ["srcd/gitbase:latest"]
    assert manager.list(lambda ref: False) == []


def test_filters_short_circuit():
    seen = []

    def reject(ref):
        seen.append(("reject", ref))
        return False

    def record(ref):
        seen.append(("record", ref))
        return True

    assert apply_filters(["a", "b"], [reject, record]) == []
    assert seen == [("reject", "a"), ("reject", "b")]


def test_apply_filters_without_filters_keeps_everything():
    assert apply_filters(["b", "a"], []) == ["b", "a"]


def test_registered_filter():
    accept = registered()
    assert accept("srcd/gitbase:v0.20.0")
    assert not accept("srcd/unknown:latest")

    custom = Registry(components=[Component(name="srcd-cli-x", image="srcd/x")])
    assert registered(custom)("srcd/x:1")
    assert not registered(custom)("srcd/gitbase:latest")


def test_list_wraps_runtime_failure(runtime, manager):
    cause = RuntimeFailure("daemon unreachable")
    runtime.failures["list_images"] = cause

    with pytest.raises(RuntimeQueryError) as exc:
        manager.list()

    assert exc.value.__cause__ is cause
    assert str(exc.value) == "could not list components: daemon unreachable"


def test_install_pulls_image_and_version(runtime, manager):
    manager.install("srcd/gitbase:v0.17.0")
    manager.install("bblfsh/bblfshd")

    assert runtime.called("pull_image") == [
        ("srcd/gitbase", "v0.17.0"),
        ("bblfsh/bblfshd", "latest"),
    ]


@pytest.mark.parametrize("ref", ["notowned/x", "library/nginx:latest", "gitbase"])
def test_not_owned_never_reaches_runtime(runtime, manager, ref):
    with pytest.raises(NotOwnedError):
        manager.install(ref)
    with pytest.raises(NotOwnedError):
        manager.is_installed(ref)

    assert runtime.calls == []


def test_install_wraps_pull_failure(runtime, manager):
    cause = RuntimeFailure("manifest unknown")
    runtime.failures["pull_image"] = cause

    with pytest.raises(RuntimeMutationError) as exc:
        manager.install("srcd/gitbase:nope")

    assert exc.value.__cause__ is cause
    assert "unable to pull srcd/gitbase:nope" in str(exc.value)
    assert len(runtime.called("pull_image")) == 1


def test_is_installed(runtime, manager):
    runtime.installed.add("srcd/gitbase:latest")

    assert manager.is_installed("srcd/gitbase")
    assert not manager.is_installed("srcd/gitbase:v1")
    assert runtime.called("is_image_installed") == [
        ("srcd/gitbase", "latest"),
        ("srcd/gitbase", "v1"),
    ]


def test_is_installed_wraps_failure(runtime, manager):
    runtime.failures["is_image_installed"] = RuntimeFailure("boom")

    with pytest.raises(RuntimeQueryError):
        manager.is_installed("srcd/gitbase")


def test_status_reports_every_registry_component(runtime, manager):
    runtime.installed.update({"srcd/gitbase:latest", "pilosa/pilosa:v0.9.0"})

    statuses = {s.name: s for s in manager.status()}

    assert list(statuses) == manager.registry.names()
    assert statuses["srcd-cli-gitbase"].installed
    assert statuses["srcd-cli-gitbase"].workdir_dependant
    assert statuses["srcd-cli-pilosa"].reference == "pilosa/pilosa:v0.9.0"
    assert statuses["srcd-cli-pilosa"].installed
    assert not statuses["srcd-cli-bblfsh-web"].installed
    assert not statuses["srcd-cli-bblfsh-web"].workdir_dependant


def test_is_working_dir_dependant_uses_injected_registry(runtime):
    registry = Registry(components=[], workdir_dependants=[])
    manager = ComponentManager(runtime, registry=registry)

    assert not manager.is_working_dir_dependant("srcd-cli-gitbase")
