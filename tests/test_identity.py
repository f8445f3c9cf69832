import pytest

from engine_components.core.identity import (
    container_name,
    image_namespace,
    is_owned_image,
    is_owned_runtime_object,
    join_image_reference,
    split_image_reference,
)


@pytest.mark.parametrize("ref, expected", [
    ("a/b", ("a/b", "latest")),
    ("a/b:v1", ("a/b", "v1")),
    ("a/b:v1:extra", ("a/b", "v1")),
    ("srcd/gitbase:", ("srcd/gitbase", "")),
])
def test_split_image_reference(ref, expected):
    assert split_image_reference(ref) == expected


@pytest.mark.parametrize("ref, owned", [
    ("srcd/gitbase", True),
    ("bblfsh/bblfshd", True),
    ("pilosa/pilosa:v0.9.0", True),
    ("library/nginx", False),
    ("noslash", False),
    ("srcd", True),
    ("SRCD/gitbase", False),
    (" srcd/gitbase", False),
])
def test_is_owned_image(ref, owned):
    assert is_owned_image(ref) is owned


def test_is_owned_image_custom_namespaces():
    assert is_owned_image("acme/tool", namespaces=("acme",))
    assert not is_owned_image("srcd/gitbase", namespaces=("acme",))


def test_image_namespace():
    assert image_namespace("srcd/gitbase-web:v1") == "srcd"
    assert image_namespace("registry.io/srcd/gitbase") == "registry.io"
    assert image_namespace("noslash") == "noslash"


def test_runtime_object_ownership():
    assert is_owned_runtime_object(container_name("/srcd-cli-gitbase"))
    assert is_owned_runtime_object("srcd-cli-bblfsh-storage")
    assert not is_owned_runtime_object("other-container")
    # the prefix check does not strip anything by itself
    assert not is_owned_runtime_object("/srcd-cli-gitbase")
    assert is_owned_runtime_object("acme-db", prefix="acme-")


def test_container_name_strips_single_slash():
    assert container_name("/srcd-cli-gitbase") == "srcd-cli-gitbase"
    assert container_name("srcd-cli-gitbase") == "srcd-cli-gitbase"
    assert container_name("//nested") == "/nested"


def test_join_image_reference():
    assert join_image_reference("srcd/gitbase") == "srcd/gitbase:latest"
    assert join_image_reference("pilosa/pilosa", "v0.9.0") == "pilosa/pilosa:v0.9.0"
