import time

import pytest

from engine_components.core.components import ComponentManager
from engine_components.core.runtime import ContainerInfo, ImageInfo, VolumeInfo


class RuntimeFailure(Exception):
    pass


class FakeRuntime:
    """In-memory ContainerRuntime recording every call"""

    def __init__(self, images=None, containers=None, volumes=None):
        self.images = [ImageInfo(tags=list(t)) for t in (images or [])]
        self.containers = [ContainerInfo(names=list(n)) for n in (containers or [])]
        self.volumes = [VolumeInfo(name=n) for n in (volumes or [])]
        self.installed = set()
        self.calls = []
        # method name -> exception, or (argument, exception)
        self.failures = {}
        self.slow_images = {}
        self.removal_timeouts = []

    def _maybe_fail(self, method, arg=None):
        failure = self.failures.get(method)
        if failure is None:
            return
        if isinstance(failure, tuple):
            target, exc = failure
            if target == arg:
                raise exc
            return
        raise failure

    def list_images(self):
        self.calls.append(("list_images",))
        self._maybe_fail("list_images")
        return self.images

    def pull_image(self, image, version):
        self.calls.append(("pull_image", image, version))
        self._maybe_fail("pull_image", f"{image}:{version}")
        self.installed.add(f"{image}:{version}")

    def is_image_installed(self, image, version):
        self.calls.append(("is_image_installed", image, version))
        self._maybe_fail("is_image_installed", f"{image}:{version}")
        return f"{image}:{version}" in self.installed

    def list_containers(self):
        self.calls.append(("list_containers",))
        self._maybe_fail("list_containers")
        return self.containers

    def kill_container(self, name):
        self.calls.append(("kill_container", name))
        self._maybe_fail("kill_container", name)

    def list_volumes(self):
        self.calls.append(("list_volumes",))
        self._maybe_fail("list_volumes")
        return self.volumes

    def remove_volume(self, name):
        self.calls.append(("remove_volume", name))
        self._maybe_fail("remove_volume", name)

    def remove_image(self, ref, timeout):
        self.calls.append(("remove_image", ref))
        self.removal_timeouts.append(timeout)
        if ref in self.slow_images:
            time.sleep(self.slow_images[ref])
        self._maybe_fail("remove_image", ref)

    def called(self, method):
        return [c[1:] for c in self.calls if c[0] == method]


@pytest.fixture
def runtime():
    return FakeRuntime(
        images=[
            ["srcd/gitbase:latest"],
            ["other/thing:1.0"],
            ["bblfsh/bblfshd:v2"],
        ],
        containers=[
            ["/srcd-cli-gitbase"],
            ["/unrelated"],
            ["/srcd-cli-bblfshd"],
        ],
        volumes=["srcd-cli-bblfsh-storage", "postgres-data"],
    )


@pytest.fixture
def manager(runtime):
    return ComponentManager(runtime, image_removal_timeout=5)
