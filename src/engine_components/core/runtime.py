"""
Container runtime access
The ContainerRuntime protocol is the only way the core reaches the engine;
DockerRuntime implements it on top of the Docker SDK
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

import docker
import requests

from .errors import RemovalTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class ImageInfo:
    """Local image as reported by the runtime"""
    tags: List[str] = field(default_factory=list)


@dataclass
class ContainerInfo:
    """Container as reported by the runtime (names keep their leading '/')"""
    names: List[str] = field(default_factory=list)


@dataclass
class VolumeInfo:
    """Volume as reported by the runtime"""
    name: str = ""


class ContainerRuntime(Protocol):
    """Operations the component manager needs from a container engine"""

    def list_images(self) -> List[ImageInfo]:
        ...

    def pull_image(self, image: str, version: str) -> None:
        ...

    def is_image_installed(self, image: str, version: str) -> bool:
        ...

    def list_containers(self) -> List[ContainerInfo]:
        ...

    def kill_container(self, name: str) -> None:
        ...

    def list_volumes(self) -> List[VolumeInfo]:
        ...

    def remove_volume(self, name: str) -> None:
        ...

    def remove_image(self, ref: str, timeout: float) -> None:
        """Remove an image, raising RemovalTimeoutError after timeout seconds"""
        ...


class DockerRuntime:
    """ContainerRuntime backed by the local Docker daemon"""

    def __init__(
        self,
        client: Optional[docker.DockerClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self._client = client
        self._base_url = base_url
        self._timeout = timeout

    def _connect(self, timeout: Optional[float] = None) -> docker.DockerClient:
        kwargs = {}
        if timeout:
            kwargs["timeout"] = timeout
        if self._base_url:
            return docker.DockerClient(base_url=self._base_url, **kwargs)
        return docker.from_env(**kwargs)

    @property
    def client(self) -> docker.DockerClient:
        """Docker client, connected on first use"""
        if self._client is None:
            self._client = self._connect(self._timeout)
        return self._client

    def list_images(self) -> List[ImageInfo]:
        return [ImageInfo(tags=list(img.tags)) for img in self.client.images.list()]

    def pull_image(self, image: str, version: str) -> None:
        logger.debug("pulling image %s:%s", image, version)
        self.client.images.pull(image, tag=version)

    def is_image_installed(self, image: str, version: str) -> bool:
        try:
            self.client.images.get(f"{image}:{version}")
        except docker.errors.ImageNotFound:
            return False
        return True

    def list_containers(self) -> List[ContainerInfo]:
        # sparse listing keeps the raw API names, leading '/' included
        containers = self.client.containers.list(all=True, sparse=True)
        result = []
        for c in containers:
            names = c.attrs.get("Names")
            if names is None:
                names = [f"/{c.name}"] if c.name else []
            result.append(ContainerInfo(names=list(names)))
        return result

    def kill_container(self, name: str) -> None:
        logger.debug("force removing container %s", name)
        self.client.containers.get(name).remove(force=True)

    def list_volumes(self) -> List[VolumeInfo]:
        return [VolumeInfo(name=v.name) for v in self.client.volumes.list()]

    def remove_volume(self, name: str) -> None:
        logger.debug("removing volume %s", name)
        self.client.volumes.get(name).remove()

    def remove_image(self, ref: str, timeout: float) -> None:
        logger.debug("removing image %s (timeout %ss)", ref, timeout)
        # dedicated client so the deadline bounds this HTTP request only
        client = self._connect(timeout)
        try:
            client.images.remove(ref, force=True)
        except requests.exceptions.Timeout as e:
            raise RemovalTimeoutError(ref, timeout) from e
        finally:
            client.close()
