"""
Component management
Listing, installation and purge of the tool's images, containers and volumes
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Sequence, Tuple

from .errors import (
    NotOwnedError,
    PurgeError,
    RemovalTimeoutError,
    RuntimeMutationError,
    RuntimeQueryError,
)
from .identity import (
    NAMESPACES,
    TOOL_PREFIX,
    container_name,
    image_namespace,
    is_owned_image,
    is_owned_runtime_object,
    split_image_reference,
)
from .registry import DEFAULT_REGISTRY, Registry
from .runtime import ContainerRuntime

logger = logging.getLogger(__name__)

FilterFunc = Callable[[str], bool]

# Bounded wait for a single image removal during purge
IMAGE_REMOVAL_TIMEOUT = 60.0


def apply_filters(items: Iterable[str], filters: Sequence[FilterFunc]) -> List[str]:
    """Keep the items accepted by every filter, preserving order"""
    result = []
    for item in items:
        if all(f(item) for f in filters):
            result.append(item)
    return result


def in_namespace(*namespaces: str) -> FilterFunc:
    """Accept references whose namespace is one of the given ones"""
    def accept(ref: str) -> bool:
        return image_namespace(ref) in namespaces
    return accept


def with_image(image: str) -> FilterFunc:
    """Accept references to the given image repository, any version"""
    def accept(ref: str) -> bool:
        return split_image_reference(ref)[0] == image
    return accept


def with_version(version: str) -> FilterFunc:
    def accept(ref: str) -> bool:
        return split_image_reference(ref)[1] == version
    return accept


def registered(registry: Registry = DEFAULT_REGISTRY) -> FilterFunc:
    """Accept references whose image is part of the registry catalog"""
    def accept(ref: str) -> bool:
        return registry.by_image(split_image_reference(ref)[0]) is not None
    return accept


@dataclass
class ComponentStatus:
    """Installation state of a registry component"""
    name: str
    reference: str
    installed: bool
    workdir_dependant: bool = False


@dataclass
class PurgePlan:
    """Runtime objects a purge would destroy"""
    containers: List[str] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.containers or self.volumes or self.images)


class ComponentManager:
    """
    Manage the lifecycle of the tool's components on a container runtime

    The registry, namespaces and tool prefix are fixed at construction;
    the runtime is the only source of truth for what is installed.
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        registry: Registry = DEFAULT_REGISTRY,
        namespaces: Sequence[str] = NAMESPACES,
        prefix: str = TOOL_PREFIX,
        image_removal_timeout: float = IMAGE_REMOVAL_TIMEOUT,
    ):
        self.runtime = runtime
        self.registry = registry
        self.namespaces = tuple(namespaces)
        self.prefix = prefix
        self.image_removal_timeout = image_removal_timeout

    # Identity

    def is_owned(self, ref: str) -> bool:
        return is_owned_image(ref, self.namespaces)

    def is_working_dir_dependant(self, name: str) -> bool:
        return self.registry.is_working_dir_dependant(name)

    # Listing

    def list(self, *filters: FilterFunc) -> List[str]:
        """
        List installed component images as 'image:tag'

        Only the first tag of each image is considered and untagged images
        are skipped. Filters are applied conjunctively.
        """
        try:
            images = self.runtime.list_images()
        except Exception as e:
            raise RuntimeQueryError("could not list components") from e

        result = []
        for img in images:
            if not img.tags:
                continue

            if self.is_owned(img.tags[0]):
                result.append(img.tags[0])

        if filters:
            return apply_filters(result, filters)

        return result

    # Install / status

    def install(self, ref: str) -> None:
        """Pull a component image; the version defaults to 'latest'"""
        if not self.is_owned(ref):
            raise NotOwnedError(ref)

        image, version = split_image_reference(ref)
        logger.info("installing %s:%s", image, version)
        try:
            self.runtime.pull_image(image, version)
        except Exception as e:
            raise RuntimeMutationError(f"unable to pull {image}:{version}") from e

    def is_installed(self, ref: str) -> bool:
        """Check whether a component image is present locally"""
        if not self.is_owned(ref):
            raise NotOwnedError(ref)

        image, version = split_image_reference(ref)
        try:
            return self.runtime.is_image_installed(image, version)
        except Exception as e:
            raise RuntimeQueryError(f"unable to inspect {image}:{version}") from e

    def status(self) -> List[ComponentStatus]:
        """Installation state of every registry component"""
        return [
            ComponentStatus(
                name=c.name,
                reference=c.reference,
                installed=self.is_installed(c.reference),
                workdir_dependant=self.is_working_dir_dependant(c.name),
            )
            for c in self.registry
        ]

    # Purge

    def _stages(self) -> List[Tuple[str, str, Callable[[], None]]]:
        return [
            ("containers", "unable to remove all containers", self._remove_containers),
            ("volumes", "unable to remove volumes", self._remove_volumes),
            ("images", "unable to remove all images", self._remove_images),
        ]

    def purge(self) -> None:
        """
        Remove every container, volume and image owned by the tool

        Stages run in order and the first failure aborts the rest; objects
        removed before the failure stay removed.
        """
        for stage, message, run in self._stages():
            logger.info("removing %s...", stage)
            try:
                run()
            except Exception as e:
                raise PurgeError(stage, message, e) from e

    def plan_purge(self) -> PurgePlan:
        """Collect what purge would remove, without removing anything"""
        return PurgePlan(
            containers=self._owned_containers(),
            volumes=self._owned_volumes(),
            images=self.list(),
        )

    def _owned_containers(self) -> List[str]:
        try:
            containers = self.runtime.list_containers()
        except Exception as e:
            raise RuntimeQueryError("could not list containers") from e

        names = []
        for c in containers:
            if not c.names:
                continue

            name = container_name(c.names[0])
            if is_owned_runtime_object(name, self.prefix):
                names.append(name)
        return names

    def _owned_volumes(self) -> List[str]:
        try:
            volumes = self.runtime.list_volumes()
        except Exception as e:
            raise RuntimeQueryError("could not list volumes") from e

        return [v.name for v in volumes if is_owned_runtime_object(v.name, self.prefix)]

    def _remove_containers(self) -> None:
        for name in self._owned_containers():
            logger.info("removing container %s", name)
            try:
                self.runtime.kill_container(name)
            except Exception as e:
                raise RuntimeMutationError(f"unable to kill container {name}") from e

    def _remove_volumes(self) -> None:
        for name in self._owned_volumes():
            logger.info("removing volume %s", name)
            try:
                self.runtime.remove_volume(name)
            except Exception as e:
                raise RuntimeMutationError(f"unable to remove volume {name}") from e

    def _remove_images(self) -> None:
        for ref in self.list():
            logger.info("removing image %s", ref)
            self._remove_image(ref)

    def _remove_image(self, ref: str) -> None:
        """
        Remove one image, giving up after image_removal_timeout seconds

        The deadline is handed to the runtime, which bounds the engine call
        itself. The call also runs on a daemon thread that is abandoned once
        the deadline passes, so a runtime ignoring its deadline cannot hang
        the purge or keep the process alive.
        """
        timeout = self.image_removal_timeout
        errors: List[Exception] = []

        def remove():
            try:
                self.runtime.remove_image(ref, timeout)
            except Exception as e:
                errors.append(e)

        worker = threading.Thread(target=remove, name=f"remove-image-{ref}", daemon=True)
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            raise RemovalTimeoutError(ref, timeout)

        if errors:
            if isinstance(errors[0], RemovalTimeoutError):
                raise errors[0]
            raise RuntimeMutationError(f"unable to remove image {ref}") from errors[0]
