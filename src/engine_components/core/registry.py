"""
Component registry
Static catalog of the containers the tool knows how to run
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import UnknownComponentError
from .identity import join_image_reference

BBLFSH_VOLUME = "srcd-cli-bblfsh-storage"


@dataclass(frozen=True)
class Component:
    """A known component: container name, image and optional pinned version"""
    name: str
    image: str
    version: str = ""

    @property
    def reference(self) -> str:
        return join_image_reference(self.image, self.version)


GITBASE = Component(name="srcd-cli-gitbase", image="srcd/gitbase")
GITBASE_WEB = Component(name="srcd-cli-gitbase-web", image="srcd/gitbase-web")
BBLFSHD = Component(name="srcd-cli-bblfshd", image="bblfsh/bblfshd")
BBLFSH_WEB = Component(name="srcd-cli-bblfsh-web", image="bblfsh/web")
PILOSA = Component(name="srcd-cli-pilosa", image="pilosa/pilosa", version="v0.9.0")

DEFAULT_COMPONENTS: Tuple[Component, ...] = (
    GITBASE,
    GITBASE_WEB,
    BBLFSHD,
    BBLFSH_WEB,
    PILOSA,
)

# Recreated whenever the working directory changes
WORKDIR_DEPENDANTS: Tuple[Component, ...] = (
    GITBASE,
    PILOSA,
    BBLFSHD,  # depends on the user dir, not the workdir
)


class Registry:
    """Immutable view over a catalog of components"""

    def __init__(
        self,
        components: Iterable[Component] = DEFAULT_COMPONENTS,
        workdir_dependants: Iterable[Component] = WORKDIR_DEPENDANTS,
    ):
        self._components = tuple(components)
        self._workdir_dependants = tuple(workdir_dependants)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self._components)

    def names(self) -> List[str]:
        return [c.name for c in self._components]

    def get(self, name: str) -> Component:
        """Get a component by name, raising UnknownComponentError if missing"""
        for c in self._components:
            if c.name == name:
                return c
        raise UnknownComponentError(name)

    def by_image(self, image: str) -> Optional[Component]:
        """Find the component running the given image repository"""
        for c in self._components:
            if c.image == image:
                return c
        return None

    def is_working_dir_dependant(self, name: str) -> bool:
        """Check if a component must be recreated when the working dir changes"""
        for c in self._workdir_dependants:
            if c.name == name:
                return True
        return False


DEFAULT_REGISTRY = Registry()
