"""
Identity rules
Decide whether an image, container or volume belongs to the tool
"""

from typing import Iterable, Tuple

# Upstream namespaces whose images are managed by the tool
NAMESPACES: Tuple[str, ...] = (
    "srcd",
    "bblfsh",
    "pilosa",
)

# Containers and volumes created by the tool carry this prefix
TOOL_PREFIX = "srcd-cli-"

DEFAULT_VERSION = "latest"


def image_namespace(ref: str) -> str:
    """Return the namespace of an image reference (text before the first '/')"""
    return ref.split("/", 1)[0]


def is_owned_image(ref: str, namespaces: Iterable[str] = NAMESPACES) -> bool:
    """Check whether an image reference belongs to one of our namespaces"""
    return image_namespace(ref) in tuple(namespaces)


def is_owned_runtime_object(name: str, prefix: str = TOOL_PREFIX) -> bool:
    """Check whether a container or volume name was created by the tool"""
    return name.startswith(prefix)


def container_name(raw: str) -> str:
    """Strip the leading '/' the Docker API reports on container names"""
    if raw.startswith("/"):
        return raw[1:]
    return raw


def split_image_reference(ref: str) -> Tuple[str, str]:
    """
    Split an image reference into image and version

    Only the first ':' separates the tag; anything after a second ':' is
    dropped. The version defaults to 'latest'.

    Returns: (image: str, version: str)
    """
    parts = ref.split(":")
    image = parts[0]
    version = DEFAULT_VERSION
    if len(parts) > 1:
        version = parts[1]
    return image, version


def join_image_reference(image: str, version: str = "") -> str:
    """Build an 'image:version' reference, defaulting to 'latest'"""
    return f"{image}:{version or DEFAULT_VERSION}"
