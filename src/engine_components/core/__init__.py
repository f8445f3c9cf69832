"""
Core Package
Component registry, identity rules and runtime orchestration
"""

from .components import (
    ComponentManager,
    ComponentStatus,
    FilterFunc,
    PurgePlan,
    apply_filters,
    in_namespace,
    registered,
    with_image,
    with_version
)
from .config import Settings, load_settings
from .errors import (
    ComponentError,
    ConfigError,
    NotOwnedError,
    PurgeError,
    RemovalTimeoutError,
    RuntimeMutationError,
    RuntimeQueryError,
    UnknownComponentError
)
from .identity import (
    NAMESPACES,
    TOOL_PREFIX,
    container_name,
    is_owned_image,
    is_owned_runtime_object,
    split_image_reference
)
from .registry import (
    BBLFSH_VOLUME,
    DEFAULT_COMPONENTS,
    DEFAULT_REGISTRY,
    Component,
    Registry
)
from .runtime import (
    ContainerInfo,
    ContainerRuntime,
    DockerRuntime,
    ImageInfo,
    VolumeInfo
)

__all__ = [
    # Components
    'ComponentManager',
    'ComponentStatus',
    'FilterFunc',
    'PurgePlan',
    'apply_filters',
    'in_namespace',
    'registered',
    'with_image',
    'with_version',

    # Config
    'Settings',
    'load_settings',

    # Errors
    'ComponentError',
    'ConfigError',
    'NotOwnedError',
    'PurgeError',
    'RemovalTimeoutError',
    'RuntimeMutationError',
    'RuntimeQueryError',
    'UnknownComponentError',

    # Identity
    'NAMESPACES',
    'TOOL_PREFIX',
    'container_name',
    'is_owned_image',
    'is_owned_runtime_object',
    'split_image_reference',

    # Registry
    'BBLFSH_VOLUME',
    'DEFAULT_COMPONENTS',
    'DEFAULT_REGISTRY',
    'Component',
    'Registry',

    # Runtime
    'ContainerInfo',
    'ContainerRuntime',
    'DockerRuntime',
    'ImageInfo',
    'VolumeInfo'
]
