"""
Error types for component management
Every runtime failure is wrapped once with the context of the failing step
"""

from typing import Optional


class ComponentError(Exception):
    """Base class for all component management errors"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        cause = str(self.__cause__) if self.__cause__ is not None else ""
        if cause:
            return f"{self.message}: {cause}"
        return self.message


class NotOwnedError(ComponentError, ValueError):
    """Identifier is not in any of the tool's namespaces"""

    def __init__(self, ref: str):
        super().__init__(f"not srcd component: {ref}")
        self.ref = ref


class UnknownComponentError(ComponentError, KeyError):
    """Component name is not in the registry"""

    def __init__(self, name: str):
        super().__init__(f"unknown component: {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.message


class RuntimeQueryError(ComponentError):
    """Listing or inspecting runtime objects failed"""


class RuntimeMutationError(ComponentError):
    """Pulling, killing or removing a runtime object failed"""


class RemovalTimeoutError(RuntimeMutationError):
    """An image removal did not finish within its bounded wait"""

    def __init__(self, ref: str, timeout: float):
        super().__init__(f"removal of image {ref} timed out after {timeout:g}s")
        self.ref = ref
        self.timeout = timeout


class PurgeError(RuntimeMutationError):
    """A purge stage failed; later stages were not attempted"""

    def __init__(self, stage: str, message: str, cause: BaseException):
        super().__init__(message, cause)
        self.stage = stage


class ConfigError(ComponentError):
    """Configuration file could not be used"""
