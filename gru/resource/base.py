"""Core resource types: states, properties, configuration and the provider registry."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

DEFAULT_RESOURCE_NAMESPACE = "resource"


class ResourceError(Exception):
    """Base class for errors reported by resources."""


class InvalidTypeError(ResourceError):
    """Raised when a resource type is invalid."""

    def __init__(self, message: str = "Invalid resource type") -> None:
        super().__init__(message)


class InvalidNameError(ResourceError):
    """Raised when a resource name is invalid."""

    def __init__(self, message: str = "Invalid resource name") -> None:
        super().__init__(message)


class ResourceAbsentError(ResourceError):
    """Raised when a property makes no sense because the resource is absent."""

    def __init__(self, message: str = "Resource is absent") -> None:
        super().__init__(message)


@dataclass
class State:
    """The current and wanted states of a resource."""

    current: str
    want: str


def _default_logger() -> logging.Logger:
    logger = logging.getLogger("gru.resource")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


@dataclass
class Config:
    """Settings shared by the resources."""

    site_repo: str = ""
    logger: logging.Logger = field(default_factory=_default_logger)


DEFAULT_CONFIG = Config()


def logf(message: str, *args: Any) -> None:
    """Write a printf-style event to the default logger."""
    text = message % args if args else message
    DEFAULT_CONFIG.logger.info(text.rstrip("\n"))


@dataclass
class ResourceProperty:
    """A named resource property that can be checked and brought in sync."""

    name: str
    set_func: Callable[[], None]
    is_synced_func: Callable[[], bool]

    def set(self) -> None:
        """Set the property to its desired state."""
        self.set_func()

    def is_synced(self) -> bool:
        """Return True if the property is in its desired state."""
        return self.is_synced_func()


@dataclass
class Resource(ABC):
    """Base for all resources.

    ``subscribe`` maps ids of monitored resources to callables run when
    their state changes; subscribing also implies a dependency.
    """

    name: str
    type: str = ""
    state: str = ""
    require: list[str] = field(default_factory=list)
    present_states: list[str] = field(default_factory=list)
    absent_states: list[str] = field(default_factory=list)
    concurrent: bool = False
    properties: list[ResourceProperty] = field(default_factory=list)
    subscribe: dict[str, Callable[..., Any]] = field(default_factory=dict)

    def id(self) -> str:
        """Return the unique resource id."""
        return f"{self.type}[{self.name}]"

    def initialize(self) -> None:
        """Prepare the resource before it is processed."""

    def close(self) -> None:
        """Clean up after the resource has been processed."""

    def validate(self) -> None:
        """Check the resource, raising ResourceError if it is invalid."""
        if not self.type:
            raise InvalidTypeError()
        if not self.name:
            raise InvalidNameError()
        if self.state not in (*self.present_states, *self.absent_states):
            raise ResourceError(f"Invalid state '{self.state}'")

    @abstractmethod
    def evaluate(self) -> State:
        """Return the current and wanted state of the resource."""

    @abstractmethod
    def create(self) -> None:
        """Bring the resource into existence."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the resource."""


Provider = Callable[[str], Resource]


@dataclass(frozen=True)
class ProviderItem:
    """A registered resource provider."""

    type: str
    provider: Provider
    namespace: str = DEFAULT_RESOURCE_NAMESPACE


_provider_registry: list[ProviderItem] = []


def register_provider(*args: ProviderItem) -> None:
    """Add providers to the registry."""
    _provider_registry.extend(args)


def providers() -> list[ProviderItem]:
    """Return the registered providers in registration order."""
    return list(_provider_registry)