"""
Extension registry module.

Holds the factories the host uses to discover and build extensions.
Registration is explicit: the entry point calls register_default_extensions()
once at start-up instead of relying on import side effects.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ExtensionRegistrationError(Exception):
    """Raised for duplicate or unknown extension ids."""

    pass


class ExtensionFactory(BaseModel):
    """Static metadata and constructor of an extension.

    Attributes:
        id: Unique identifier (usually the package path)
        title: Display title
        description: Short description shown by the host
        builder: Callable creating a new extension instance
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    builder: Callable[..., Any]


_registry: dict[str, ExtensionFactory] = {}


def register_extension(factory: ExtensionFactory) -> None:
    """Register an extension factory.

    Args:
        factory: Factory to register

    Raises:
        ExtensionRegistrationError: If the id is already registered
    """
    if factory.id in _registry:
        msg = f"Extension already registered: {factory.id}"
        raise ExtensionRegistrationError(msg)

    _registry[factory.id] = factory
    logger.info("Extension registered: id=%s, title=%s", factory.id, factory.title)


def get_extension_factory(extension_id: str) -> ExtensionFactory:
    """Look up a registered factory.

    Args:
        extension_id: Extension id

    Returns:
        The registered factory

    Raises:
        ExtensionRegistrationError: If no factory has that id
    """
    try:
        return _registry[extension_id]
    except KeyError:
        msg = f"Extension not found: {extension_id}"
        raise ExtensionRegistrationError(msg) from None


def list_extensions() -> list[ExtensionFactory]:
    """Return every registered factory in registration order."""
    return list(_registry.values())


def clear_registry() -> None:
    """Remove every registered factory. Used by tests."""
    _registry.clear()
