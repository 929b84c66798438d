"""
Ban type registries.

Two layers, mirroring how ban types are wired at startup:

- A catalog of ban type *classes*, filled by the @register_ban_type
  decorator when the built-in type modules are imported.
- BanTypeRegistry, the named collection of ban type *instances* the
  manager dispatches to.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type

from openban.types.protocols import BanType

logger = logging.getLogger(__name__)

# Namespace under which ban types are conventionally registered,
# e.g. "ban.type.ip". BanTypeRegistry.resolve() falls back to it.
TYPE_NAMESPACE = "ban.type."

_type_classes: Dict[str, Type[BanType]] = {}


def register_ban_type(name: str) -> Callable[[Type[BanType]], Type[BanType]]:
    """
    Decorator to add a ban type class to the catalog.

    Usage:
        @register_ban_type("ip")
        class IpBanType(StoredBanType):
            ...
    """

    def decorator(cls: Type[BanType]) -> Type[BanType]:
        if name in _type_classes:
            logger.warning(f"Overwriting existing ban type class registration: {name}")
        _type_classes[name] = cls
        logger.debug(f"Registered ban type class: {name}")
        return cls

    return decorator


def get_type_class(name: str) -> Optional[Type[BanType]]:
    """Get a ban type class from the catalog, or None if not found."""
    return _type_classes.get(name)


def list_type_classes() -> List[str]:
    """List catalogued ban type names."""
    return list(_type_classes.keys())


class BanTypeRegistry:
    """
    Named collection of ban type instances.

    Iteration yields instances in registration order, which keeps
    aggregated checks and log output deterministic.

    Usage:
        registry = BanTypeRegistry()
        registry.register("ban.type.ip", IpBanType(storage))

        registry.resolve("ip")   # -> "ban.type.ip"
        registry["ban.type.ip"]  # -> the instance
    """

    def __init__(self):
        self._types: Dict[str, BanType] = {}

    def register(self, name: str, ban_type: BanType) -> None:
        if name in self._types:
            logger.warning(f"Overwriting existing ban type: {name}")
        self._types[name] = ban_type
        logger.debug(f"Registered ban type: {name}")

    def resolve(self, name: Any) -> Optional[str]:
        """
        Resolve a ban type name to a registered key.

        The name is tried as-is first, then prefixed with TYPE_NAMESPACE.

        Returns:
            The registered key, or None if neither form is registered
        """
        if not isinstance(name, str):
            return None

        if name in self._types:
            return name

        namespaced = TYPE_NAMESPACE + name
        if namespaced in self._types:
            return namespaced

        return None

    def get(self, name: str) -> Optional[BanType]:
        return self._types.get(name)

    def names(self) -> List[str]:
        return list(self._types.keys())

    def items(self) -> List[Tuple[str, BanType]]:
        return list(self._types.items())

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __getitem__(self, name: str) -> BanType:
        return self._types[name]

    def __iter__(self) -> Iterator[BanType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)
