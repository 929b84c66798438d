"""
Interception hooks for the ban manager.

Third parties can intercept two manager operations:

1. SET_TYPE_EVENT: before a ban type name is resolved
   - May substitute the requested type
   - override=True skips lookup and validation; the value in
     ``type`` becomes current as-is

2. SET_ITEMS_EVENT: before items are applied to the current type
   - May transform the items
   - override=True skips the delegated set_items() call

Callbacks receive the event and return either None (no change) or a
new event. They run in registration order, each seeing the result of
the previous one.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from openban.types.protocols import BanType

logger = logging.getLogger(__name__)

SET_TYPE_EVENT = "ban_manager.set_type"
SET_ITEMS_EVENT = "ban_manager.set_items"


@dataclass
class SetTypeEvent:
    """Input/output of the set_type interception point."""

    current_type: Optional[BanType]        # Read-only
    type: Union[str, BanType]
    override: bool = False


@dataclass
class SetItemsEvent:
    """Input/output of the set_items interception point."""

    current_type: BanType                  # Read-only
    items: Any
    override: bool = False


EventT = TypeVar("EventT", SetTypeEvent, SetItemsEvent)
HookCallback = Callable[[Any], Optional[Any]]


class HookDispatcher:
    """Registry and runner of interception callbacks."""

    def __init__(self):
        self._callbacks: Dict[str, List[HookCallback]] = {}

    def register(self, event_name: str, callback: HookCallback) -> None:
        """
        Register a callback for an event.

        Args:
            event_name: SET_TYPE_EVENT or SET_ITEMS_EVENT
            callback: Receives the event, returns None or a replacement event
        """
        self._callbacks.setdefault(event_name, []).append(callback)
        logger.debug(f"Registered hook for '{event_name}'")

    def unregister(self, event_name: str, callback: HookCallback) -> None:
        callbacks = self._callbacks.get(event_name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._callbacks.get(event_name))

    def trigger(self, event_name: str, event: EventT) -> EventT:
        """
        Run all callbacks for an event.

        Returns:
            The event as left by the last callback
        """
        for callback in list(self._callbacks.get(event_name, [])):
            result = callback(event)
            if result is not None:
                event = result
        return event
