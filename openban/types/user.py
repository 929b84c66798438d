"""Ban type restricting users by id."""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from openban.timeutil import Clock
from openban.types.base import StoredBanType
from openban.types.registry import register_ban_type
from openban.types.storage import BanStorage

logger = logging.getLogger(__name__)


@register_ban_type("user")
class UserBanType(StoredBanType):
    """
    Bans and excludes users by numeric user id.

    The anonymous (guest) user is shared by every visitor and is
    never banned; it is dropped from the items with a warning.
    """

    type_name = "user"

    def __init__(
        self,
        storage: BanStorage,
        clock: Optional[Clock] = None,
        anonymous_user_id: int = 1,
    ):
        super().__init__(storage, clock)
        self._anonymous_user_id = anonymous_user_id

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        storage: BanStorage,
        clock: Optional[Clock] = None,
    ) -> "UserBanType":
        return cls(storage, clock, anonymous_user_id=settings.anonymous_user_id)

    def prepare_items(self, items: Iterable[Any]) -> List[str]:
        prepared: List[str] = []
        for item in items:
            user_id = _parse_user_id(item)
            if user_id == self._anonymous_user_id:
                logger.warning("Refusing to act on the anonymous user, skipping")
                continue
            key = str(user_id)
            if key not in prepared:
                prepared.append(key)
        return prepared

    def get_subject(self, user_row: Mapping[str, Any]) -> Optional[str]:
        user_id = user_row.get("user_id")
        if user_id is None:
            return None
        return str(user_id)

    def matches(self, item: str, subject: Any) -> bool:
        return item == subject

    def is_exclude_possible(self) -> bool:
        return True

    def _log_action(self, operation: str) -> None:
        super()._log_action(operation)
        # Each affected user also gets an entry in their own log
        for user_id in self.items:
            self._add_log_entry("user", operation, [int(user_id), self.message])


def _parse_user_id(item: Any) -> int:
    if isinstance(item, bool):
        raise ValueError(f"Invalid user id: {item!r}")
    try:
        user_id = int(str(item).strip())
    except ValueError as e:
        raise ValueError(f"Invalid user id: {item!r}") from e
    if user_id <= 0:
        raise ValueError(f"Invalid user id: {item!r}")
    return user_id
