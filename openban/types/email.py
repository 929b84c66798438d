"""Ban type restricting email addresses and wildcard patterns."""

from fnmatch import fnmatchcase
from typing import Any, Iterable, List, Mapping, Optional

from openban.types.base import StoredBanType
from openban.types.registry import register_ban_type


@register_ban_type("email")
class EmailBanType(StoredBanType):
    """
    Bans email addresses, either exact or as wildcard patterns such
    as "*@spam.example". Matching is case-insensitive.

    Exclusions are not supported.
    """

    type_name = "email"

    def prepare_items(self, items: Iterable[Any]) -> List[str]:
        prepared: List[str] = []
        for item in items:
            pattern = str(item).strip().lower()
            if "@" not in pattern:
                raise ValueError(f"Invalid email address or pattern: {item!r}")
            if pattern not in prepared:
                prepared.append(pattern)
        return prepared

    def get_subject(self, user_row: Mapping[str, Any]) -> Optional[str]:
        email = user_row.get("user_email")
        if not email:
            return None
        return str(email).strip().lower()

    def matches(self, item: str, subject: Any) -> bool:
        return fnmatchcase(subject, item)
