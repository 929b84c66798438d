"""
Ban types.

Built-in types are catalogued when this package is imported:

- user: Ban users by id (supports exclusions)
- ip: Ban IP addresses and CIDR networks (supports exclusions)
- email: Ban email addresses and wildcard patterns

Usage:
    ```python
    from openban.types import BanTypeRegistry, IpBanType, MemoryBanStorage

    registry = BanTypeRegistry()
    registry.register("ban.type.ip", IpBanType(MemoryBanStorage()))
    ```
"""

from openban.types.protocols import BanType, CheckResult, LogData, LogEntry
from openban.types.base import BaseBanType, StoredBanType
from openban.types.storage import BanRecord, BanStorage, MemoryBanStorage
from openban.types.registry import (
    TYPE_NAMESPACE,
    BanTypeRegistry,
    get_type_class,
    list_type_classes,
    register_ban_type,
)

# Import built-in types to trigger catalog registration
from openban.types.user import UserBanType
from openban.types.ip import IpBanType
from openban.types.email import EmailBanType

__all__ = [
    # Contract
    "BanType",
    "CheckResult",
    "LogData",
    "LogEntry",
    # Base classes
    "BaseBanType",
    "StoredBanType",
    # Storage
    "BanRecord",
    "BanStorage",
    "MemoryBanStorage",
    # Registry
    "TYPE_NAMESPACE",
    "BanTypeRegistry",
    "get_type_class",
    "list_type_classes",
    "register_ban_type",
    # Built-in types
    "UserBanType",
    "IpBanType",
    "EmailBanType",
]
