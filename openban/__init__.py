"""
Open Ban - Pluggable ban and exclusion management.

Restricts or exempts users, IP addresses and email patterns through
interchangeable ban types selected at runtime.

Supports multiple ban types:
- user: Ban users by id
- ip: Ban IP addresses and CIDR networks
- email: Ban email addresses and wildcard patterns

Quick Start:
    ```python
    from openban import Actor, BanSettings, CheckResult, create_manager

    manager = create_manager(BanSettings(), actor=Actor(user_id=2, ip="10.0.0.9"))

    (manager.set_type("email")
        .set_items("*@spam.example")
        .set_message("Known spam domain")
        .ban())

    result = manager.check_all({"user_email": "bot@spam.example"})
    if result == CheckResult.EXCLUDED:
        ...  # exempt from every ban
    elif result & CheckResult.BANNED:
        print("Access denied")
    ```

Or configure static bans in openban.yaml and inspect them:
    ```bash
    openban check --email bot@spam.example
    ```
"""

__version__ = "0.1.0"

# Core configuration
from openban.config.settings import BanSettings

# Errors
from openban.exceptions import (
    BanError,
    InvalidBanEnd,
    InvalidBanType,
    NoBanTypeSelected,
)

# Ban types
from openban.types import (
    TYPE_NAMESPACE,
    BanRecord,
    BanStorage,
    BanType,
    BanTypeRegistry,
    BaseBanType,
    CheckResult,
    EmailBanType,
    IpBanType,
    LogEntry,
    MemoryBanStorage,
    StoredBanType,
    UserBanType,
    register_ban_type,
)

# Manager and collaborators
from openban.hooks import (
    SET_ITEMS_EVENT,
    SET_TYPE_EVENT,
    HookDispatcher,
    SetItemsEvent,
    SetTypeEvent,
)
from openban.log import Actor, LoggingLogSink, LogSink, MemoryLogSink
from openban.manager import BanManager
from openban.timeutil import Clock, FixedClock
from openban.factory import build_registry, create_manager

__all__ = [
    # Version
    "__version__",
    # Configuration
    "BanSettings",
    # Errors
    "BanError",
    "InvalidBanEnd",
    "InvalidBanType",
    "NoBanTypeSelected",
    # Ban types
    "TYPE_NAMESPACE",
    "BanRecord",
    "BanStorage",
    "BanType",
    "BanTypeRegistry",
    "BaseBanType",
    "CheckResult",
    "EmailBanType",
    "IpBanType",
    "LogEntry",
    "MemoryBanStorage",
    "StoredBanType",
    "UserBanType",
    "register_ban_type",
    # Hooks
    "SET_ITEMS_EVENT",
    "SET_TYPE_EVENT",
    "HookDispatcher",
    "SetItemsEvent",
    "SetTypeEvent",
    # Logging
    "Actor",
    "LoggingLogSink",
    "LogSink",
    "MemoryLogSink",
    # Manager
    "BanManager",
    "build_registry",
    "create_manager",
    # Time
    "Clock",
    "FixedClock",
]
