"""
Exception taxonomy for the ban subsystem.

All errors are caller-visible and indicate programmer or input error;
nothing in the core retries or swallows them.
"""

from typing import Any, Optional


class BanError(Exception):
    """Base class for all ban subsystem errors."""

    def __init__(
        self,
        message: str,
        previous: Optional[BaseException] = None,
        code: int = 0,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.previous = previous
        if previous is not None:
            self.__cause__ = previous


class NoBanTypeSelected(BanError):
    """Raised when an operation needs a current ban type but none is set."""

    def __init__(self, previous: Optional[BaseException] = None, code: int = 0):
        super().__init__(
            "No ban type selected. Call set_type() first.",
            previous=previous,
            code=code,
        )


class InvalidBanType(BanError):
    """Raised when a ban type name cannot be resolved in the registry."""

    def __init__(
        self,
        ban_type: Any,
        previous: Optional[BaseException] = None,
        code: int = 0,
    ):
        super().__init__(
            f"Invalid ban type: '{ban_type}'",
            previous=previous,
            code=code,
        )
        self.ban_type = ban_type


class InvalidBanEnd(BanError):
    """Raised when a ban end is not a valid moment strictly in the future."""

    def __init__(
        self,
        ban_end: Any,
        previous: Optional[BaseException] = None,
        code: int = 0,
    ):
        super().__init__(
            f"Invalid ban end: {ban_end!r}",
            previous=previous,
            code=code,
        )
        self.ban_end = ban_end
