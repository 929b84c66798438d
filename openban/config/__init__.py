"""Configuration management for Open Ban."""

from openban.config.settings import (
    BUILTIN_TYPES,
    BanSettings,
    StaticBanConfig,
)

__all__ = [
    "BUILTIN_TYPES",
    "BanSettings",
    "StaticBanConfig",
]
