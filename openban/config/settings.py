"""
Open Ban configuration management using Pydantic Settings.

Configuration can be provided via:
1. openban.yaml config file
2. OPENBAN_* env vars (nested with double underscore)
3. .env file
4. Direct instantiation

Priority (highest wins): init kwargs > openban.yaml > env vars > defaults

Example openban.yaml:
    log_level: INFO
    types: [user, ip, email]
    anonymous_user_id: 1
    bans:
      - type: ip
        items: ["192.0.2.0/24"]
        duration: 86400
        reason: "Spam wave"
      - type: email
        items: ["*@spam.example"]
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger(__name__)

BUILTIN_TYPES = ("user", "ip", "email")


class StaticBanConfig(BaseModel):
    """A ban (or exclusion) applied when the manager is created."""

    type: str
    items: List[Union[str, int]] = Field(default_factory=list)
    # Seconds from startup; 0 or less = permanent
    duration: int = 0
    reason: str = ""
    displayed_reason: str = ""
    exclude: bool = False


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads from an openban.yaml config file.

    Discovers config at:
    1. Explicit path passed via _config_path init kwarg
    2. $OPENBAN_CONFIG env var
    3. ./openban.yaml
    4. ./openban.yml
    """

    def __init__(
        self, settings_cls: Type[BaseSettings], config_path: Optional[str] = None
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._yaml_data: Dict[str, Any] = {}
        self._load()

    def _discover_config_file(self) -> Optional[Path]:
        """Find the config file to load."""
        if self._config_path:
            p = Path(self._config_path)
            return p if p.is_file() else None

        env_path = os.environ.get("OPENBAN_CONFIG")
        if env_path:
            p = Path(env_path)
            return p if p.is_file() else None

        for name in ("openban.yaml", "openban.yml"):
            p = Path(name)
            if p.is_file():
                return p

        return None

    def _load(self) -> None:
        """Load and parse the YAML config file.

        Parse errors propagate so a broken config is never silently ignored.
        """
        path = self._discover_config_file()
        if path is None:
            return

        import yaml

        with open(path) as f:
            data = yaml.safe_load(f)
        self._yaml_data = data if isinstance(data, dict) else {}
        logger.debug(f"Loaded config from {path}")

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        value = self._yaml_data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return {
            name: value
            for name, value in self._yaml_data.items()
            if name in self.settings_cls.model_fields
        }


class BanSettings(BaseSettings):
    """
    Main Open Ban configuration.

    All settings can be overridden via environment variables with the
    OPENBAN_ prefix, e.g. OPENBAN_LOG_ENABLED=false.

    Pass _config_path to load a specific openban.yaml.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENBAN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Path to openban.yaml (set via _config_path kwarg, not a real setting field)
    _config_path: Optional[str] = None

    # General settings
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Whether mutating operations are logged when the manager starts
    log_enabled: bool = True

    # Built-in ban types to register, in check order
    types: List[str] = Field(default_factory=lambda: list(BUILTIN_TYPES))
    # Register built-ins as "ban.type.<name>" instead of "<name>"
    namespaced: bool = True

    # Guest account id that user bans refuse to touch
    anonymous_user_id: int = 1

    # Bans applied at startup
    bans: List[StaticBanConfig] = Field(default_factory=list)

    def __init__(self, _config_path: Optional[str] = None, **kwargs: Any):
        self.__class__._config_path = _config_path
        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Insert YAML config source before env vars.

        Priority (highest first): init > yaml > env > dotenv > file_secret
        """
        yaml_source = YamlConfigSource(settings_cls, config_path=cls._config_path)
        return (
            init_settings,
            yaml_source,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    def validate(self) -> None:
        """
        Check that the configuration can build a working manager.

        Raises:
            ValueError: On unknown types or bans referencing disabled types
        """
        unknown = [t for t in self.types if t not in BUILTIN_TYPES]
        if unknown:
            raise ValueError(
                f"Unknown ban type(s): {', '.join(unknown)}. "
                f"Available types: {', '.join(BUILTIN_TYPES)}"
            )

        for index, ban in enumerate(self.bans):
            if ban.type not in self.types:
                raise ValueError(
                    f"Static ban #{index + 1} uses ban type '{ban.type}' "
                    f"which is not enabled"
                )
            if not ban.items:
                raise ValueError(f"Static ban #{index + 1} has no items")
