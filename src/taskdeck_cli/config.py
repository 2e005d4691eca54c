"""Configuration management for TaskDeck CLI."""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from taskdeck_cli.models import NotificationPreferences
from taskdeck_cli.utils.logger import get_logger


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml", "quiet"] = Field(default="pretty")
    compact: bool = Field(default=False)


class UIConfig(BaseModel):
    """Default list view settings."""

    sort_by: Literal["created_at", "title", "due_date", "priority"] = Field(default="created_at")
    sort_order: Literal["asc", "desc"] = Field(default="desc")


class StorageConfig(BaseModel):
    """Local vault location (empty means the platform data dir)."""

    db_path: str | None = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    notifications: NotificationPreferences = Field(
        default_factory=NotificationPreferences
    )


class ConfigManager:
    """Manages TaskDeck CLI configuration and credentials for one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("taskdeck-cli"))
        self.data_dir = Path(user_data_dir("taskdeck-cli"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def notification_preferences(self) -> NotificationPreferences:
        return self.config.notifications

    def load_config(self) -> Config:
        """Load configuration from file, falling back to defaults if unreadable."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file, "r") as f:
                data = json.load(f)
            return Config(**data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            get_logger().warning("ignoring unreadable config %s: %s", self.config_file, e)
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config
        else:
            self._config = config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def save_notification_preferences(self, preferences: NotificationPreferences) -> None:
        self.save_config(self.config.model_copy(update={"notifications": preferences}))

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value has the wrong type
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration (or a single key) to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        if isinstance(value, BaseModel):
            return value.model_dump()
        return value

    def save_credentials(self, user_id: str, email: str) -> None:
        """Remember the logged-in user."""
        with open(self.credentials_file, "w") as f:
            json.dump({"user_id": user_id, "email": email}, f, indent=2)

        # Readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load the stored credentials, or None when logged out."""
        if not self.credentials_file.exists():
            return None
        try:
            with open(self.credentials_file, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(data, dict) or "user_id" not in data:
            return None
        return data

    def clear_credentials(self) -> None:
        """Clear authentication credentials."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
