"""Configuration for the task journal.

Settings Loading Priority (highest to lowest):
    1. Constructor arguments (the CLI passes --journal-file this way)
    2. Environment variables (TASK_JOURNAL_* prefix)
    3. User config (~/.task_journal/settings.json)
    4. .env file
    5. Default values
"""

from pathlib import Path
from typing import Literal, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

__all__ = [
    "DEFAULT_JOURNAL_FILENAME",
    "JournalSettings",
    "get_settings",
    "set_settings",
    "reload_settings",
]

DEFAULT_JOURNAL_FILENAME = ".task-journal.json"


class JournalSettings(PydanticBaseSettings):
    """Settings for the task journal CLI.

    The journal path defaults to a fixed file in the user's home
    directory and can be overridden with TASK_JOURNAL_JOURNAL_FILE or
    the CLI's --journal-file option.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASK_JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="task_journal",
        title="App Name",
        description="Application name, used for the user config directory",
    )
    journal_file: Path = Field(
        default_factory=lambda: Path.home() / DEFAULT_JOURNAL_FILENAME,
        title="Journal File",
        description="JSON file holding the task journal",
    )

    # Logging configuration
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for humans, json for tooling)",
    )

    @field_validator("journal_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        return Path(v).expanduser()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Insert the user JSON config between env vars and .env.

        The JSON source is only included if the file exists.
        """
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]

        app_name = cls.model_fields["app_name"].default
        user_json = user_config_path(app_name)
        if user_json.exists():
            sources.append(JsonConfigSettingsSource(settings_cls, json_file=user_json))

        sources.append(dotenv_settings)
        return tuple(sources)


def user_config_path(app_name: str) -> Path:
    """Location of the user-level settings file."""
    return Path.home() / f".{app_name}" / "settings.json"


# Global settings instance holder
_settings_instance: JournalSettings | None = None


def get_settings() -> JournalSettings:
    """Get the current settings instance, creating it on first access."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = JournalSettings()
    return _settings_instance


def set_settings(settings: JournalSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally
    """
    global _settings_instance
    _settings_instance = settings


def reload_settings() -> JournalSettings:
    """Drop the cached settings and load them again.

    Returns:
        Fresh JournalSettings instance
    """
    global _settings_instance
    _settings_instance = None
    return get_settings()
