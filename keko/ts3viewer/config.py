"""Configuration management using pydantic-settings with YAML support."""

from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    """TeamSpeak 3 server shown by the viewer."""

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 9987
    name: str = ""


class ViewerSettings(BaseModel):
    """Channel filters applied when rendering."""

    model_config = ConfigDict(frozen=True)

    hide_empty_channels: bool = False
    hide_parent_channels: bool = False
    limit_to_channels: frozenset[int] = frozenset()

    @field_serializer("limit_to_channels")
    def serialize_limit_to_channels(self, channels: frozenset[int]) -> list[int]:
        return sorted(channels)


class Settings(BaseSettings):
    """Application settings loaded from YAML config file."""

    model_config = SettingsConfigDict(
        env_prefix="KEKO_TS3VIEWER_",
        env_nested_delimiter="__",
        frozen=True,
    )

    server: ServerSettings = ServerSettings()
    viewer: ViewerSettings = ViewerSettings()

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """Load settings from a YAML file."""
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)
        return cls()

    def to_yaml(self, path: Path) -> None:
        """Save settings to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)


# Default config path
CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "keko-ts3viewer.yaml"


def get_settings(config_path: Path = CONFIG_PATH) -> Settings:
    """Load settings from config file, creating default if not exists."""
    settings = Settings.from_yaml(config_path)
    if not config_path.exists():
        settings.to_yaml(config_path)
    return settings
