from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import TypeAdapter


class UserIcon(StrEnum):
    AWAY = "away"
    TALKING = "talking"
    OUTPUT_HARDWARE_MUTED = "output-hardware-muted"
    OUTPUT_MUTED = "output-muted"
    INPUT_HARDWARE_MUTED = "input-hardware-muted"
    INPUT_MUTED = "input-muted"
    IDLE = "idle"


class ChannelIcon(StrEnum):
    GREEN = "channel-green"
    YELLOW = "channel-yellow"
    RED = "channel-red"


class ChannelFlag(StrEnum):
    DEFAULT = "default"
    MODERATED = "moderated"
    PASSWORD_PROTECTED = "password-protected"


SERVER_ICON = "server-green"

CENTERED = "centered"


@dataclass(frozen=True, slots=True)
class RenderedUser:
    icon: str
    name: str
    flags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderedChannel:
    id: int
    link_key: str
    title: str
    icon: str
    name: str
    css_class: str | None = None
    suppress_flags: bool = False
    flags: tuple[str, ...] = ()
    users: tuple[RenderedUser, ...] = ()
    children: tuple["RenderedChannel", ...] = ()


@dataclass(frozen=True, slots=True)
class RenderedServer:
    """Virtual root (id 0) of the rendered tree."""

    link_key: str
    name: str
    icon: str = SERVER_ICON
    channels: tuple[RenderedChannel, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Plain dict/list/str structure for the presentation layer."""
        return TypeAdapter(RenderedServer).dump_python(self, mode="json")
