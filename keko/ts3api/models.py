"""TS3 status entities using dataclasses."""

from dataclasses import dataclass
from enum import Enum


class ClientType(Enum):
    """Kind of connected client."""

    REGULAR = 0
    QUERY = 1


@dataclass(frozen=True, slots=True)
class ServerInfo:
    """Virtual server described by the ``serverinfo`` record."""

    name: str
    port: int


@dataclass(slots=True)
class Channel:
    """Channel from ``channellist -topic -flags -voice -limits``."""

    id: int
    parent_id: int
    name: str
    permanent: bool = False
    default: bool = False
    password_protected: bool = False
    needed_talk_power: int = 0
    max_clients: int = -1
    max_family_clients: int = -1
    total_clients: int = 0
    total_clients_family: int = 0
    visible: bool = True

    @property
    def is_root(self) -> bool:
        return self.parent_id == 0


@dataclass(frozen=True, slots=True)
class User:
    """Client from ``clientlist -uid -away -voice -groups``."""

    id: int
    channel_id: int
    nickname: str
    talk_power: int = 0
    away: bool = False
    talking: bool = False
    output_hardware_enabled: bool = True
    output_muted: bool = False
    input_hardware_enabled: bool = True
    input_muted: bool = False
    channel_group_id: int = -1
    server_group_ids: tuple[int, ...] = ()
    client_type: ClientType = ClientType.REGULAR

    @property
    def is_regular(self) -> bool:
        return self.client_type is ClientType.REGULAR


def _int(value: str, default: int = -1) -> int:
    """Parse int with default fallback."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _bool(value: str) -> bool:
    """Parse bool from string '0' or '1'."""
    return value == "1"


def _int_list(value: str) -> tuple[int, ...]:
    """Parse a comma-separated id list, skipping empty entries."""
    return tuple(_int(part) for part in value.split(",") if part)


def _client_type(value: str) -> ClientType:
    try:
        return ClientType(_int(value, 0))
    except ValueError:
        return ClientType.QUERY


def parse_server_info(data: dict[str, str]) -> ServerInfo:
    """Map the raw ``serverinfo`` record into a ServerInfo."""
    return ServerInfo(
        name=data.get("virtualserver_name", ""),
        port=_int(data.get("virtualserver_port", "-1")),
    )


def parse_channel(data: dict[str, str]) -> Channel:
    """Map a raw channel record into a Channel."""
    return Channel(
        id=_int(data.get("cid", "-1")),
        parent_id=_int(data.get("pid", "0"), 0),
        name=data.get("channel_name", ""),
        permanent=_bool(data.get("channel_flag_permanent", "0")),
        default=_bool(data.get("channel_flag_default", "0")),
        password_protected=_bool(data.get("channel_flag_password", "0")),
        needed_talk_power=_int(data.get("channel_needed_talk_power", "0"), 0),
        max_clients=_int(data.get("channel_maxclients", "-1")),
        max_family_clients=_int(data.get("channel_maxfamilyclients", "-1")),
        total_clients=_int(data.get("total_clients", "0"), 0),
        total_clients_family=_int(data.get("total_clients_family", "0"), 0),
    )


def parse_user(data: dict[str, str]) -> User:
    """Map a raw client record into a User."""
    return User(
        id=_int(data.get("clid", "-1")),
        channel_id=_int(data.get("cid", "-1")),
        nickname=data.get("client_nickname", ""),
        talk_power=_int(data.get("client_talk_power", "0"), 0),
        away=_bool(data.get("client_away", "0")),
        talking=_bool(data.get("client_flag_talking", "0")),
        output_hardware_enabled=_bool(data.get("client_output_hardware", "1")),
        output_muted=_bool(data.get("client_output_muted", "0")),
        input_hardware_enabled=_bool(data.get("client_input_hardware", "1")),
        input_muted=_bool(data.get("client_input_muted", "0")),
        channel_group_id=_int(data.get("client_channel_group_id", "-1")),
        server_group_ids=_int_list(data.get("client_servergroups", "")),
        client_type=_client_type(data.get("client_type", "0")),
    )
