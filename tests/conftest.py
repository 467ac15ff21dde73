from collections.abc import Callable

import pytest

from keko.ts3api.protocol import escape

Record = dict[str, str | int]


def encode_records(records: list[Record]) -> str:
    return "|".join(" ".join(f"{key}={escape(str(value))}" for key, value in record.items()) for record in records)


def server_record(**overrides: str | int) -> Record:
    record: Record = {
        "virtualserver_name": "Kellerkompanie TS",
        "virtualserver_port": 9987,
        "virtualserver_platform": "Linux",
        "virtualserver_version": "3.13.7",
        "virtualserver_clientsonline": 3,
        "virtualserver_maxclients": 64,
    }
    record.update(overrides)
    return record


def channel_record(cid: int, pid: int = 0, name: str | None = None, **overrides: str | int) -> Record:
    record: Record = {
        "cid": cid,
        "pid": pid,
        "channel_order": 0,
        "channel_name": name if name is not None else f"Channel {cid}",
        "channel_topic": "",
        "channel_flag_default": 0,
        "channel_flag_password": 0,
        "channel_flag_permanent": 1,
        "channel_flag_semi_permanent": 0,
        "channel_codec": 4,
        "channel_codec_quality": 6,
        "channel_needed_talk_power": 0,
        "total_clients_family": 0,
        "channel_maxclients": -1,
        "channel_maxfamilyclients": -1,
        "total_clients": 0,
    }
    record.update(overrides)
    return record


def client_record(clid: int, cid: int, nickname: str, **overrides: str | int) -> Record:
    record: Record = {
        "clid": clid,
        "cid": cid,
        "client_database_id": clid + 100,
        "client_nickname": nickname,
        "client_type": 0,
        "client_unique_identifier": f"uid{clid}=",
        "client_away": 0,
        "client_away_message": "",
        "client_flag_talking": 0,
        "client_input_muted": 0,
        "client_output_muted": 0,
        "client_input_hardware": 1,
        "client_output_hardware": 1,
        "client_talk_power": 0,
        "client_is_talker": 0,
        "client_is_priority_speaker": 0,
        "client_is_recording": 0,
        "client_is_channel_commander": 0,
        "client_servergroups": "8",
        "client_channel_group_id": 8,
    }
    record.update(overrides)
    return record


def build_response(
    server: Record | None = None,
    channels: list[Record] | None = None,
    clients: list[Record] | None = None,
    server_groups: list[Record] | None = None,
    channel_groups: list[Record] | None = None,
    delimiter: str = "\n\r\n\r",
) -> str:
    sections = [
        encode_records([server if server is not None else server_record()]),
        encode_records(channels or []),
        encode_records(clients or []),
        encode_records(server_groups or []),
        encode_records(channel_groups or []),
    ]
    # The status query output starts with one character the decoder drops
    return " " + delimiter.join(sections) + "\n\r"


@pytest.fixture
def response_builder() -> Callable[..., str]:
    return build_response


@pytest.fixture
def channel() -> Callable[..., Record]:
    return channel_record


@pytest.fixture
def client() -> Callable[..., Record]:
    return client_record


@pytest.fixture
def server() -> Callable[..., Record]:
    return server_record


@pytest.fixture
def sample_response() -> str:
    """Small server with a spacer, a nested channel, a query client and group icons."""
    return build_response(
        channels=[
            channel_record(1, name="[cspacer0]Kellerkompanie"),
            channel_record(2, name="Lobby", channel_flag_default=1, total_clients=2),
            channel_record(3, pid=2, name="Briefing", channel_needed_talk_power=10, total_clients=1),
            channel_record(4, name="Private", channel_flag_password=1),
            channel_record(5, name="Full", channel_maxclients=1, total_clients=1),
        ],
        clients=[
            client_record(1, 2, "Zoe", client_talk_power=10),
            client_record(2, 2, "alice", client_talk_power=75, client_servergroups="6,8"),
            client_record(3, 2, "serveradmin", client_type=1),
            client_record(4, 3, "Bob", client_flag_talking=1, client_channel_group_id=5),
            client_record(5, 5, "Carl", client_away=1),
        ],
        server_groups=[
            {"sgid": 6, "name": "Server Admin", "type": 1, "iconid": 300},
            {"sgid": 8, "name": "Guest", "type": 1, "iconid": 0},
        ],
        channel_groups=[
            {"cgid": 5, "name": "Channel Admin", "type": 1, "iconid": 100},
            {"cgid": 8, "name": "Guest", "type": 1, "iconid": 0},
        ],
    )
