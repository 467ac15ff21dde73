"""Decoder for concatenated status query responses.

A status response is the output of five commands joined without a
separator, in this order::

    serverinfo
    channellist -topic -flags -voice -limits
    clientlist -uid -away -voice -groups
    servergrouplist
    channelgrouplist

The section boundaries are found again by splitting on the blank line the
server leaves between command outputs.
"""

import logging
from dataclasses import dataclass, field
from typing import Final

from keko.ts3api.exceptions import MalformedResponseError
from keko.ts3api.models import Channel, ServerInfo, User, _int, parse_channel, parse_server_info, parse_user
from keko.ts3api.protocol import parse_response_to_list

logger = logging.getLogger(__name__)

SECTION_COUNT: Final[int] = 5

SECTION_DELIMITER: Final[str] = "\n\r\n\r"
# Some server versions emit a space on the blank line
SECTION_DELIMITER_VARIANT: Final[str] = "\n\r \n\r"


@dataclass(slots=True)
class GroupFlagIndex:
    """Icon tokens of server and channel groups that carry an icon."""

    server_groups: dict[int, str] = field(default_factory=dict)
    channel_groups: dict[int, str] = field(default_factory=dict)

    def server_flag(self, group_id: int) -> str | None:
        return self.server_groups.get(group_id)

    def channel_flag(self, group_id: int) -> str | None:
        return self.channel_groups.get(group_id)


@dataclass(slots=True)
class DecodedResponse:
    """Typed content of one status query response."""

    server: ServerInfo
    channels: list[Channel]
    users: list[User]
    group_flags: GroupFlagIndex


def split_sections(raw: str) -> list[str]:
    """
    Split a raw response into its sections.

    The first character is dropped before splitting. The variant delimiter
    is only tried when the regular one does not split at all.
    """
    response = raw[1:]
    sections = response.split(SECTION_DELIMITER)
    if len(sections) == 1:
        logger.debug("No section delimiter found, retrying with variant delimiter")
        sections = response.split(SECTION_DELIMITER_VARIANT)

    if len(sections) != SECTION_COUNT:
        raise MalformedResponseError(
            f"Invalid server response: expected {SECTION_COUNT} sections, got {len(sections)}",
            section_count=len(sections),
        )
    return sections


def _group_flags(records: list[dict[str, str]], id_field: str) -> dict[int, str]:
    flags: dict[int, str] = {}
    for record in records:
        icon_id = _int(record.get("iconid", "0"), 0)
        if icon_id > 0:
            flags[_int(record.get(id_field, "-1"))] = f"group_{icon_id}"
    return flags


def decode_group_flags(server_groups: str, channel_groups: str) -> GroupFlagIndex:
    """Build the flag index from the raw group list sections."""
    return GroupFlagIndex(
        server_groups=_group_flags(parse_response_to_list(server_groups), "sgid"),
        channel_groups=_group_flags(parse_response_to_list(channel_groups), "cgid"),
    )


def decode_response(raw: str) -> DecodedResponse:
    """Decode a full status query response."""
    server_section, channel_section, user_section, sg_section, cg_section = split_sections(raw)

    server_records = parse_response_to_list(server_section)
    if not server_records:
        raise MalformedResponseError("Invalid server response: missing server info", section_count=SECTION_COUNT)

    channels = [parse_channel(record) for record in parse_response_to_list(channel_section)]
    users = [parse_user(record) for record in parse_response_to_list(user_section)]
    logger.debug("Decoded %d channels and %d clients", len(channels), len(users))

    return DecodedResponse(
        server=parse_server_info(server_records[0]),
        channels=channels,
        users=users,
        group_flags=decode_group_flags(sg_section, cg_section),
    )
