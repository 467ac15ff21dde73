"""
keko.ts3api - TeamSpeak 3 status query decoding library.

Usage:
    from keko.ts3api import decode_response

    response = decode_response(raw)
    for channel in response.channels:
        ...
"""

from keko.ts3api.decoder import (
    DecodedResponse,
    GroupFlagIndex,
    decode_response,
    split_sections,
)
from keko.ts3api.exceptions import MalformedResponseError, TS3Error
from keko.ts3api.models import Channel, ClientType, ServerInfo, User
from keko.ts3api.protocol import (
    build_command,
    escape,
    parse_response_to_dict,
    parse_response_to_list,
    unescape,
)

__all__ = [
    # Decoding
    "DecodedResponse",
    "GroupFlagIndex",
    "decode_response",
    "split_sections",
    # Models
    "Channel",
    "ClientType",
    "ServerInfo",
    "User",
    # Protocol
    "build_command",
    "escape",
    "parse_response_to_dict",
    "parse_response_to_list",
    "unescape",
    # Exceptions
    "TS3Error",
    "MalformedResponseError",
]

__version__ = "1.0.0"
