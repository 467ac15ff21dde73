"""Spacer channel name handling.

Permanent root channels named ``[<marker>spacer<id>]<text>`` are drawn as
separators instead of regular channels:

    [cspacer1]Welcome   -> "Welcome", centered
    [*spacer2]-         -> "-" repeated into a line, centered
    [spacer3]---        -> three identical characters also draw a line
    [rspacer4]Label     -> "Label" without alignment
"""

import re
from dataclasses import dataclass
from typing import Final

from keko.ts3api.models import Channel
from keko.ts3viewer.model import CENTERED

_SPACER_TAG: Final = re.compile(r"\[(.*)spacer(\w+)?\]")

CENTER_MARKER: Final[str] = "c"
REPEAT_MARKER: Final[str] = "*"
REPEAT_MIN_LENGTH: Final[int] = 100


@dataclass(frozen=True, slots=True)
class ParsedChannelName:
    name: str
    css_class: str | None = None
    suppress_flags: bool = False


def _is_repeat_pattern(text: str) -> bool:
    return len(text) == 3 and text[0] * 3 == text


def _repeat(text: str) -> str:
    line = ""
    for _ in range(REPEAT_MIN_LENGTH + 1):
        if len(line) >= REPEAT_MIN_LENGTH:
            break
        line += text
    return line


def parse_channel_name(channel: Channel) -> ParsedChannelName:
    """Resolve the display name of a channel, expanding spacer names."""
    if not (channel.permanent and channel.is_root):
        return ParsedChannelName(channel.name)

    match = _SPACER_TAG.search(channel.name)
    if match is None:
        return ParsedChannelName(channel.name)

    # Text between the first and an eventual second occurrence of the tag
    parts = channel.name.split(match.group(0))
    text = parts[1] if len(parts) > 1 else ""
    marker = match.group(1)

    if marker == CENTER_MARKER:
        return ParsedChannelName(text, CENTERED, True)
    if marker == REPEAT_MARKER or _is_repeat_pattern(text):
        return ParsedChannelName(_repeat(text), CENTERED, True)
    return ParsedChannelName(text, None, True)
