"""Server status viewer: raw status query response to a rendered channel tree."""

import logging
import re
from typing import Final, Protocol

from keko.ts3api import Channel, build_command, decode_response
from keko.ts3viewer.channel_names import parse_channel_name
from keko.ts3viewer.config import Settings
from keko.ts3viewer.model import ChannelFlag, ChannelIcon, RenderedChannel, RenderedServer, RenderedUser
from keko.ts3viewer.tree import ROOT_ID, ChannelTree, apply_filters
from keko.ts3viewer.users import aggregate_users

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE: Final[str] = "The Viewer could not be loaded, please check the system/error logs."

# Order matters, the decoder relies on it to tell the sections apart
STATUS_COMMANDS: Final[tuple[str, ...]] = (
    build_command("serverinfo"),
    build_command("channellist", "topic", "flags", "voice", "limits"),
    build_command("clientlist", "uid", "away", "voice", "groups"),
    build_command("servergrouplist"),
    build_command("channelgrouplist"),
)

_LINK_KEY_FORBIDDEN: Final = re.compile(r"[^a-zA-Z0-9-]")


class QueryExecutor(Protocol):
    """Runs a single query command on an authenticated connection."""

    def execute(self, command: str) -> str: ...


def link_key(host: str, port: int) -> str:
    """Identifier of the server that is safe to embed in markup and scripts."""
    return _LINK_KEY_FORBIDDEN.sub("-", f"{host}-{port}")


def channel_icon(channel: Channel) -> ChannelIcon:
    if channel.max_clients > -1 and channel.total_clients >= channel.max_clients:
        return ChannelIcon.RED
    if channel.max_family_clients > -1 and channel.total_clients_family >= channel.max_family_clients:
        return ChannelIcon.RED
    if channel.password_protected:
        return ChannelIcon.YELLOW
    return ChannelIcon.GREEN


def channel_flags(channel: Channel) -> tuple[ChannelFlag, ...]:
    flags: list[ChannelFlag] = []
    if channel.default:
        flags.append(ChannelFlag.DEFAULT)
    if channel.needed_talk_power > 0:
        flags.append(ChannelFlag.MODERATED)
    if channel.password_protected:
        flags.append(ChannelFlag.PASSWORD_PROTECTED)
    return tuple(flags)


class Viewer:
    """
    Renders the channel and client tree of a virtual server.

    Usage:
        viewer = Viewer(executor, settings)
        content = viewer.render()
        if isinstance(content, RenderedServer):
            ...
    """

    def __init__(self, executor: QueryExecutor, settings: Settings) -> None:
        self._executor = executor
        self._settings = settings

    def query_server(self) -> str:
        """Run the status commands and concatenate their output."""
        return "".join(self._executor.execute(command) for command in STATUS_COMMANDS)

    def render(self) -> RenderedServer | str:
        """Query the server and render it, falling back to a message on any failure."""
        try:
            raw = self.query_server()
        except Exception:
            logger.exception("Failed to query server status")
            return FALLBACK_MESSAGE
        return self.render_response(raw)

    def render_response(self, raw: str) -> RenderedServer | str:
        """Render an already fetched status response."""
        try:
            return self._render(raw)
        except Exception:
            logger.exception("Failed to render server status")
            return FALLBACK_MESSAGE

    def _render(self, raw: str) -> RenderedServer:
        response = decode_response(raw)
        users = aggregate_users(response.users, response.group_flags)

        tree = ChannelTree(response.channels)
        apply_filters(tree, users.keys(), self._settings.viewer)
        logger.debug("%d of %d channels visible", sum(1 for channel in tree if channel.visible), len(tree))

        server = self._settings.server
        port = response.server.port if response.server.port > 0 else server.port
        key = link_key(server.host, port)

        return RenderedServer(
            link_key=key,
            name=response.server.name or server.name,
            channels=self._render_channels(tree, users, key, ROOT_ID, set()),
        )

    def _render_channels(
        self,
        tree: ChannelTree,
        users: dict[int, list[RenderedUser]],
        key: str,
        parent_id: int,
        visited: set[int],
    ) -> tuple[RenderedChannel, ...]:
        rendered: list[RenderedChannel] = []
        for channel in tree.children(parent_id):
            if not channel.visible or channel.id in visited:
                continue
            visited.add(channel.id)
            parsed = parse_channel_name(channel)
            rendered.append(
                RenderedChannel(
                    id=channel.id,
                    link_key=key,
                    title=f"{channel.name} [{channel.id}]",
                    icon=channel_icon(channel),
                    name=parsed.name,
                    css_class=parsed.css_class,
                    suppress_flags=parsed.suppress_flags,
                    flags=channel_flags(channel),
                    users=tuple(users.get(channel.id, ())),
                    children=self._render_channels(tree, users, key, channel.id, visited),
                )
            )
        return tuple(rendered)
