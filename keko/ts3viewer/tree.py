"""Channel tree indexing and visibility filtering."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator

from keko.ts3api.models import Channel
from keko.ts3viewer.config import ViewerSettings

logger = logging.getLogger(__name__)

ROOT_ID = 0


class ChannelTree:
    """
    Channels of one response indexed by id and by parent id.

    Children keep the order in which the server listed them.
    """

    def __init__(self, channels: Iterable[Channel]) -> None:
        self._channels: dict[int, Channel] = {}
        self._children: dict[int, list[int]] = defaultdict(list)
        for channel in channels:
            self._channels[channel.id] = channel
            self._children[channel.parent_id].append(channel.id)

    def __iter__(self) -> Iterator[Channel]:
        return iter(self._channels.values())

    def __len__(self) -> int:
        return len(self._channels)

    def children(self, parent_id: int = ROOT_ID) -> list[Channel]:
        return [self._channels[cid] for cid in self._children.get(parent_id, [])]

    def set_visibility(self, visible: bool) -> None:
        for channel in self:
            channel.visible = visible

    def mark_visible(self, channel_ids: Iterable[int], include_parents: bool = True) -> None:
        """
        Show the given channels.

        With ``include_parents`` every ancestor up to the root level is shown
        as well, so a visible channel is never cut off from the tree. Unknown
        ids are ignored.
        """
        seen: set[int] = set()
        for channel_id in channel_ids:
            current = self._channels.get(channel_id)
            while current is not None and current.id not in seen:
                seen.add(current.id)
                current.visible = True
                if not include_parents or current.is_root:
                    break
                current = self._channels.get(current.parent_id)


def apply_filters(tree: ChannelTree, occupied_ids: Iterable[int], settings: ViewerSettings) -> None:
    """Set ``visible`` on every channel of the tree according to the filters."""
    limit = set(settings.limit_to_channels)
    hide_empty = settings.hide_empty_channels
    tree.set_visibility(not (limit or hide_empty))

    if hide_empty and limit:
        shown = limit.intersection(occupied_ids)
    elif hide_empty:
        shown = set(occupied_ids)
    elif limit:
        shown = limit
    else:
        return

    logger.debug("Showing %d channels (hide_parent_channels=%s)", len(shown), settings.hide_parent_channels)
    tree.mark_visible(sorted(shown), include_parents=not settings.hide_parent_channels)
