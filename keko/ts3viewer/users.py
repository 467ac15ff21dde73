from collections import defaultdict
from collections.abc import Iterable

from keko.ts3api.decoder import GroupFlagIndex
from keko.ts3api.models import User
from keko.ts3viewer.model import RenderedUser, UserIcon


def regular_clients(users: Iterable[User]) -> list[User]:
    """Drop query clients, keeping only real connected users."""
    return [user for user in users if user.is_regular]


def sort_key(user: User) -> tuple[int, str]:
    """Highest talk power first, then nickname ignoring case."""
    return -user.talk_power, user.nickname.casefold()


def user_icon(user: User) -> UserIcon:
    if user.away:
        return UserIcon.AWAY
    if user.talking:
        return UserIcon.TALKING
    if not user.output_hardware_enabled:
        return UserIcon.OUTPUT_HARDWARE_MUTED
    if user.output_muted:
        return UserIcon.OUTPUT_MUTED
    if not user.input_hardware_enabled:
        return UserIcon.INPUT_HARDWARE_MUTED
    if user.input_muted:
        return UserIcon.INPUT_MUTED
    return UserIcon.IDLE


def user_flags(user: User, group_flags: GroupFlagIndex) -> tuple[str, ...]:
    """Channel group icon first, then server group icons in membership order."""
    flags: list[str] = []
    channel_flag = group_flags.channel_flag(user.channel_group_id)
    if channel_flag is not None:
        flags.append(channel_flag)
    for group_id in user.server_group_ids:
        server_flag = group_flags.server_flag(group_id)
        if server_flag is not None:
            flags.append(server_flag)
    return tuple(flags)


def render_user(user: User, group_flags: GroupFlagIndex) -> RenderedUser:
    return RenderedUser(icon=user_icon(user), name=user.nickname, flags=user_flags(user, group_flags))


def aggregate_users(users: Iterable[User], group_flags: GroupFlagIndex) -> dict[int, list[RenderedUser]]:
    """Group regular clients by channel id, each channel's list in display order."""
    by_channel: dict[int, list[RenderedUser]] = defaultdict(list)
    for user in sorted(regular_clients(users), key=sort_key):
        by_channel[user.channel_id].append(render_user(user, group_flags))
    return dict(by_channel)
