"""Thread-safe cache of the groups (clans) the user belongs to."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass

from steamcore.steamid import SteamId


@dataclass
class Group:
    """A group and its last known details."""

    steam_id: SteamId
    name: str = ""
    avatar: bytes = b""
    relationship: int = 0
    member_total_count: int = 0
    member_online_count: int = 0
    member_chatting_count: int = 0
    member_in_game_count: int = 0


_UPDATABLE = frozenset(f.name for f in dataclasses.fields(Group)) - {"steam_id"}


def _clan_id(steam_id: SteamId) -> SteamId:
    return SteamId(steam_id).chat_to_clan()


class GroupsList:
    """A mapping of clan id to group, safe to use from several threads.

    Lookups and updates accept a clan's chat id as well as the clan id.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: dict[SteamId, Group] = {}

    def add(self, group: Group) -> None:
        """Add a group unless one with the same id is already known."""
        with self._lock:
            self._by_id.setdefault(group.steam_id, dataclasses.replace(group))

    def remove(self, steam_id: SteamId) -> None:
        with self._lock:
            self._by_id.pop(steam_id, None)

    def copy(self) -> dict[SteamId, Group]:
        """Return a snapshot of all groups."""
        with self._lock:
            return {key: dataclasses.replace(g) for key, g in self._by_id.items()}

    def by_id(self, steam_id: SteamId) -> Group:
        """Return a copy of the group with the given id; raise KeyError if unknown."""
        with self._lock:
            try:
                return dataclasses.replace(self._by_id[_clan_id(steam_id)])
            except KeyError:
                raise KeyError("Group not found") from None

    def update(self, steam_id: SteamId, **kwargs) -> None:
        """Set fields of a known group; unknown groups are ignored."""
        unknown = set(kwargs) - _UPDATABLE
        if unknown:
            raise TypeError(f"cannot update group fields: {', '.join(sorted(unknown))}")
        with self._lock:
            group = self._by_id.get(_clan_id(steam_id))
            if group is not None:
                for key, value in kwargs.items():
                    setattr(group, key, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)