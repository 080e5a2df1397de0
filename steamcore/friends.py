"""Thread-safe cache of the friends list."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass

from steamcore.steamid import SteamId


@dataclass
class Friend:
    """A friend and their last known persona details."""

    steam_id: SteamId
    name: str = ""
    avatar: bytes = b""
    relationship: int = 0
    persona_state: int = 0
    persona_state_flags: int = 0
    game_app_id: int = 0
    game_id: int = 0
    game_name: str = ""


_UPDATABLE = frozenset(f.name for f in dataclasses.fields(Friend)) - {"steam_id"}


class FriendsList:
    """A mapping of steam id to friend, safe to use from several threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: dict[SteamId, Friend] = {}

    def add(self, friend: Friend) -> None:
        """Add a friend unless one with the same id is already known."""
        with self._lock:
            self._by_id.setdefault(friend.steam_id, dataclasses.replace(friend))

    def remove(self, steam_id: SteamId) -> None:
        with self._lock:
            self._by_id.pop(steam_id, None)

    def copy(self) -> dict[SteamId, Friend]:
        """Return a snapshot of all friends."""
        with self._lock:
            return {key: dataclasses.replace(f) for key, f in self._by_id.items()}

    def by_id(self, steam_id: SteamId) -> Friend:
        """Return a copy of the friend with the given id; raise KeyError if unknown."""
        with self._lock:
            try:
                return dataclasses.replace(self._by_id[steam_id])
            except KeyError:
                raise KeyError("Friend not found") from None

    def update(self, steam_id: SteamId, **kwargs) -> None:
        """Set fields of a known friend; unknown friends are ignored."""
        unknown = set(kwargs) - _UPDATABLE
        if unknown:
            raise TypeError(f"cannot update friend fields: {', '.join(sorted(unknown))}")
        with self._lock:
            friend = self._by_id.get(steam_id)
            if friend is not None:
                for key, value in kwargs.items():
                    setattr(friend, key, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)