"""Thread-safe cache of chat rooms and their members."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field

from steamcore.steamid import SteamId


@dataclass(frozen=True)
class ChatMember:
    """A member of a chat room and their permissions."""

    steam_id: SteamId
    chat_permissions: int = 0
    clan_permissions: int = 0


@dataclass
class Chat:
    """A chat room, the group it belongs to and its members by id."""

    steam_id: SteamId
    group_id: SteamId = SteamId(0)
    members: dict[SteamId, ChatMember] = field(default_factory=dict)


def _copy_chat(chat: Chat) -> Chat:
    return dataclasses.replace(chat, members=dict(chat.members))


class ChatsList:
    """A mapping of chat id to chat, safe to use from several threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: dict[SteamId, Chat] = {}

    def add(self, chat: Chat) -> None:
        """Add a chat unless one with the same id is already known."""
        with self._lock:
            self._by_id.setdefault(chat.steam_id, _copy_chat(chat))

    def remove(self, steam_id: SteamId) -> None:
        with self._lock:
            self._by_id.pop(steam_id, None)

    def add_chat_member(self, steam_id: SteamId, member: ChatMember) -> None:
        """Add or replace a member, creating the chat if it is unknown."""
        with self._lock:
            chat = self._by_id.get(steam_id)
            if chat is None:
                chat = self._by_id[steam_id] = Chat(steam_id=SteamId(steam_id))
            chat.members[member.steam_id] = member

    def remove_chat_member(self, steam_id: SteamId, member_id: SteamId) -> None:
        with self._lock:
            chat = self._by_id.get(steam_id)
            if chat is not None:
                chat.members.pop(member_id, None)

    def copy(self) -> dict[SteamId, Chat]:
        """Return a snapshot of all chats."""
        with self._lock:
            return {key: _copy_chat(chat) for key, chat in self._by_id.items()}

    def by_id(self, steam_id: SteamId) -> Chat:
        """Return a copy of the chat with the given id; raise KeyError if unknown."""
        with self._lock:
            try:
                return _copy_chat(self._by_id[steam_id])
            except KeyError:
                raise KeyError("Chat not found") from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)