import pytest

from steamcore.chats import Chat, ChatMember, ChatsList
from steamcore.steamid import SteamId

CHAT = SteamId.from_parts(1000, 0, 1, 7).clan_to_chat()
CLAN = SteamId.from_parts(1000, 0, 1, 7)
ALICE = SteamId.from_parts(11, 1, 1, 1)
BOB = SteamId.from_parts(22, 1, 1, 1)


def test_add_and_lookup():
    chats = ChatsList()
    chats.add(Chat(steam_id=CHAT, group_id=CLAN))
    assert len(chats) == 1
    assert chats.by_id(CHAT) == Chat(steam_id=CHAT, group_id=CLAN)


def test_add_does_not_overwrite():
    chats = ChatsList()
    chats.add(Chat(steam_id=CHAT, group_id=CLAN))
    chats.add(Chat(steam_id=CHAT, group_id=ALICE))
    assert chats.by_id(CHAT).group_id == CLAN
    assert len(chats) == 1


def test_remove():
    chats = ChatsList()
    chats.add(Chat(steam_id=CHAT))
    chats.remove(CHAT)
    assert len(chats) == 0
    with pytest.raises(KeyError):
        chats.by_id(CHAT)


def test_missing_chat_raises():
    with pytest.raises(KeyError):
        ChatsList().by_id(CHAT)


def test_add_member_creates_chat():
    chats = ChatsList()
    member = ChatMember(steam_id=ALICE, chat_permissions=8, clan_permissions=2)
    chats.add_chat_member(CHAT, member)
    chat = chats.by_id(CHAT)
    assert chat.steam_id == CHAT
    assert chat.members == {ALICE: member}


def test_add_member_replaces_existing():
    chats = ChatsList()
    chats.add_chat_member(CHAT, ChatMember(steam_id=ALICE, chat_permissions=1))
    chats.add_chat_member(CHAT, ChatMember(steam_id=ALICE, chat_permissions=4))
    assert chats.by_id(CHAT).members[ALICE].chat_permissions == 4


def test_remove_member():
    chats = ChatsList()
    chats.add_chat_member(CHAT, ChatMember(steam_id=ALICE))
    chats.add_chat_member(CHAT, ChatMember(steam_id=BOB))
    chats.remove_chat_member(CHAT, ALICE)
    assert set(chats.by_id(CHAT).members) == {BOB}


def test_remove_member_of_unknown_chat_is_ignored():
    chats = ChatsList()
    chats.remove_chat_member(CHAT, ALICE)
    assert len(chats) == 0


def test_copy_is_independent():
    chats = ChatsList()
    chats.add_chat_member(CHAT, ChatMember(steam_id=ALICE))
    snapshot = chats.copy()
    snapshot[CHAT].members.clear()
    assert ALICE in chats.by_id(CHAT).members
    assert list(snapshot) == [CHAT]


def test_by_id_returns_copy():
    chats = ChatsList()
    chats.add(Chat(steam_id=CHAT))
    chats.by_id(CHAT).members[ALICE] = ChatMember(steam_id=ALICE)
    assert chats.by_id(CHAT).members == {}