import pytest

from steamcore.friends import Friend, FriendsList
from steamcore.steamid import SteamId

ALICE = SteamId.from_parts(11, 1, 1, 1)
BOB = SteamId.from_parts(22, 1, 1, 1)


def test_add_and_lookup():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE, relationship=3))
    assert len(friends) == 1
    assert friends.by_id(ALICE) == Friend(steam_id=ALICE, relationship=3)


def test_add_keeps_first():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE, name="first"))
    friends.add(Friend(steam_id=ALICE, name="second"))
    assert friends.by_id(ALICE).name == "first"


def test_remove():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE))
    friends.add(Friend(steam_id=BOB))
    friends.remove(ALICE)
    assert list(friends.copy()) == [BOB]


def test_missing_raises():
    with pytest.raises(KeyError):
        FriendsList().by_id(ALICE)


def test_update_fields():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE))
    friends.update(ALICE, name="alice", avatar=b"\x01\x02", game_app_id=440, game_name="tf")
    friend = friends.by_id(ALICE)
    assert (friend.name, friend.avatar, friend.game_app_id, friend.game_name) == (
        "alice",
        b"\x01\x02",
        440,
        "tf",
    )


def test_update_unknown_friend_is_ignored():
    friends = FriendsList()
    friends.update(ALICE, name="alice")
    assert len(friends) == 0


def test_update_rejects_unknown_field():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE))
    with pytest.raises(TypeError):
        friends.update(ALICE, nickname="x")


def test_update_rejects_steam_id():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE))
    with pytest.raises(TypeError):
        friends.update(ALICE, steam_id=BOB)


def test_copy_is_independent():
    friends = FriendsList()
    friends.add(Friend(steam_id=ALICE, name="alice"))
    snapshot = friends.copy()
    snapshot[ALICE].name = "changed"
    assert friends.by_id(ALICE).name == "alice"


def test_added_object_not_aliased():
    friends = FriendsList()
    original = Friend(steam_id=ALICE, name="alice")
    friends.add(original)
    original.name = "changed"
    assert friends.by_id(ALICE).name == "alice"