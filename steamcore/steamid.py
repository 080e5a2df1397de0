"""Steam account identifiers packed into a 64-bit integer."""

from __future__ import annotations

import enum
import re

_UINT64_MAX = (1 << 64) - 1

_ACCOUNT_ID = (0, 0xFFFFFFFF)
_INSTANCE = (32, 0xFFFFF)
_ACCOUNT_TYPE = (52, 0xF)
_UNIVERSE = (56, 0xF)

_TYPE_INVALID = 0
_TYPE_INDIVIDUAL = 1
_TYPE_CLAN = 7
_TYPE_CHAT = 8
_UNIVERSE_PUBLIC = 1

_LEGACY_PATTERN = re.compile(r"STEAM_[0-5]:[01]:\d+", re.ASCII)


class ChatInstanceFlag(enum.IntFlag):
    """Instance flags that mark the kind of chat a chat id refers to."""

    CLAN = 0x100000 >> 1
    LOBBY = 0x100000 >> 2
    MMS_LOBBY = 0x100000 >> 3


class SteamId(int):
    """A 64-bit Steam id with accessors for its bit fields."""

    __slots__ = ()

    def __new__(cls, value: int = 0) -> "SteamId":
        value = int(value)
        if not 0 <= value <= _UINT64_MAX:
            raise ValueError(f"steam id out of range: {value}")
        return super().__new__(cls, value)

    @classmethod
    def from_parts(
        cls, account_id: int, instance: int, universe: int, account_type: int
    ) -> "SteamId":
        """Build an id from its account id, instance, universe and type."""
        return cls(0).replace(
            account_id=account_id,
            instance=instance,
            universe=universe,
            account_type=account_type,
        )

    def _get(self, field: tuple[int, int]) -> int:
        offset, mask = field
        return (int(self) >> offset) & mask

    @staticmethod
    def _put(raw: int, field: tuple[int, int], value: int) -> int:
        offset, mask = field
        return (raw & ~(mask << offset) & _UINT64_MAX) | ((value & mask) << offset)

    @property
    def account_id(self) -> int:
        return self._get(_ACCOUNT_ID)

    @property
    def instance(self) -> int:
        return self._get(_INSTANCE)

    @property
    def account_type(self) -> int:
        return self._get(_ACCOUNT_TYPE)

    @property
    def universe(self) -> int:
        return self._get(_UNIVERSE)

    def replace(
        self,
        account_id: int | None = None,
        instance: int | None = None,
        universe: int | None = None,
        account_type: int | None = None,
    ) -> "SteamId":
        """Return a copy with the given fields replaced; values are masked to size."""
        raw = int(self)
        for field, value in (
            (_ACCOUNT_ID, account_id),
            (_INSTANCE, instance),
            (_UNIVERSE, universe),
            (_ACCOUNT_TYPE, account_type),
        ):
            if value is not None:
                raw = self._put(raw, field, int(value))
        return type(self)(raw)

    def clan_to_chat(self) -> "SteamId":
        """Turn a clan id into the id of the clan's chat room."""
        if self.account_type == _TYPE_CLAN:
            return self.replace(instance=ChatInstanceFlag.CLAN, account_type=_TYPE_CHAT)
        return self

    def chat_to_clan(self) -> "SteamId":
        """Turn a clan chat room id back into the clan's id."""
        if self.account_type == _TYPE_CHAT:
            return self.replace(instance=0, account_type=_TYPE_CLAN)
        return self

    def __str__(self) -> str:
        if self.account_type in (_TYPE_INVALID, _TYPE_INDIVIDUAL):
            low, high = self.account_id & 1, self.account_id >> 1
            if self.universe <= _UNIVERSE_PUBLIC:
                return f"STEAM_0:{low}:{high}"
            return f"STEAM_{self.universe}:{low}:{high}"
        return str(int(self))

    def __repr__(self) -> str:
        return f"SteamId({int(self)})"


def _lenient_int(text: str, bits: int, signed: bool) -> int:
    """Parse a decimal integer, giving 0 when malformed and clamping on overflow."""
    pattern = r"[+-]?\d+" if signed else r"\d+"
    if not re.fullmatch(pattern, text, re.ASCII):
        return 0
    value = int(text)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    return min(max(value, low), high)


def parse_steam_id(text: str) -> SteamId:
    """Parse either a ``STEAM_X:Y:Z`` string or a plain 64-bit decimal id."""
    if _LEGACY_PATTERN.search(text):
        parts = text.replace("STEAM_", "").split(":")
        universe = _lenient_int(parts[0], 32, signed=True)
        if universe == 0:
            universe = _UNIVERSE_PUBLIC
        auth_server = _lenient_int(parts[1], 32, signed=False)
        account_number = _lenient_int(parts[2], 32, signed=False)
        account_id = ((account_number << 1) | auth_server) & 0xFFFFFFFF
        return SteamId.from_parts(account_id, 1, universe, _TYPE_INDIVIDUAL)

    if not re.fullmatch(r"\d+", text, re.ASCII):
        raise ValueError(f"invalid steam id: {text!r}")
    value = int(text)
    if value > _UINT64_MAX:
        raise ValueError(f"steam id out of range: {text!r}")
    return SteamId(value)