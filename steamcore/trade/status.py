"""Status documents returned by the trade web API."""

from __future__ import annotations

import enum
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from steamcore.steamid import SteamId

_DECIMAL = re.compile(r"[0-9]+")
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")


class TradeStatus(enum.IntEnum):
    OPEN = 0
    COMPLETE = 1
    EMPTY = 2  # both parties trade no items
    CANCELLED = 3
    TIMEOUT = 4  # the partner timed out
    FAILED = 5


class Action(enum.IntEnum):
    ADD_ITEM = 0
    REMOVE_ITEM = 1
    READY = 2
    UNREADY = 3
    ACCEPT = 4
    SET_CURRENCY = 6
    CHAT_MESSAGE = 7


def _as_mapping(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _field(data: Mapping[str, Any], name: str) -> Any:
    if name in data:
        return data[name]
    lower = name.lower()
    for key, value in data.items():
        if key.lower() == lower:
            return value
    return None


def _uint(value: Any, name: str, bits: int = 64) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and _DECIMAL.fullmatch(value):
        number = int(value)
    else:
        raise ValueError(f"invalid unsigned integer for {name}: {value!r}")
    if not 0 <= number < (1 << bits):
        raise ValueError(f"value out of range for {name}: {value!r}")
    return number


def _int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _SIGNED_DECIMAL.fullmatch(value):
        return int(value)
    raise ValueError(f"invalid integer for {name}: {value!r}")


def _bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"invalid boolean for {name}: {value!r}")
    return value


def _uint_bool(value: Any, name: str) -> bool:
    """A flag sent either as a JSON boolean or as a 0/1 number."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str) and _DECIMAL.fullmatch(value):
        return int(value) != 0
    raise ValueError(f"invalid flag for {name}: {value!r}")


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"invalid string for {name}: {value!r}")
    return value


def _enum(enum_cls: type[enum.IntEnum], value: int) -> int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Event:
    """One entry of the trade log."""

    steam_id: SteamId = SteamId(0)
    action: int = Action.ADD_ITEM
    timestamp: int = 0
    app_id: int = 0
    context_id: int = 0
    asset_id: int = 0
    text: str = ""  # only used for chat messages
    currency_id: int = 0
    old_amount: int = 0
    new_amount: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "Event":
        data = _as_mapping(data)
        return cls(
            steam_id=SteamId(_uint(_field(data, "steamid"), "steamid")),
            action=_enum(Action, _uint(_field(data, "action"), "action")),
            timestamp=_uint(_field(data, "timestamp"), "timestamp"),
            app_id=_uint(_field(data, "appid"), "appid", 32),
            context_id=_uint(_field(data, "contextid"), "contextid"),
            asset_id=_uint(_field(data, "assetid"), "assetid"),
            text=_str(_field(data, "text"), "text"),
            currency_id=_uint(_field(data, "currencyid"), "currencyid"),
            old_amount=_uint(_field(data, "old_amount"), "old_amount"),
            new_amount=_uint(_field(data, "amount"), "amount"),
        )


def parse_event_list(data: Any) -> dict[int, Event | None]:
    """Parse the event log, sent either as an array or as an object of id to event."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if data is None:
        return {}
    events: dict[int, Event | None] = {}
    if isinstance(data, Mapping):
        for key, raw in data.items():
            if not isinstance(key, str) or not _DECIMAL.fullmatch(key):
                raise ValueError(f"invalid event id: {key!r}")
            index = int(key)
            if index >= 1 << 32:
                raise ValueError(f"event id out of range: {key!r}")
            events[index] = None if raw is None else Event.from_json(raw)
        return events
    if isinstance(data, list):
        for index, raw in enumerate(data):
            events[index] = None if raw is None else Event.from_json(raw)
        return events
    raise ValueError(f"invalid event list: {data!r}")


@dataclass(frozen=True)
class User:
    """One party's state in the trade."""

    ready: bool = False
    confirmed: bool = False
    sec_since_touch: int = 0
    connection_pending: bool = False
    assets: Any = None
    currency: Any = None  # either a list of currencies or an empty string

    @classmethod
    def from_json(cls, data: Any) -> "User":
        data = _as_mapping(data)
        return cls(
            ready=_uint_bool(_field(data, "ready"), "ready"),
            confirmed=_uint_bool(_field(data, "confirmed"), "confirmed"),
            sec_since_touch=_int(_field(data, "sec_since_touch"), "sec_since_touch"),
            connection_pending=_bool(_field(data, "connection_pending"), "connection_pending"),
            assets=_field(data, "assets"),
            currency=_field(data, "currency"),
        )


@dataclass(frozen=True)
class Currency:
    """A currency amount put into the trade."""

    app_id: int = 0
    context_id: int = 0
    currency_id: int = 0
    amount: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "Currency":
        data = _as_mapping(data)
        return cls(
            app_id=_uint(_field(data, "appid"), "appid"),
            context_id=_uint(_field(data, "contextid"), "contextid"),
            currency_id=_uint(_field(data, "currencyid"), "currencyid"),
            amount=_uint(_field(data, "amount"), "amount"),
        )


@dataclass(frozen=True)
class Status:
    """The state of a trade as reported after each request."""

    success: bool = False
    error: str = ""
    new_version: bool = False
    trade_status: int = TradeStatus.OPEN
    version: int = 0
    log_pos: int = 0
    me: User = field(default_factory=User)
    them: User = field(default_factory=User)
    events: dict[int, Event | None] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "Status":
        data = _as_mapping(data)
        me = _field(data, "me")
        them = _field(data, "them")
        return cls(
            success=_bool(_field(data, "success"), "success"),
            error=_str(_field(data, "error"), "error"),
            new_version=_bool(_field(data, "newversion"), "newversion"),
            trade_status=_enum(TradeStatus, _uint(_field(data, "trade_status"), "trade_status")),
            version=_uint(_field(data, "version"), "version"),
            log_pos=_int(_field(data, "logpos"), "logpos"),
            me=User() if me is None else User.from_json(me),
            them=User() if them is None else User.from_json(them),
            events=parse_event_list(_field(data, "events")),
        )