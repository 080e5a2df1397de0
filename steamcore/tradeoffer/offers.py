"""Data types returned by the trade offer web API."""

from __future__ import annotations

import enum
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from steamcore.steamid import SteamId

_ACCOUNT_ID_BASE = 76561197960265728

T = TypeVar("T")


class TradeOfferState(enum.IntEnum):
    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CREATED_NEEDS_CONFIRMATION = 9
    CANCELED_BY_SECOND_FACTOR = 10
    IN_ESCROW = 11


class TradeOfferConfirmationMethod(enum.IntEnum):
    INVALID = 0
    EMAIL = 1
    MOBILE_APP = 2


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
    elif isinstance(value, str) and value.isascii() and value.isdecimal():
        number = int(value)
    else:
        raise ValueError(f"invalid unsigned integer for {name}: {value!r}")
    if not 0 <= number < (1 << bits):
        raise ValueError(f"value out of range for {name}: {value!r}")
    return number


def _bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"invalid boolean for {name}: {value!r}")
    return value


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"invalid string for {name}: {value!r}")
    return value


def _list(value: Any, name: str, parse: Callable[[Any], T]) -> list[T | None]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"invalid list for {name}: {value!r}")
    return [None if entry is None else parse(entry) for entry in value]


def _enum(enum_cls: type[enum.IntEnum], value: int) -> int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Asset:
    """An item or currency amount in an offer; ``app_id`` is never filled from JSON."""

    app_id: int = 0
    context_id: int = 0
    asset_id: int = 0
    currency_id: int = 0
    class_id: int = 0
    instance_id: int = 0
    amount: int = 0
    missing: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "Asset":
        data = _as_mapping(data)
        return cls(
            context_id=_uint(_field(data, "contextid"), "contextid"),
            asset_id=_uint(_field(data, "assetid"), "assetid"),
            currency_id=_uint(_field(data, "currencyid"), "currencyid"),
            class_id=_uint(_field(data, "classid"), "classid"),
            instance_id=_uint(_field(data, "instanceid"), "instanceid"),
            amount=_uint(_field(data, "amount"), "amount"),
            missing=_bool(_field(data, "missing"), "missing"),
        )


@dataclass(frozen=True)
class TradeOffer:
    """A trade offer as reported by the web API."""

    trade_offer_id: int = 0
    trade_id: int = 0
    other_account_id: int = 0
    other_steam_id: SteamId = SteamId(0)
    message: str = ""
    expiration_time: int = 0
    state: int = 0
    to_give: list[Asset | None] = field(default_factory=list)
    to_receive: list[Asset | None] = field(default_factory=list)
    is_our_offer: bool = False
    time_created: int = 0
    time_updated: int = 0
    escrow_end_date: int = 0
    confirmation_method: int = TradeOfferConfirmationMethod.INVALID

    @classmethod
    def from_json(cls, data: Any) -> "TradeOffer":
        data = _as_mapping(data)
        account_id = _uint(_field(data, "accountid_other"), "accountid_other", 32)
        other = SteamId(account_id + _ACCOUNT_ID_BASE) if account_id else SteamId(0)
        return cls(
            trade_offer_id=_uint(_field(data, "tradeofferid"), "tradeofferid"),
            trade_id=_uint(_field(data, "tradeid"), "tradeid"),
            other_account_id=account_id,
            other_steam_id=other,
            message=_str(_field(data, "message"), "message"),
            # the API spells this key without the second "i"
            expiration_time=_uint(_field(data, "expiraton_time"), "expiraton_time", 32),
            state=_enum(TradeOfferState, _uint(_field(data, "trade_offer_state"), "trade_offer_state")),
            to_give=_list(_field(data, "items_to_give"), "items_to_give", Asset.from_json),
            to_receive=_list(_field(data, "items_to_receive"), "items_to_receive", Asset.from_json),
            is_our_offer=_bool(_field(data, "is_our_offer"), "is_our_offer"),
            time_created=_uint(_field(data, "time_created"), "time_created", 32),
            time_updated=_uint(_field(data, "time_updated"), "time_updated", 32),
            escrow_end_date=_uint(_field(data, "escrow_end_date"), "escrow_end_date", 32),
            confirmation_method=_enum(
                TradeOfferConfirmationMethod,
                _uint(_field(data, "confirmation_method"), "confirmation_method"),
            ),
        )


@dataclass(frozen=True)
class Description:
    """The shared description of a class of items.

    ``descriptions`` and ``actions`` are kept as the raw JSON lists.
    """

    app_id: int = 0
    class_id: int = 0
    instance_id: int = 0
    icon_url: str = ""
    icon_url_large: str = ""
    name: str = ""
    market_name: str = ""
    market_hash_name: str = ""
    name_color: str = ""
    background_color: str = ""
    type: str = ""
    tradable: bool = False
    commodity: bool = False
    market_tradable_restriction: int = 0
    descriptions: list[Any] = field(default_factory=list)
    actions: list[Any] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "Description":
        data = _as_mapping(data)

        def text(key: str) -> str:
            return _str(_field(data, key), key)

        def raw_list(key: str) -> list[Any]:
            return _list(_field(data, key), key, lambda entry: entry)

        return cls(
            app_id=_uint(_field(data, "appid"), "appid", 32),
            class_id=_uint(_field(data, "classid"), "classid"),
            instance_id=_uint(_field(data, "instanceid"), "instanceid"),
            icon_url=text("icon_url"),
            icon_url_large=text("icon_url_large"),
            name=text("name"),
            market_name=text("market_name"),
            market_hash_name=text("market_hash_name"),
            name_color=text("name_color"),
            background_color=text("background_color"),
            type=text("type"),
            tradable=_bool(_field(data, "tradable"), "tradable"),
            commodity=_bool(_field(data, "commodity"), "commodity"),
            market_tradable_restriction=_uint(
                _field(data, "market_tradable_restriction"), "market_tradable_restriction", 32
            ),
            descriptions=raw_list("descriptions"),
            actions=raw_list("actions"),
        )


@dataclass(frozen=True)
class TradeOffersResult:
    """Sent and received offers with the descriptions of their items."""

    sent: list[TradeOffer | None] = field(default_factory=list)
    received: list[TradeOffer | None] = field(default_factory=list)
    descriptions: list[Description | None] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "TradeOffersResult":
        data = _as_mapping(data)
        return cls(
            sent=_list(_field(data, "trade_offers_sent"), "trade_offers_sent", TradeOffer.from_json),
            received=_list(
                _field(data, "trade_offers_received"), "trade_offers_received", TradeOffer.from_json
            ),
            descriptions=_list(_field(data, "descriptions"), "descriptions", Description.from_json),
        )


@dataclass(frozen=True)
class TradeOfferResult:
    """A single offer with the descriptions of its items."""

    offer: TradeOffer | None = None
    descriptions: list[Description | None] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "TradeOfferResult":
        data = _as_mapping(data)
        offer = _field(data, "offer")
        return cls(
            offer=None if offer is None else TradeOffer.from_json(offer),
            descriptions=_list(_field(data, "descriptions"), "descriptions", Description.from_json),
        )