"""Events produced while a trade is running."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from steamcore.trade.status import Event


class TradeEndReason(enum.IntEnum):
    COMPLETE = 1
    CANCELLED = 2
    TIMEOUT = 3
    FAILED = 4


@dataclass(frozen=True)
class TradeEndedEvent:
    """The trade is over; no further polling is needed."""

    reason: TradeEndReason


@dataclass(frozen=True)
class Item:
    """An item as identified by the trade API."""

    app_id: int
    context_id: int
    asset_id: int

    @classmethod
    def from_event(cls, event: Event) -> "Item":
        return cls(event.app_id, event.context_id, event.asset_id)


@dataclass(frozen=True)
class ItemAddedEvent:
    """The partner put an item into the trade."""

    item: Item


@dataclass(frozen=True)
class ItemRemovedEvent:
    """The partner took an item out of the trade."""

    item: Item


@dataclass(frozen=True)
class ReadyEvent:
    """The partner is ready."""


@dataclass(frozen=True)
class UnreadyEvent:
    """The partner is no longer ready."""


@dataclass(frozen=True)
class Currency:
    """A currency as identified by the trade API."""

    app_id: int
    context_id: int
    currency_id: int

    @classmethod
    def from_event(cls, event: Event) -> "Currency":
        return cls(event.app_id, event.context_id, event.currency_id)


@dataclass(frozen=True)
class SetCurrencyEvent:
    """The partner changed the amount of a currency in the trade."""

    currency: Currency
    old_amount: int
    new_amount: int


@dataclass(frozen=True)
class ChatEvent:
    """The partner sent a chat message."""

    message: str


TradeEvent = Union[
    TradeEndedEvent,
    ItemAddedEvent,
    ItemRemovedEvent,
    ReadyEvent,
    UnreadyEvent,
    SetCurrencyEvent,
    ChatEvent,
]