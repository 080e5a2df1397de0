"""Event-based automation of a single Steam trade.

Call :meth:`Trade.poll` repeatedly until a :class:`TradeEndedEvent` arrives.
Steam closes the trade if polls are spaced more than a few seconds apart.
Every call blocks on an HTTP request, and a trade must not be used from
several threads at once.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping

import requests

from steamcore.steamid import SteamId
from steamcore.trade.api import Main, TradeApi
from steamcore.trade.events import (
    ChatEvent,
    Currency,
    Item,
    ItemAddedEvent,
    ItemRemovedEvent,
    ReadyEvent,
    SetCurrencyEvent,
    TradeEndedEvent,
    TradeEndReason,
    TradeEvent,
    UnreadyEvent,
)
from steamcore.trade.status import Action, Event, Status, TradeStatus

POLL_INTERVAL = 1.0

_END_REASONS = {
    TradeStatus.COMPLETE: TradeEndReason.COMPLETE,
    TradeStatus.CANCELLED: TradeEndReason.CANCELLED,
    TradeStatus.TIMEOUT: TradeEndReason.TIMEOUT,
    TradeStatus.FAILED: TradeEndReason.FAILED,
}


class TradeError(Exception):
    """Steam reported that a trade request did not succeed."""


class Trade:
    """A running trade with one partner."""

    def __init__(
        self,
        session_id: str,
        steam_login: str,
        steam_login_secure: str,
        other: SteamId | int,
        *,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.them_id = SteamId(other)
        self.me_ready = False
        self.them_ready = False
        self._api = TradeApi(session_id, steam_login, steam_login_secure, self.them_id, session)
        self._queued: list[TradeEvent] = []
        self._last_poll: float | None = None
        self._clock = clock
        self._sleep = sleep

    @property
    def version(self) -> int:
        """The trade version last reported by Steam."""
        return self._api.version

    def events(self) -> list[TradeEvent]:
        """Return and clear the queued events without making a request."""
        queued, self._queued = self._queued, []
        return queued

    def poll(self) -> list[TradeEvent]:
        """Return queued events, or fetch the status and return the new events.

        A fetch waits first if the previous one was less than a second ago.
        """
        if self._queued:
            return self.events()
        if self._last_poll is not None:
            elapsed = self._clock() - self._last_poll
            if elapsed < POLL_INTERVAL:
                self._sleep(POLL_INTERVAL - elapsed)
        self._last_poll = self._clock()
        self._on_status(self._api.get_status())
        return self.events()

    def get_main(self) -> Main:
        return self._api.get_main()

    def add_item(self, slot: int, item: Item) -> None:
        self._on_status(self._api.add_item(slot, item.asset_id, item.context_id, item.app_id))

    def remove_item(self, slot: int, item: Item) -> None:
        self._on_status(
            self._api.remove_item(slot, item.asset_id, item.context_id, item.app_id)
        )

    def chat(self, message: str) -> None:
        self._on_status(self._api.chat(message))

    def set_currency(self, amount: int, currency: Currency) -> None:
        self._on_status(
            self._api.set_currency(
                amount, currency.currency_id, currency.context_id, currency.app_id
            )
        )

    def set_ready(self, ready: bool) -> None:
        self._on_status(self._api.set_ready(ready))

    def confirm(self) -> None:
        """Confirm the trade; only valid after a successful ``set_ready(True)``."""
        self._on_status(self._api.confirm())

    def cancel(self) -> None:
        self._on_status(self._api.cancel())

    def _on_status(self, status: Status) -> None:
        if not status.success:
            raise TradeError(
                "trade: returned status not successful! error message: " + status.error
            )
        if status.new_version:
            self._api.version = status.version
            self.me_ready = status.me.ready
            self.them_ready = status.them.ready
        reason = _END_REASONS.get(status.trade_status)
        if reason is not None:
            self._queued.append(TradeEndedEvent(reason))
        self._update_events(status.events)

    def _update_events(self, events: Mapping[int, Event | None]) -> None:
        if not events:
            return
        last_pos = 0
        for index in sorted(events):
            event = events[index]
            if index < self._api.log_pos or event is None or event.steam_id != self.them_id:
                continue
            last_pos = max(last_pos, index)
            translated = self._translate(event)
            if translated is not None:
                self._queued.append(translated)
        self._api.log_pos = last_pos + 1

    def _translate(self, event: Event) -> TradeEvent | None:
        if event.action == Action.ADD_ITEM:
            return ItemAddedEvent(Item.from_event(event))
        if event.action == Action.REMOVE_ITEM:
            return ItemRemovedEvent(Item.from_event(event))
        if event.action == Action.READY:
            self.them_ready = True
            return ReadyEvent()
        if event.action == Action.UNREADY:
            self.them_ready = False
            return UnreadyEvent()
        if event.action == Action.SET_CURRENCY:
            return SetCurrencyEvent(
                Currency.from_event(event), event.old_amount, event.new_amount
            )
        if event.action == Action.CHAT_MESSAGE:
            return ChatEvent(event.text)
        return None