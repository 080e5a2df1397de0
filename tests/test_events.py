import dataclasses

import pytest

from steamcore.steamid import SteamId
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
    UnreadyEvent,
)
from steamcore.trade.status import Action, Event


def test_item_from_event_copies_identifiers():
    event = Event(
        steam_id=SteamId(76561197960265729),
        action=Action.ADD_ITEM,
        app_id=440,
        context_id=2,
        asset_id=987654321,
    )
    assert Item.from_event(event) == Item(app_id=440, context_id=2, asset_id=987654321)


def test_currency_from_event_copies_identifiers():
    event = Event(action=Action.SET_CURRENCY, app_id=753, context_id=6, currency_id=31)
    assert Currency.from_event(event) == Currency(app_id=753, context_id=6, currency_id=31)


def test_item_from_json_event_round_trip():
    event = Event.from_json({"appid": 730, "contextid": "2", "assetid": "555"})
    item = Item.from_event(event)
    assert (item.app_id, item.context_id, item.asset_id) == (730, 2, 555)


def test_end_reason_from_raw_value():
    assert TradeEndReason(2) is TradeEndReason.CANCELLED
    with pytest.raises(ValueError):
        TradeEndReason(0)


def test_events_compare_by_value():
    item = Item(440, 2, 7)
    assert ItemAddedEvent(item) == ItemAddedEvent(Item(440, 2, 7))
    assert ItemAddedEvent(item) != ItemRemovedEvent(item)
    assert ReadyEvent() == ReadyEvent()
    assert ReadyEvent() != UnreadyEvent()
    assert ChatEvent("hello") == ChatEvent("hello")
    assert TradeEndedEvent(TradeEndReason.FAILED) == TradeEndedEvent(TradeEndReason.FAILED)


def test_set_currency_event_holds_amounts():
    currency = Currency(753, 6, 1)
    event = SetCurrencyEvent(currency, old_amount=5, new_amount=9)
    assert event.currency == currency
    assert (event.old_amount, event.new_amount) == (5, 9)


def test_events_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ChatEvent("hello").message = "other"