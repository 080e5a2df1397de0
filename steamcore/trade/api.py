"""Thin typed client for the HTTP trading endpoints."""

from __future__ import annotations

import re
from dataclasses import dataclass

import requests

from steamcore.steamid import SteamId
from steamcore.trade.status import Status

TRADE_URL = "https://steamcommunity.com/trade/{}/"
_COOKIE_DOMAIN = "steamcommunity.com"
_TIMEOUT = 10
_PROBATION = re.compile(r"var g_bTradePartnerProbation = (\w+);", re.ASCII)


@dataclass(frozen=True)
class Main:
    """Details scraped from the trade's main page."""

    partner_on_probation: bool


class TradeApiError(Exception):
    """A trade endpoint returned something that could not be understood."""


class TradeApi:
    """Requests against one trade with a given partner.

    ``log_pos`` and ``version`` are sent with requests but not updated here.
    """

    def __init__(
        self,
        session_id: str,
        steam_login: str,
        steam_login_secure: str,
        other: SteamId | int,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._other = SteamId(other)
        # the session id is also sent as form data for CSRF protection
        self._session_id = session_id
        self.log_pos = 0
        self.version = 1
        for name, value in (
            ("sessionid", session_id),
            ("steamLogin", steam_login),
            ("steamLoginSecure", steam_login_secure),
        ):
            self._session.cookies.set(name, value, domain=_COOKIE_DOMAIN, path="/")

    @property
    def base_url(self) -> str:
        return TRADE_URL.format(int(self._other))

    def get_main(self) -> Main:
        """Fetch the trade's main page and read the partner's probation flag."""
        response = self._session.get(self.base_url, timeout=_TIMEOUT)
        match = _PROBATION.search(response.text)
        if match is None:
            raise TradeApiError("Could not find probation info")
        return Main(partner_on_probation=match.group(1) == "true")

    def _post_with_status(self, url: str, data: dict[str, str]) -> Status:
        # Steam reports missing parameters unless the Referer header is present.
        response = self._session.post(
            url, data=data, headers={"Referer": self.base_url}, timeout=_TIMEOUT
        )
        try:
            return Status.from_json(response.json())
        except ValueError as exc:
            raise TradeApiError(f"invalid trade status response: {exc}") from exc

    def get_status(self) -> Status:
        return self._post_with_status(
            self.base_url + "tradestatus/",
            {
                "sessionid": self._session_id,
                "logpos": str(self.log_pos),
                "version": str(self.version),
            },
        )

    def chat(self, message: str) -> Status:
        return self._post_with_status(
            self.base_url + "chat",
            {
                "sessionid": self._session_id,
                "logpos": str(self.log_pos),
                "version": str(self.version),
                "message": message,
            },
        )

    def _item_form(self, slot: int, item_id: int, context_id: int, app_id: int) -> dict[str, str]:
        return {
            "sessionid": self._session_id,
            "slot": str(slot),
            "itemid": str(item_id),
            "contextid": str(context_id),
            "appid": str(app_id),
        }

    def add_item(self, slot: int, item_id: int, context_id: int, app_id: int) -> Status:
        return self._post_with_status(
            self.base_url + "additem", self._item_form(slot, item_id, context_id, app_id)
        )

    def remove_item(self, slot: int, item_id: int, context_id: int, app_id: int) -> Status:
        return self._post_with_status(
            self.base_url + "removeitem", self._item_form(slot, item_id, context_id, app_id)
        )

    def set_currency(
        self, amount: int, currency_id: int, context_id: int, app_id: int
    ) -> Status:
        return self._post_with_status(
            self.base_url + "setcurrency",
            {
                "sessionid": self._session_id,
                "amount": str(amount),
                "currencyid": str(currency_id),
                "contextid": str(context_id),
                "appid": str(app_id),
            },
        )

    def set_ready(self, ready: bool) -> Status:
        return self._post_with_status(
            self.base_url + "toggleready",
            {
                "sessionid": self._session_id,
                "version": str(self.version),
                "ready": "true" if ready else "false",
            },
        )

    def confirm(self) -> Status:
        return self._post_with_status(
            self.base_url + "confirm",
            {"sessionid": self._session_id, "version": str(self.version)},
        )

    def cancel(self) -> Status:
        return self._post_with_status(self.base_url + "cancel", {"sessionid": self._session_id})