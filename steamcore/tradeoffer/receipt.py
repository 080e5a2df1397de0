"""Items listed on a trade receipt page."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_ITEM_PATTERN = re.compile(rb"oItem =\s+(.+?});")
_OWN_KEYS = frozenset({"id", "appid", "contextid", "owner", "pos"})


def _field(data: Mapping[str, Any], name: str) -> Any:
    if name in data:
        return data[name]
    for key, value in data.items():
        if key.lower() == name:
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


@dataclass(frozen=True)
class TradeReceiptItem:
    """An item received in a trade; ``description`` holds its remaining fields."""

    asset_id: int = 0
    app_id: int = 0
    context_id: int = 0
    owner: int = 0
    pos: int = 0
    description: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | str | bytes) -> "TradeReceiptItem":
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object for a receipt item")
        return cls(
            asset_id=_uint(_field(data, "id"), "id"),
            app_id=_uint(_field(data, "appid"), "appid", 32),
            context_id=_uint(_field(data, "contextid"), "contextid"),
            owner=_uint(_field(data, "owner"), "owner"),
            pos=_uint(_field(data, "pos"), "pos", 32),
            description={k: v for k, v in data.items() if k.lower() not in _OWN_KEYS},
        )


def parse_trade_receipt(data: bytes | str) -> list[TradeReceiptItem]:
    """Extract every item object embedded in a receipt page."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    matches = _ITEM_PATTERN.findall(data)
    if not matches:
        raise ValueError("items not found")
    return [TradeReceiptItem.from_json(json.loads(raw)) for raw in matches]