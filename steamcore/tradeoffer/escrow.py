"""Escrow durations scraped from the trade offer page."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MY_ESCROW = re.compile(rb"(?i)g_daysMyEscrow[\s=]+(\d+);")
_THEIR_ESCROW = re.compile(rb"(?i)g_daysTheirEscrow[\s=]+(\d+);")
_NOT_FRIENDS = re.compile(rb">You are not friends with this user<")

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class EscrowDuration:
    """Days the items of each party would be held in escrow."""

    days_my_escrow: int
    days_their_escrow: int


def _parse_days(raw: bytes, whose: str) -> int:
    value = int(raw)
    if value > _UINT32_MAX:
        raise ValueError(
            f"failed to parse {whose} duration into uint: value out of range: {raw.decode()}"
        )
    return value


def parse_escrow_duration(data: bytes | str) -> EscrowDuration:
    """Extract both escrow durations from the page's script."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    mine = _MY_ESCROW.search(data)
    theirs = _THEIR_ESCROW.search(data)
    if mine is None or theirs is None:
        if _NOT_FRIENDS.search(data):
            raise ValueError("you are not friends with this user")
        raise ValueError("regexp does not match")
    return EscrowDuration(
        days_my_escrow=_parse_days(mine.group(1), "my"),
        days_their_escrow=_parse_days(theirs.group(1), "their"),
    )