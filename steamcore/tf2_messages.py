"""Binary game coordinator messages for item handling."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field


def _pack(fmt: str, *values: int) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(str(exc)) from None


@dataclass(frozen=True)
class SetItemPosition:
    """Moves an item to a backpack position."""

    asset_id: int
    position: int

    def serialize(self) -> bytes:
        return _pack("<QQ", self.asset_id, self.position)


@dataclass(frozen=True)
class Craft:
    """Crafts the given items with a recipe; recipe -2 is the wildcard."""

    recipe: int
    items: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def serialize(self) -> bytes:
        header = _pack("<hh", self.recipe, len(self.items))
        return header + _pack(f"<{len(self.items)}Q", *self.items)


@dataclass(frozen=True)
class DeleteItem:
    """Deletes an item."""

    item_id: int

    def serialize(self) -> bytes:
        return _pack("<Q", self.item_id)


@dataclass(frozen=True)
class NameItem:
    """Applies a name tag tool to a target item."""

    tool: int
    target: int
    name: str

    def serialize(self) -> bytes:
        return _pack("<QQ", self.tool, self.target) + self.name.encode("utf-8")