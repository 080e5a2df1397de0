"""Errors raised by trade offer operations."""

from __future__ import annotations


class SteamError(Exception):
    """Steam answered, but in an unexpected form or by declining the request."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message