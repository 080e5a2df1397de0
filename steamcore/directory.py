"""List of connection manager servers fetched from the Steam directory."""

from __future__ import annotations

import random
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

CM_LIST_URL = "https://api.steampowered.com/ISteamDirectory/GetCMList/v1/"
_TIMEOUT = 30


@dataclass(frozen=True)
class ServerAddress:
    """A host and port pair."""

    host: str
    port: int

    @classmethod
    def parse(cls, text: str) -> "ServerAddress":
        """Parse ``host:port`` (IPv6 hosts may be bracketed)."""
        host, sep, port_text = text.rpartition(":")
        if not sep or not host or not port_text.isascii() or not port_text.isdecimal():
            raise ValueError(f"invalid server address: {text!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        port = int(port_text)
        if port > 65535:
            raise ValueError(f"port out of range: {text!r}")
        return cls(host, port)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class SteamDirectoryError(Exception):
    """The directory could not be fetched or returned no usable servers."""


def _field(data: Mapping[str, Any], name: str) -> Any:
    if name in data:
        return data[name]
    lower = name.lower()
    for key, value in data.items():
        if key.lower() == lower:
            return value
    return None


class SteamDirectory:
    """Holds the server list once it has been fetched."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._servers: list[str] = []
        self._initialized = False
        self._rng = random.Random()

    def initialize(self, session: requests.Session | None = None) -> None:
        """Fetch the server list and keep it for later."""
        with self._lock:
            http = session if session is not None else requests
            response = http.get(CM_LIST_URL, params={"cellId": "0"}, timeout=_TIMEOUT)
            try:
                payload = response.json()
            except ValueError as exc:
                raise SteamDirectoryError(f"invalid steam directory response: {exc}") from exc

            body = _field(payload, "response") if isinstance(payload, Mapping) else None
            if not isinstance(body, Mapping):
                body = {}
            servers = _field(body, "serverlist") or []
            result = _field(body, "result") or 0
            message = _field(body, "message") or ""
            if not isinstance(servers, list) or not all(isinstance(s, str) for s in servers):
                raise SteamDirectoryError("invalid server list in steam directory response")

            if result != 1:
                raise SteamDirectoryError(
                    f"Failed to get steam directory, result: {result}, message: {message}"
                )
            if not servers:
                raise SteamDirectoryError(
                    "Steam returned zero servers for steam directory request"
                )
            self._servers = list(servers)
            self._initialized = True

    def random_cm(self) -> ServerAddress:
        """Pick a random server; the directory must be initialized."""
        with self._lock:
            if not self._initialized:
                raise RuntimeError("steam directory is not initialized")
            return ServerAddress.parse(self._rng.choice(self._servers))

    def is_initialized(self) -> bool:
        with self._lock:
            return self._initialized


_shared_directory = SteamDirectory()


def initialize_steam_directory(session: requests.Session | None = None) -> SteamDirectory:
    """Fill the shared directory from the Steam web API and return it."""
    _shared_directory.initialize(session)
    return _shared_directory