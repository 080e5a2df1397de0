# steamcore

Building blocks for talking to Steam from Python:

- `steamcore.steamid` – the 64-bit `SteamId` type, parsing of `STEAM_X:Y:Z`
  strings and conversion between clan and chat IDs.
- `steamcore.friends`, `steamcore.groups`, `steamcore.chats` – thread-safe
  caches of friends, groups and chat rooms.
- `steamcore.totp` – Steam Guard mobile authenticator codes.
- `steamcore.tf2_messages` – binary game-coordinator messages for TF2 items.
- `steamcore.directory` – the list of connection managers from the Steam
  directory web API.
- `steamcore.tradeoffer` – trade offer models, escrow and trade receipt parsing.
- `steamcore.trade` – automation of a live web trade session.

## Installation

```
pip install steamcore
```

## Steam IDs

```python
from steamcore.steamid import parse_steam_id

sid = parse_steam_id("STEAM_0:1:12345")
print(int(sid), str(sid), sid.account_type())
```

## Authenticator codes

```python
from steamcore.totp import Totp, generate_totp_code

code = Totp.now("c2VjcmV0").generate_code()
```

An invalid base64 secret raises `InvalidSharedSecretError`.

## Connection managers

```python
import requests
from steamcore.directory import SteamDirectory

directory = SteamDirectory()
directory.initialize(requests.Session())
address = directory.random_cm()
```

## Trading

Poll the trade until a `TradeEndedEvent` arrives, with no more than a few
seconds between polls:

```python
from steamcore.trade.session import Trade
from steamcore.trade.events import ChatEvent, TradeEndedEvent

trade = Trade(session_id, steam_login, steam_login_secure, other_steam_id)
while True:
    for event in trade.poll():
        if isinstance(event, ChatEvent):
            trade.chat("Hello!")
        elif isinstance(event, TradeEndedEvent):
            raise SystemExit
```

## Running the tests

```
pip install -e .[test]
pytest
```