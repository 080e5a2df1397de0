import pytest
import requests
import responses
from responses import matchers

from steamcore.directory import (
    CM_LIST_URL,
    ServerAddress,
    SteamDirectory,
    SteamDirectoryError,
    initialize_steam_directory,
)

QUERY = [matchers.query_param_matcher({"cellId": "0"})]


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


def _add(mock, body):
    mock.add(responses.GET, CM_LIST_URL, json=body, match=QUERY)


def test_initialize_loads_servers(mock):
    _add(mock, {"response": {"serverlist": ["192.0.2.1:27017"], "result": 1, "message": ""}})
    directory = SteamDirectory()
    directory.initialize()
    assert directory.is_initialized() is True
    assert directory.random_cm() == ServerAddress("192.0.2.1", 27017)


def test_keys_match_case_insensitively(mock):
    _add(mock, {"Response": {"ServerList": ["192.0.2.2:27018"], "Result": 1}})
    directory = SteamDirectory()
    directory.initialize(requests.Session())
    assert directory.random_cm() == ServerAddress("192.0.2.2", 27018)


def test_random_cm_picks_from_list(mock):
    servers = ["192.0.2.1:1", "192.0.2.2:2", "192.0.2.3:3"]
    _add(mock, {"response": {"serverlist": servers, "result": 1}})
    directory = SteamDirectory()
    directory.initialize()
    picks = {str(directory.random_cm()) for _ in range(30)}
    assert picks <= set(servers)


def test_bad_result_raises(mock):
    _add(mock, {"response": {"serverlist": ["192.0.2.1:1"], "result": 2, "message": "busy"}})
    directory = SteamDirectory()
    with pytest.raises(SteamDirectoryError, match="result: 2, message: busy"):
        directory.initialize()
    assert directory.is_initialized() is False


def test_zero_servers_raises(mock):
    _add(mock, {"response": {"serverlist": [], "result": 1}})
    with pytest.raises(SteamDirectoryError, match="zero servers"):
        SteamDirectory().initialize()


def test_invalid_json_raises(mock):
    mock.add(responses.GET, CM_LIST_URL, body="not json", match=QUERY)
    with pytest.raises(SteamDirectoryError):
        SteamDirectory().initialize()


def test_random_cm_before_initialize_raises():
    with pytest.raises(RuntimeError, match="not initialized"):
        SteamDirectory().random_cm()


def test_initialize_steam_directory_fills_shared_directory(mock):
    _add(mock, {"response": {"serverlist": ["192.0.2.9:27019"], "result": 1}})
    directory = initialize_steam_directory()
    assert directory.is_initialized() is True
    assert directory.random_cm().port == 27019


def test_server_address_round_trip():
    assert str(ServerAddress.parse("192.0.2.5:443")) == "192.0.2.5:443"
    assert ServerAddress.parse("[::1]:80") == ServerAddress("::1", 80)
    assert str(ServerAddress("::1", 80)) == "[::1]:80"


@pytest.mark.parametrize("text", ["no-port", ":80", "host:", "host:abc", "host:70000"])
def test_server_address_rejects_malformed(text):
    with pytest.raises(ValueError):
        ServerAddress.parse(text)