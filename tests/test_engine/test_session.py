"""
Session state and settings store tests.
"""
import json
import threading

import pytest

from reseller_sdk.engine.exceptions import ConfigurationError
from reseller_sdk.engine.session import JsonSettingsStore, SessionState
from reseller_sdk.schemas.bases import Credentials


def test_session_defaults_to_unauthenticated():
    state = SessionState()
    assert state.token == ""
    assert state.secret == ""
    assert not state.is_authenticated


def test_session_update_and_clear():
    state = SessionState()
    state.update(Credentials(bearer_token="tok", user_secret="sec"))
    assert state.is_authenticated
    assert state.credentials() == Credentials(bearerToken="tok", userSecret="sec")

    state.clear_token()
    assert state.token == ""
    assert state.secret == "sec"


def test_session_lock_is_reentrant_context_manager():
    state = SessionState("tok")
    with state:
        with state.lock:
            state.set_token("other")
    assert state.token == "other"
    assert isinstance(state.lock, type(threading.RLock()))


def test_store_load_missing_file(tmp_path):
    store = JsonSettingsStore(tmp_path / "settings.json")
    assert store.load() == {}


def test_store_save_merges_whole_object(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bearerToken": "old", "custom": 1}), encoding="utf-8")

    store = JsonSettingsStore(path)
    store.load()
    store.save({"bearerToken": "new", "userSecret": "s"})

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved == {"bearerToken": "new", "custom": 1, "userSecret": "s"}
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_store_save_without_prior_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    JsonSettingsStore(path).save({"bearerToken": "t"})
    assert json.loads(path.read_text(encoding="utf-8")) == {"bearerToken": "t"}


@pytest.mark.parametrize("content", ["[1, 2]", "{broken"])
def test_store_rejects_malformed_settings(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        JsonSettingsStore(path).load()
