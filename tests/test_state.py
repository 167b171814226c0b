from datetime import datetime, timedelta

from lexlingo.models import WordRecord
from lexlingo.state import ClientStateRegistry, set_current_word


def age(state, minutes):
    state.last_seen = datetime.now() - timedelta(minutes=minutes)


def test_create_and_get():
    registry = ClientStateRegistry(timeout_minutes=10)
    session_id, state = registry.create()
    assert registry.get(session_id) is state
    assert registry.get("unknown") is None
    assert registry.get(None) is None


def test_expired_state_is_dropped_on_get():
    registry = ClientStateRegistry(timeout_minutes=10)
    session_id, state = registry.create()
    age(state, 11)

    assert registry.get(session_id) is None
    assert session_id not in registry.states


def test_create_sweeps_abandoned_states():
    registry = ClientStateRegistry(timeout_minutes=10)
    stale_id, stale = registry.create()
    fresh_id, _ = registry.create()
    age(stale, 30)

    new_id, _ = registry.create()

    assert stale_id not in registry.states
    assert set(registry.states) == {fresh_id, new_id}


def test_sweep_reports_removed_count():
    registry = ClientStateRegistry(timeout_minutes=10)
    for _ in range(3):
        _, state = registry.create()
        age(state, 60)
    assert registry.sweep() == 3
    assert registry.states == {}


def test_discard():
    registry = ClientStateRegistry(timeout_minutes=10)
    session_id, _ = registry.create()
    registry.discard(session_id)
    registry.discard("never-existed")
    assert registry.get(session_id) is None


def test_set_current_word_clears_translation():
    registry = ClientStateRegistry(timeout_minutes=10)
    _, state = registry.create()
    state.current_translation = "gato"

    set_current_word(state, WordRecord(word="dog"))

    assert state.current_word.word == "dog"
    assert state.current_translation == ""
