"""Tests for event-log, state and config serialization."""
import json
import random

import pytest

from bela.config import GameConfig
from bela.errors import ConfigError
from bela.game import new_match
from bela.persistence import (
    SCHEMA_VERSION,
    config_from_json,
    config_to_json,
    event_from_dict,
    event_to_dict,
    events_from_json,
    events_to_json,
    state_to_dict,
)
from bela.simulate import make_bots, play_hand
from bela.state import EventType


def _played_hand():
    state = new_match(rng=random.Random(8))
    return play_hand(state, make_bots([2, 2, 1, 1]))


def test_event_log_round_trip():
    state = _played_hand()
    s = events_to_json(state.events)
    restored = events_from_json(s)
    assert restored == list(state.events)
    assert {e.type for e in restored} >= {EventType.BID, EventType.PLAY_CARD, EventType.TRICK_COMPLETE, EventType.HAND_COMPLETE}


def test_event_dict_format():
    state = _played_hand()
    play = next(e for e in state.events if e.type == EventType.PLAY_CARD)
    d = event_to_dict(play)
    assert d["type"] == "play_card"
    assert d["seat"] == play.seat.label
    assert d["payload"] == str(play.payload)
    assert d["hand"] == 1
    assert event_from_dict(d) == play

    done = next(e for e in state.events if e.type == EventType.HAND_COMPLETE)
    payload = event_to_dict(done)["payload"]
    assert set(payload) == {"hand_scores", "match_scores", "contract_bonus", "contract_made"}
    assert payload["contract_bonus"] == 90


def test_events_from_json_rejects_other_schema():
    s = json.dumps({"schema_version": SCHEMA_VERSION + 1, "events": []})
    with pytest.raises(ValueError):
        events_from_json(s)


def test_state_to_dict_is_json():
    state = _played_hand()
    d = json.loads(json.dumps(state_to_dict(state)))
    assert d["phase"] == "scoring"
    assert d["trump"] == state.trump.label
    assert len(d["tricks"]) == 8
    assert sum(t["points"] for t in d["tricks"]) == 120
    assert d["players"]["south"]["name"] == "You"
    assert d["config"]["match_target_score"] == 1001

    fresh = state_to_dict(new_match(rng=random.Random(1)))
    assert fresh["phase"] == "bidding"
    assert len(fresh["talon"]) == 2
    assert fresh["trump"] is None


def test_config_round_trip():
    config = GameConfig(overtrump_required=True, match_target_score=501)
    assert config_from_json(config_to_json(config)) == config


def test_config_from_camel_case():
    config = GameConfig.from_dict({"mustFollowSuit": False, "matchTargetScore": 701, "bidRaising": True})
    assert not config.must_follow_suit
    assert config.match_target_score == 701
    assert config.bid_raising
    assert config.declarations_enabled


def test_config_rejects_bad_values():
    with pytest.raises(ConfigError):
        GameConfig.from_dict({"noSuchOption": True})
    with pytest.raises(ConfigError):
        GameConfig(match_target_score=0)
    with pytest.raises(ConfigError):
        GameConfig(last_trick_bonus="yes")
    # ConfigError is also a ValueError.
    with pytest.raises(ValueError):
        config_from_json('{"match_target_score": true}')
