"""
Rule configuration.

``GameConfig`` is an immutable options object carried by every game state.
Defaults reproduce the standard rule set; ``from_dict`` also accepts the
camelCase keys used by saved front-end settings.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from .errors import ConfigError

DEFAULT_MATCH_TARGET = 1001


@dataclass(frozen=True)
class GameConfig:
    """Rule options for a match."""

    must_follow_suit: bool = True
    must_trump_when_void: bool = True
    overtrump_required: bool = False
    declarations_enabled: bool = True
    last_trick_bonus: bool = True
    match_target_score: int = DEFAULT_MATCH_TARGET
    # Bids can be raised (same suit, higher level) before play starts.
    bid_raising: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "match_target_score":
                if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                    raise ConfigError(f"match_target_score must be a positive integer, got {value!r}")
            elif not isinstance(value, bool):
                raise ConfigError(f"{f.name} must be a boolean, got {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Build a config from snake_case or camelCase keys; missing keys keep defaults."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in d.items():
            name = _snake_case(key)
            if name not in known:
                raise ConfigError(f"Unknown configuration option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


DEFAULT_CONFIG = GameConfig()

__all__ = ["GameConfig", "DEFAULT_CONFIG", "DEFAULT_MATCH_TARGET"]
