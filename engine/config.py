"""
config.py — Engine Configuration
=================================
Playback timing and logging knobs.  Defaults reproduce the classic
visualizer cadence: delay = 1000 ms − 9 ms × speed, so speed 10 → 910 ms
between events and speed 100 → 100 ms.

Overrides come from a JSON file:

    cfg = EngineConfig.load_from_file("dsviz.json")

Unknown keys are rejected so a typo doesn't silently fall back to a
default.
"""

import json
from dataclasses import asdict, dataclass, fields

from structures.errors import ValidationError, require_int


@dataclass
class EngineConfig:
    min_speed:          int   = 10
    max_speed:          int   = 100
    default_speed:      int   = 50
    base_delay_ms:      float = 1000.0
    delay_per_speed_ms: float = 9.0
    log_level:          str   = "INFO"

    # ------------------------------------------------------------------
    # Speed → delay
    # ------------------------------------------------------------------
    def validate_speed(self, speed) -> int:
        value = require_int(speed, "speed")
        if not self.min_speed <= value <= self.max_speed:
            raise ValidationError(
                f"Speed must be between {self.min_speed} and {self.max_speed}, got {value}", "speed"
            )
        return value

    def delay_for(self, speed) -> float:
        """Seconds between two deliveries at `speed` percent."""
        value = self.validate_speed(speed)
        return max(0.0, self.base_delay_ms - self.delay_per_speed_ms * value) / 1000.0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        known   = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown config keys: {', '.join(unknown)}", unknown[0])
        cfg = cls(**data)
        if cfg.min_speed > cfg.max_speed:
            raise ValidationError("min_speed must not exceed max_speed", "min_speed")
        cfg.validate_speed(cfg.default_speed)
        return cfg

    @classmethod
    def load_from_file(cls, path: str) -> "EngineConfig":
        with open(path, "r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))

    def to_dict(self) -> dict:
        return asdict(self)
