"""
antcolony module: settings.py

Validated snapshot of the user-facing knobs. The engine re-reads the whole
snapshot at the start of every step, so swapping one in between steps is safe.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace as dc_replace
import json
import logging
from typing import Any, Dict, Optional

from antcolony import config

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for configuration the simulation cannot run with."""


# camelCase names accepted by from_dict
_ALIASES = {
    "antCount": "ant_count",
    "antSpeed": "ant_speed",
    "pheromoneInfluence": "pheromone_influence",
    "randomness": "randomness",
    "evaporationRate": "evaporation_rate",
    "depositionRate": "deposition_rate",
    "timeScale": "time_scale",
    "allowFoodDepletion": "allow_food_depletion",
    "depletionMultiplier": "depletion_multiplier",
    "autoFood": "auto_food",
    "worldWidth": "world_width",
    "worldHeight": "world_height",
}

MIN_TIME_SCALE = 0.01


@dataclass(frozen=True)
class Settings:
    ant_count: int = 200
    ant_speed: float = 7.0
    pheromone_influence: float = 0.9
    randomness: float = 0.7
    evaporation_rate: float = 0.15
    deposition_rate: float = 0.55
    time_scale: float = 3.0
    allow_food_depletion: bool = False
    depletion_multiplier: float = 1.0
    auto_food: bool = True
    world_width: float = config.WORLD_W
    world_height: float = config.WORLD_H
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.world_width > 0 or not self.world_height > 0:
            raise ConfigError(
                f"world dimensions must be positive, got {self.world_width}x{self.world_height}"
            )

        self._clamp("ant_count", max(0, int(self.ant_count)))
        self._clamp("ant_speed", max(0.0, float(self.ant_speed)))
        self._clamp("pheromone_influence", max(0.0, float(self.pheromone_influence)))
        self._clamp("randomness", max(0.0, float(self.randomness)))
        self._clamp("evaporation_rate", max(0.0, float(self.evaporation_rate)))
        self._clamp("deposition_rate", max(0.0, float(self.deposition_rate)))
        self._clamp("time_scale", max(MIN_TIME_SCALE, float(self.time_scale)))
        self._clamp("depletion_multiplier", max(0.0, float(self.depletion_multiplier)))

    def _clamp(self, name: str, value: Any) -> None:
        current = getattr(self, name)
        if current != value:
            logger.warning("settings: %s=%r out of range, using %r", name, current, value)
        # frozen dataclass: bypass __setattr__ during validation
        object.__setattr__(self, name, value)

    @property
    def world_size(self) -> tuple[float, float]:
        return (self.world_width, self.world_height)

    def replace(self, **changes: Any) -> "Settings":
        return dc_replace(self, **changes)

    @classmethod
    def from_dict(cls, settings_dict: Dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in settings_dict.items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                logger.debug("settings: ignoring unknown key %r", key)

        # nested {"world": {"width": .., "height": ..}} form
        world = settings_dict.get("world")
        if isinstance(world, dict):
            if "width" in world:
                kwargs["world_width"] = world["width"]
            if "height" in world:
                kwargs["world_height"] = world["height"]

        return cls(**kwargs)

    @classmethod
    def from_file(cls, file_path: str) -> "Settings":
        with open(file_path, "r") as f:
            settings_dict = json.load(f)
        return cls.from_dict(settings_dict)
