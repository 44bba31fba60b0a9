from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")


@dataclass(slots=True)
class SimConfig:
    match_driver_w_order: bool = False
    order_receive_interval: float = 0.5  # seconds between two incoming orders
    pickup_delay_min: float = 3.0
    pickup_delay_max: float = 15.0
    data_path: str = "orders-data.json"
    realtime: bool = False
    seed: Optional[int] = None

    def validate(self) -> None:
        for name in ("match_driver_w_order", "realtime"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if self.order_receive_interval < 0:
            raise ConfigError(f"order_receive_interval must be >= 0, got {self.order_receive_interval}")
        if self.pickup_delay_min < 0 or self.pickup_delay_min > self.pickup_delay_max:
            raise ConfigError(
                f"invalid pickup delay range [{self.pickup_delay_min}, {self.pickup_delay_max}]"
            )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SimConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        try:
            cfg = cls(**{k: v for k, v in raw.items() if k in known})
            cfg.order_receive_interval = float(cfg.order_receive_interval)
            cfg.pickup_delay_min = float(cfg.pickup_delay_min)
            cfg.pickup_delay_max = float(cfg.pickup_delay_max)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid config value: {e}") from e
        cfg.validate()
        return cfg


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> SimConfig:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"malformed config {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must hold a JSON object")
    return SimConfig.from_dict(raw)
