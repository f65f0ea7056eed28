"""
Configuration for the rotate-towards pipeline.

Defaults live here; values can come from environment variables, a scene
file's ``config`` mapping, or CLI arguments.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional
import logging
import os

from rotate_towards.core.constants import ROTATION_EPSILON

logger = logging.getLogger(__name__)

DEFAULT_DT = 0.1                 # 100ms simulation timestep
DEFAULT_TICKS = 1

ENV_PREFIX = "ROTATE_TOWARDS_"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


@dataclass
class RotateTowardsConfig:
    """
    Pipeline configuration container.

    Attributes:
        epsilon: Per-component quaternion tolerance below which the local
            rotation is not rewritten.
        refresh_descendants: Also recompute the world transforms of every
            descendant of a refreshed rotator within the same tick.
        dt: Simulation timestep passed to systems.
        ticks: Number of ticks the CLI runs.
        log_file: Log file path or directory; None uses the default log dir.
        debug: Enable debug logging.
    """

    epsilon: float = ROTATION_EPSILON
    refresh_descendants: bool = False
    dt: float = DEFAULT_DT
    ticks: int = DEFAULT_TICKS
    log_file: Optional[str] = None
    debug: bool = False

    def __post_init__(self):
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative (got {self.epsilon})")
        if self.ticks < 0:
            raise ValueError(f"ticks must be non-negative (got {self.ticks})")

    @classmethod
    def from_env(cls) -> "RotateTowardsConfig":
        """Create config from environment variables."""
        return cls(
            epsilon=float(os.environ.get(f"{ENV_PREFIX}EPSILON", ROTATION_EPSILON)),
            refresh_descendants=_env_flag(f"{ENV_PREFIX}REFRESH_DESCENDANTS"),
            dt=float(os.environ.get(f"{ENV_PREFIX}DT", DEFAULT_DT)),
            ticks=int(os.environ.get(f"{ENV_PREFIX}TICKS", DEFAULT_TICKS)),
            log_file=os.environ.get(f"{ENV_PREFIX}LOG_FILE"),
            debug=_env_flag(f"{ENV_PREFIX}DEBUG"),
        )

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> "RotateTowardsConfig":
        """Return a copy with known keys replaced; unknown keys are logged and ignored."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        accepted = {}
        for key, value in overrides.items():
            if key in known and value is not None:
                accepted[key] = value
            elif key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
        return replace(self, **accepted)


def get_default_config() -> RotateTowardsConfig:
    """Get the default pipeline configuration."""
    return RotateTowardsConfig()
