# rotate_towards/core/base_system.py

"""Common interface for per-tick scene systems."""


class BaseSystem:
    """Base class providing shared fields and helpers for scene systems."""

    name = "system"

    def __init__(self, config=None):
        config = config or {}
        self.enabled = config.get("enabled", True)

    def tick(self, dt, scene, event_bus):
        """Advance system state each frame."""
        raise NotImplementedError("tick must be implemented by subclasses")

    def get_state(self):
        return {"name": self.name, "enabled": self.enabled}
