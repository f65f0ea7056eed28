# rotate_towards/core/__init__.py
"""Shared constants, configuration, event bus and system base class."""

from .base_system import BaseSystem
from .config import RotateTowardsConfig, get_default_config
from .event_bus import EventBus

__all__ = ['BaseSystem', 'RotateTowardsConfig', 'get_default_config', 'EventBus']
