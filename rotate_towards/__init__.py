from .scene import SceneGraph, Transform
from .systems import (
    RotateTo,
    UpDirection,
    UpKind,
    RotateTowardsSystem,
    RotationReport,
    calculate_local_rotation_to_target,
    resolve_up_direction,
)
from .simulator import Simulator
from .core import EventBus, RotateTowardsConfig
from .utils import Quaternion, TargetNotFound, RefreshFailed, InvalidUpDirection, SceneError

__version__ = "0.1.0"

__all__ = [
    'SceneGraph',
    'Transform',
    'RotateTo',
    'UpDirection',
    'UpKind',
    'RotateTowardsSystem',
    'RotationReport',
    'calculate_local_rotation_to_target',
    'resolve_up_direction',
    'Simulator',
    'EventBus',
    'RotateTowardsConfig',
    'Quaternion',
    'TargetNotFound',
    'RefreshFailed',
    'InvalidUpDirection',
    'SceneError',
]
