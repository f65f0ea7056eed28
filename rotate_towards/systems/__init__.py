# rotate_towards/systems/__init__.py
"""
Rotation systems and the directive types they act on.
"""

from rotate_towards.systems.directive import RotateTo, UpDirection, UpKind
from rotate_towards.systems.orientation import calculate_local_rotation_to_target
from rotate_towards.systems.up_direction import resolve_up_direction
from rotate_towards.systems.rotate_towards_system import RotateTowardsSystem, RotationReport

__all__ = [
    'RotateTo',
    'UpDirection',
    'UpKind',
    'calculate_local_rotation_to_target',
    'resolve_up_direction',
    'RotateTowardsSystem',
    'RotationReport',
]
