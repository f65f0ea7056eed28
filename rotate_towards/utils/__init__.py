# rotate_towards/utils/__init__.py
"""Math, error and logging utilities."""

from .quaternion import Quaternion, quaternion_identity
from .math_utils import any_orthonormal_vector, as_vector3, is_valid_vector, try_normalize
from .errors import (
    RotateTowardsError,
    TargetNotFound,
    RefreshFailed,
    InvalidUpDirection,
    SceneError,
    format_error,
)

__all__ = [
    'Quaternion',
    'quaternion_identity',
    'any_orthonormal_vector',
    'as_vector3',
    'is_valid_vector',
    'try_normalize',
    'RotateTowardsError',
    'TargetNotFound',
    'RefreshFailed',
    'InvalidUpDirection',
    'SceneError',
    'format_error',
]
