# rotate_towards/utils/math_utils.py
"""Vector helpers with NaN/Inf guards."""

import math
import logging

import numpy as np

logger = logging.getLogger(__name__)

# Below this length a direction is treated as zero
DIRECTION_EPSILON = 1e-10


def is_valid_number(value):
    """Check if a number is finite and not NaN."""
    return not (math.isnan(value) or math.isinf(value))


def is_valid_vector(vector):
    """Check if all components of a vector are finite numbers.

    Args:
        vector: Sequence or numpy array of components

    Returns:
        bool: True if all components are valid
    """
    return all(is_valid_number(float(c)) for c in vector)


def as_vector3(value, name="vector"):
    """Convert a 3-sequence into a float numpy array.

    Args:
        value: Sequence of three numbers
        name (str): Name used in the error message

    Returns:
        np.ndarray: Array of shape (3,)

    Raises:
        ValueError: If the value does not have exactly three components
    """
    arr = np.array(value, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have 3 components (got {len(arr)})")
    return arr


def try_normalize(vector):
    """Normalize a vector, or return None if its length is too small or invalid.

    Args:
        vector: Vector to normalize

    Returns:
        np.ndarray or None
    """
    v = np.asarray(vector, dtype=float)
    length = float(np.linalg.norm(v))
    if length < DIRECTION_EPSILON or not is_valid_number(length):
        return None
    return v / length


def any_orthonormal_vector(direction):
    """Return a unit vector orthogonal to a unit ``direction``.

    Branchless construction from "Building an Orthonormal Basis, Revisited"
    (Duff et al., 2017). Deterministic for a given input.
    """
    x, y, z = (float(c) for c in direction)
    sign = 1.0 if z >= 0.0 else -1.0
    a = -1.0 / (sign + z)
    b = x * y * a
    return np.array([1.0 + sign * x * x * a, sign * b, -sign * x])
