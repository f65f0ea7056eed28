"""
Quaternion mathematics for scene-graph rotations.

Rotations are stored as unit quaternions (w, x, y, z) and composed with the
Hamilton product. Vectors are numpy arrays of shape (3,).

References:
- https://en.wikipedia.org/wiki/Quaternion
- https://en.wikipedia.org/wiki/Rotation_matrix#Quaternion
"""

import math
import numpy as np
from typing import Tuple, Union

Vector = Union[np.ndarray, Tuple[float, float, float]]


class Quaternion:
    """
    Quaternion for representing 3D rotations.

    Unit quaternions (||q|| = 1) represent rotations without scaling.

    Attributes:
        w (float): Scalar component (real part)
        x (float): i component
        y (float): j component
        z (float): k component
    """

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.w = float(w)
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_axis_angle(cls, axis: Vector, angle: float) -> 'Quaternion':
        """
        Create quaternion from axis-angle representation.

        Args:
            axis: Rotation axis as (x, y, z) - will be normalized
            angle: Rotation angle in degrees

        Returns:
            Quaternion representing the rotation
        """
        axis = np.array(axis, dtype=float)
        magnitude = np.linalg.norm(axis)

        if magnitude < 1e-10:
            # Zero axis means no rotation
            return cls(1.0, 0.0, 0.0, 0.0)

        axis = axis / magnitude
        half_angle = math.radians(angle) * 0.5
        s = math.sin(half_angle)

        return cls(math.cos(half_angle), axis[0] * s, axis[1] * s, axis[2] * s)

    @classmethod
    def from_rotation_matrix(cls, matrix: np.ndarray) -> 'Quaternion':
        """
        Create quaternion from a 3x3 rotation matrix.

        The matrix columns are the images of the X, Y and Z basis vectors.
        Uses the largest-diagonal branch to stay numerically stable for
        rotations close to 180 degrees.

        Args:
            matrix: 3x3 orthonormal matrix

        Returns:
            Normalized quaternion representing the same rotation
        """
        m = np.asarray(matrix, dtype=float)
        m00, m01, m02 = m[0]
        m10, m11, m12 = m[1]
        m20, m21, m22 = m[2]

        if m22 <= 0.0:
            dif10 = m11 - m00
            omm22 = 1.0 - m22
            if dif10 <= 0.0:
                four_xsq = omm22 - dif10
                inv4x = 0.5 / math.sqrt(four_xsq)
                q = cls((m21 - m12) * inv4x, four_xsq * inv4x,
                        (m01 + m10) * inv4x, (m02 + m20) * inv4x)
            else:
                four_ysq = omm22 + dif10
                inv4y = 0.5 / math.sqrt(four_ysq)
                q = cls((m02 - m20) * inv4y, (m01 + m10) * inv4y,
                        four_ysq * inv4y, (m12 + m21) * inv4y)
        else:
            sum10 = m11 + m00
            opm22 = 1.0 + m22
            if sum10 <= 0.0:
                four_zsq = opm22 - sum10
                inv4z = 0.5 / math.sqrt(four_zsq)
                q = cls((m10 - m01) * inv4z, (m02 + m20) * inv4z,
                        (m12 + m21) * inv4z, four_zsq * inv4z)
            else:
                four_wsq = opm22 + sum10
                inv4w = 0.5 / math.sqrt(four_wsq)
                q = cls(four_wsq * inv4w, (m21 - m12) * inv4w,
                        (m02 - m20) * inv4w, (m10 - m01) * inv4w)

        return q.normalized()

    @classmethod
    def from_basis(cls, right: Vector, up: Vector, back: Vector) -> 'Quaternion':
        """Create quaternion from orthonormal basis columns (X, Y, Z)."""
        return cls.from_rotation_matrix(np.column_stack([right, up, back]))

    def to_axis_angle(self) -> Tuple[np.ndarray, float]:
        """
        Convert quaternion to axis-angle representation.

        Returns:
            Tuple of (axis, angle) where axis is normalized and angle is in degrees
        """
        q = self.normalized()

        if abs(q.w) >= 1.0:
            return (np.array([1.0, 0.0, 0.0]), 0.0)

        angle = 2 * math.acos(q.w)
        s = math.sqrt(1 - q.w * q.w)

        if s < 1e-10:
            axis = np.array([1.0, 0.0, 0.0])
        else:
            axis = np.array([q.x / s, q.y / s, q.z / s])

        return (axis, math.degrees(angle))

    def normalized(self) -> 'Quaternion':
        """Return a unit-length copy; degenerate quaternions become identity."""
        magnitude = self.magnitude()

        if magnitude < 1e-10:
            return Quaternion(1.0, 0.0, 0.0, 0.0)

        return Quaternion(
            self.w / magnitude,
            self.x / magnitude,
            self.y / magnitude,
            self.z / magnitude
        )

    def conjugate(self) -> 'Quaternion':
        """For unit quaternions the conjugate is the inverse rotation."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> 'Quaternion':
        """
        Return the inverse of this quaternion.

        For non-unit quaternions, inverse = conjugate / ||q||^2
        """
        norm_squared = self.dot(self)

        if norm_squared < 1e-10:
            return Quaternion(1.0, 0.0, 0.0, 0.0)

        return self.conjugate().scale(1.0 / norm_squared)

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """
        Compose rotations: q1 * q2 means "first apply q2, then q1".
        """
        w = self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z
        x = self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y
        y = self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x
        z = self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w

        return Quaternion(w, x, y, z)

    def __neg__(self) -> 'Quaternion':
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def scale(self, scalar: float) -> 'Quaternion':
        return Quaternion(
            self.w * scalar,
            self.x * scalar,
            self.y * scalar,
            self.z * scalar
        )

    def rotate_vector(self, vector: Vector) -> np.ndarray:
        """
        Rotate a 3D vector by this quaternion.

        Uses v' = v + 2w(u x v) + 2(u x (u x v)) with u the vector part,
        which equals q * v * q^(-1) for unit quaternions.

        Args:
            vector: Vector to rotate as (x, y, z)

        Returns:
            Rotated vector as numpy array
        """
        v = np.array(vector, dtype=float)
        u = np.array([self.x, self.y, self.z])
        t = 2.0 * np.cross(u, v)
        return v + self.w * t + np.cross(u, t)

    def dot(self, other: 'Quaternion') -> float:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def abs_diff_eq(self, other: 'Quaternion', epsilon: float) -> bool:
        """
        Component-wise comparison with absolute tolerance.

        q and -q describe the same rotation but compare unequal here, which
        matches how stored rotations are compared frame to frame.
        """
        return (abs(self.w - other.w) <= epsilon and
                abs(self.x - other.x) <= epsilon and
                abs(self.y - other.y) <= epsilon and
                abs(self.z - other.z) <= epsilon)

    def angle_to(self, other: 'Quaternion') -> float:
        """Smallest angle in degrees between the two rotations."""
        d = abs(self.normalized().dot(other.normalized()))
        return math.degrees(2.0 * math.acos(min(1.0, d)))

    def to_rotation_matrix(self) -> np.ndarray:
        """Convert quaternion to 3x3 rotation matrix."""
        q = self.normalized()

        w, x, y, z = q.w, q.x, q.y, q.z

        return np.array([
            [1 - 2*(y*y + z*z),     2*(x*y - w*z),     2*(x*z + w*y)],
            [    2*(x*y + w*z), 1 - 2*(x*x + z*z),     2*(y*z - w*x)],
            [    2*(x*z - w*y),     2*(y*z + w*x), 1 - 2*(x*x + y*y)]
        ])

    def to_list(self) -> list:
        return [self.w, self.x, self.y, self.z]

    def magnitude(self) -> float:
        return math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)

    def is_unit(self, epsilon: float = 1e-6) -> bool:
        return abs(self.magnitude() - 1.0) < epsilon

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.w, self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Quaternion(w={self.w:.4f}, x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        """
        Check equality with another quaternion (tolerance 1e-6).

        Note: q and -q represent the same rotation, but this checks component equality.
        """
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.abs_diff_eq(other, 1e-6)

    __hash__ = None


def quaternion_identity() -> Quaternion:
    """Create an identity quaternion (no rotation)."""
    return Quaternion(1.0, 0.0, 0.0, 0.0)
