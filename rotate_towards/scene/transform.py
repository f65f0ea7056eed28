# rotate_towards/scene/transform.py
"""Translation/rotation/scale value type used for local and world transforms."""

import numpy as np

from rotate_towards.core.constants import GLOBAL_UP, LOCAL_FORWARD, LOCAL_RIGHT, LOCAL_UP
from rotate_towards.utils.math_utils import any_orthonormal_vector, as_vector3, try_normalize
from rotate_towards.utils.quaternion import Quaternion, quaternion_identity


class Transform:
    """
    Position, rotation and scale of an object.

    As a local transform the values are relative to the parent; as a world
    transform they are in the global frame. Scale is per-axis and does not
    influence orientation.
    """

    def __init__(self, translation=None, rotation=None, scale=None):
        self.translation = as_vector3(translation if translation is not None else (0.0, 0.0, 0.0), "translation")
        self.rotation = rotation if rotation is not None else quaternion_identity()
        self.scale = as_vector3(scale if scale is not None else (1.0, 1.0, 1.0), "scale")

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def from_translation(cls, x, y, z):
        return cls(translation=(x, y, z))

    def copy(self):
        return Transform(
            self.translation.copy(),
            Quaternion(self.rotation.w, self.rotation.x, self.rotation.y, self.rotation.z),
            self.scale.copy(),
        )

    # ----- Local axes in the frame the transform lives in -----
    def forward(self):
        return self.rotation.rotate_vector(LOCAL_FORWARD)

    def back(self):
        return -self.forward()

    def up(self):
        return self.rotation.rotate_vector(LOCAL_UP)

    def right(self):
        return self.rotation.rotate_vector(LOCAL_RIGHT)

    def transform_point(self, point):
        """Map a point from this transform's local space into its parent space."""
        return self.translation + self.rotation.rotate_vector(self.scale * as_vector3(point, "point"))

    def mul_transform(self, child):
        """
        Compose ``self`` (parent) with ``child`` (local to self).

        Returns:
            Transform: the child expressed in the frame ``self`` lives in
        """
        return Transform(
            translation=self.transform_point(child.translation),
            rotation=(self.rotation * child.rotation).normalized(),
            scale=self.scale * child.scale,
        )

    def looking_at(self, target, up=GLOBAL_UP):
        """
        Return a copy rotated so that ``forward()`` points at ``target``.

        The basis is built from back = -(target - translation), right = up x back
        and a re-orthogonalized up = back x right. When the direction is zero
        forward falls back to -Z; when up is collinear with the direction a
        deterministic orthonormal vector of up is used as right.
        """
        return self.looking_to(as_vector3(target, "target") - self.translation, up)

    def looking_to(self, direction, up=GLOBAL_UP):
        forward = try_normalize(direction)
        back = -forward if forward is not None else -LOCAL_FORWARD
        up_dir = try_normalize(up)
        if up_dir is None:
            up_dir = GLOBAL_UP

        right = try_normalize(np.cross(up_dir, back))
        if right is None:
            right = any_orthonormal_vector(up_dir)
        up_ortho = np.cross(back, right)

        result = self.copy()
        result.rotation = Quaternion.from_basis(right, up_ortho, back)
        return result

    def is_finite(self):
        return bool(np.all(np.isfinite(self.translation)) and np.all(np.isfinite(self.scale))
                    and self.rotation.is_finite())

    def approx_eq(self, other, epsilon=1e-6):
        return (np.allclose(self.translation, other.translation, atol=epsilon)
                and np.allclose(self.scale, other.scale, atol=epsilon)
                and self.rotation.abs_diff_eq(other.rotation, epsilon))

    def __repr__(self):
        t = self.translation
        return f"Transform(translation=({t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}), rotation={self.rotation!r})"
