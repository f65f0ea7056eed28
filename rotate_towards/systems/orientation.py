"""Pure look-at rotation math."""

import numpy as np

from rotate_towards.core.constants import DEGENERATE_DISTANCE, FLIP_ANGLE, GLOBAL_UP
from rotate_towards.utils.quaternion import Quaternion


def calculate_local_rotation_to_target(rotator_gt, target_gt, parent_gt, updir, flip_vertical):
    """
    Compute the rotator's local rotation so that its forward axis (-Z) faces
    the target, with ``updir`` as the up reference.

    Args:
        rotator_gt (Transform): World transform of the rotator
        target_gt (Transform): World transform of the target
        parent_gt (Transform or None): World transform of the rotator's parent
        updir (array-like): Up direction in world space
        flip_vertical (bool): Turn the result 180 degrees about ``updir``

    Returns:
        Quaternion: Normalized rotation relative to the parent (world space
        when there is no parent)

    Note:
        When rotator and target share a position there is no look direction;
        the rotator's current orientation is returned (in parent space) and no
        flip is applied, so repeated ticks leave it untouched.
    """
    offset = target_gt.translation - rotator_gt.translation
    if np.linalg.norm(offset) < DEGENERATE_DISTANCE:
        rotation = rotator_gt.rotation
    else:
        up = np.asarray(updir, dtype=float)
        rotation = rotator_gt.looking_at(target_gt.translation, up).rotation

        if flip_vertical:
            norm = np.linalg.norm(up)
            axis = up / norm if norm > 0 else GLOBAL_UP
            rotation = Quaternion.from_axis_angle(axis, FLIP_ANGLE) * rotation

    if parent_gt is not None:
        rotation = parent_gt.rotation.inverse() * rotation

    return rotation.normalized()
