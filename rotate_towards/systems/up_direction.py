# rotate_towards/systems/up_direction.py
"""Resolve an up-direction policy into a concrete world-space vector."""

from rotate_towards.core.constants import GLOBAL_UP
from rotate_towards.systems.directive import UpKind


def resolve_up_direction(updir, target_gt, parent_gt=None):
    """
    Args:
        updir (UpDirection): Policy from the directive
        target_gt (Transform): World transform of the target
        parent_gt (Transform, optional): World transform of the rotator's parent

    Returns:
        np.ndarray: Up vector in world space
    """
    if updir.kind is UpKind.TARGET:
        return target_gt.up()
    if updir.kind is UpKind.FIXED:
        return updir.vector()
    if parent_gt is not None:
        return parent_gt.up()
    # no parent: fall back to global up
    return GLOBAL_UP.copy()
