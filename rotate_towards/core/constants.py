# rotate_towards/core/constants.py
import numpy as np

# Right-handed, Y-up. Local forward is -Z.
GLOBAL_UP = np.array([0.0, 1.0, 0.0])
LOCAL_FORWARD = np.array([0.0, 0.0, -1.0])
LOCAL_UP = np.array([0.0, 1.0, 0.0])
LOCAL_RIGHT = np.array([1.0, 0.0, 0.0])

ROTATION_EPSILON = 1e-6          # max per-component quaternion change treated as "unchanged"
DEGENERATE_DISTANCE = 1e-10      # rotator/target closer than this have no look direction
FLIP_ANGLE = 180.0               # degrees about the up axis for flip_vertical

# Event names published on the event bus
EVENT_ROTATION_CHANGED = "rotation_changed"
EVENT_TARGET_NOT_FOUND = "rotate_target_not_found"
EVENT_REFRESH_FAILED = "rotate_refresh_failed"
EVENT_HISTORY = 256             # events kept by the simulator event bus
