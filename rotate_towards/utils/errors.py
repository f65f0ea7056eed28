# rotate_towards/utils/errors.py
"""Error types and formatting utilities."""


class RotateTowardsError(Exception):
    """Base class for errors raised by the rotation pipeline."""
    pass


class TargetNotFound(RotateTowardsError):
    """A directive's target handle has no world transform.

    Non-fatal: the rotator is skipped for the current tick.
    """

    def __init__(self, handle, target):
        self.handle = handle
        self.target = target
        super().__init__(f"Entity used as target was not found: {target} (rotator {handle})")


class RefreshFailed(RotateTowardsError):
    """The world transform of a rotator could not be recomputed.

    Raised to the host since dependents would otherwise read a stale value.
    """

    def __init__(self, handle, reason):
        self.handle = handle
        self.reason = reason
        super().__init__(f"Failed to compute global transform for {handle}: {reason}")


class InvalidUpDirection(RotateTowardsError, ValueError):
    """A fixed up direction is zero-length or not finite."""
    pass


class SceneError(RotateTowardsError):
    """Invalid scene graph operation (unknown handle, parent cycle, bad reference)."""
    pass


def format_error(error_type, message, suggestion=None):
    """Format an error message for display.

    Args:
        error_type (str): Type of error (e.g., "TARGET_NOT_FOUND")
        message (str): Error message
        suggestion (str, optional): Helpful suggestion for the user

    Returns:
        str: Formatted error message
    """
    output = f"⚠ {error_type}: {message}"
    if suggestion:
        output += f"\n  → {suggestion}"
    return output


def error_dict(error_type, message, **kwargs):
    """Create an error dictionary for JSON output.

    Args:
        error_type (str): Error type
        message (str): Error message
        **kwargs: Additional fields to include

    Returns:
        dict: Error dictionary
    """
    result = {
        "ok": False,
        "error": error_type,
        "message": message
    }
    result.update(kwargs)
    return result
