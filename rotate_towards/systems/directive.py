# rotate_towards/systems/directive.py
"""Per-object configuration requesting continuous rotation toward a target."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from rotate_towards.utils.errors import InvalidUpDirection
from rotate_towards.utils.math_utils import is_valid_vector, try_normalize


class UpKind(Enum):
    """Where the rotator's up reference comes from."""
    TARGET = "target"   # the target's world up axis
    PARENT = "parent"   # the rotator's parent's world up axis, global Y without a parent
    FIXED = "fixed"     # a constant direction


@dataclass(frozen=True)
class UpDirection:
    """
    Up-direction policy for a rotator.

    Build with ``UpDirection.target()``, ``UpDirection.parent()`` or
    ``UpDirection.fixed(v)``. Fixed directions are validated and normalized
    here, so resolving them later never fails.
    """

    kind: UpKind
    direction: Optional[Tuple[float, float, float]] = None

    def __post_init__(self):
        if self.kind is UpKind.FIXED:
            if self.direction is None:
                raise InvalidUpDirection("Fixed up direction requires a vector")
            if len(self.direction) != 3 or not is_valid_vector(self.direction):
                raise InvalidUpDirection(f"Up direction must be 3 finite numbers (got {self.direction})")
            unit = try_normalize(self.direction)
            if unit is None:
                raise InvalidUpDirection(f"Up direction must be non-zero (got {self.direction})")
            object.__setattr__(self, "direction", tuple(float(c) for c in unit))
        elif self.direction is not None:
            raise InvalidUpDirection(f"{self.kind.value} up direction does not take a vector")

    @classmethod
    def target(cls) -> "UpDirection":
        return cls(UpKind.TARGET)

    @classmethod
    def parent(cls) -> "UpDirection":
        return cls(UpKind.PARENT)

    @classmethod
    def fixed(cls, direction) -> "UpDirection":
        return cls(UpKind.FIXED, tuple(float(c) for c in direction))

    @classmethod
    def parse(cls, value) -> "UpDirection":
        """
        Build from a config value: ``"target"``, ``"parent"`` or a 3-sequence.

        Raises:
            InvalidUpDirection: for any other value
        """
        if isinstance(value, UpDirection):
            return value
        if isinstance(value, str):
            try:
                kind = UpKind(value.lower())
            except ValueError:
                raise InvalidUpDirection(f"Unknown up direction: {value!r}") from None
            if kind is UpKind.FIXED:
                raise InvalidUpDirection("Fixed up direction requires a vector")
            return cls(kind)
        if isinstance(value, (list, tuple, np.ndarray)):
            return cls.fixed(value)
        raise InvalidUpDirection(f"Unknown up direction: {value!r}")

    def vector(self) -> np.ndarray:
        return np.array(self.direction, dtype=float)

    def to_config(self):
        if self.kind is UpKind.FIXED:
            return list(self.direction)
        return self.kind.value


@dataclass
class RotateTo:
    """
    While attached to an object, its forward axis is turned toward ``target``.

    Attributes:
        target: Handle of the object to face; it must have a world transform.
        updir: Up-direction policy.
        flip_vertical: Rotate the result 180 degrees about the up direction.
    """

    target: int
    updir: UpDirection = field(default_factory=UpDirection.parent)
    flip_vertical: bool = False
