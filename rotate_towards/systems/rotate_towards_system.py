# rotate_towards/systems/rotate_towards_system.py
"""System that keeps rotators facing their targets every tick."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from rotate_towards.core.base_system import BaseSystem
from rotate_towards.core.constants import (
    EVENT_REFRESH_FAILED,
    EVENT_ROTATION_CHANGED,
    EVENT_TARGET_NOT_FOUND,
    ROTATION_EPSILON,
)
from rotate_towards.systems.orientation import calculate_local_rotation_to_target
from rotate_towards.systems.up_direction import resolve_up_direction
from rotate_towards.utils.errors import RefreshFailed, TargetNotFound

logger = logging.getLogger(__name__)


@dataclass
class RotationReport:
    """Outcome of one tick of the rotation system."""

    updated: List[int] = field(default_factory=list)
    unchanged: List[int] = field(default_factory=list)
    missing_targets: Dict[int, int] = field(default_factory=dict)   # rotator -> target handle
    refreshed: List[int] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    def to_dict(self):
        return {
            "updated": list(self.updated),
            "unchanged": list(self.unchanged),
            "missing_targets": dict(self.missing_targets),
            "refreshed": list(self.refreshed),
            "errors": [str(e) for e in self.errors],
        }


class RotateTowardsSystem(BaseSystem):
    """
    Rotates every object carrying a ``RotateTo`` directive toward its target.

    Must run after the scene's general propagation pass: it reads the world
    transforms of targets and parents from that pass, writes local rotations,
    then refreshes the world transforms of the rotators it changed.
    """

    name = "rotate_towards"

    def __init__(self, config=None):
        super().__init__(config)
        config = config or {}
        self.epsilon = float(config.get("epsilon", ROTATION_EPSILON))
        self.refresh_descendants = bool(config.get("refresh_descendants", False))
        self.last_report = RotationReport()

    @classmethod
    def from_config(cls, config):
        """Build from a ``RotateTowardsConfig``."""
        return cls({"epsilon": config.epsilon, "refresh_descendants": config.refresh_descendants})

    def tick(self, dt, scene, event_bus):
        """
        Run the rotation update followed by the world-transform refresh.

        Returns:
            RotationReport

        Raises:
            RefreshFailed: if a changed rotator's world transform cannot be recomputed
        """
        report = RotationReport()
        self.last_report = report
        if not self.enabled:
            return report

        self.rotate_towards(scene, event_bus, report)
        self.update_global_transforms(scene, event_bus, report)
        return report

    def rotate_towards(self, scene, event_bus=None, report=None):
        """
        Compute and write the new local rotation of every rotator.

        Rotators whose target has no world transform are reported and skipped;
        their local rotation keeps its previous value.
        """
        report = report if report is not None else RotationReport()

        for handle, rotator_gt, rotator_t, directive in scene.iter_rotators():
            target_gt = scene.get_world_transform(directive.target)
            if target_gt is None:
                self._report_missing_target(handle, directive.target, event_bus, report)
                continue

            parent = scene.get_parent(handle)
            parent_gt = scene.get_world_transform(parent) if parent is not None else None

            updir = resolve_up_direction(directive.updir, target_gt, parent_gt)
            rotation = calculate_local_rotation_to_target(
                rotator_gt,
                target_gt,
                parent_gt,
                updir,
                directive.flip_vertical,
            )

            if rotation.abs_diff_eq(rotator_t.rotation, self.epsilon):
                report.unchanged.append(handle)
                continue

            scene.set_local_rotation(handle, rotation)
            report.updated.append(handle)
            if event_bus is not None:
                event_bus.publish(EVENT_ROTATION_CHANGED, {"entity": handle, "rotation": rotation.to_list()}, self.name)

        return report

    def update_global_transforms(self, scene, event_bus=None, report=None):
        """
        Recompute the cached world transform of rotators changed this tick.

        Parents are refreshed before their descendants. Every refresh is
        attempted; the first failure is raised afterwards.
        """
        report = report if report is not None else RotationReport()

        changed = scene.changed_handles()
        handles = [h for h in changed if scene.get_directive(h) is not None]
        if self.refresh_descendants:
            pending = set(handles)
            for handle in handles:
                pending.update(scene.descendants(handle))
            handles = list(pending)
        handles.sort(key=lambda h: (scene.depth(h), h))

        failures = []
        for handle in handles:
            try:
                scene.recompute_world_transform(handle)
            except RefreshFailed as e:
                logger.error(str(e))
                failures.append(e)
                report.errors.append(e)
                if event_bus is not None:
                    event_bus.publish(EVENT_REFRESH_FAILED, {"entity": handle, "reason": e.reason}, self.name)
                continue
            report.refreshed.append(handle)

        if failures:
            raise failures[0]
        return report

    def _report_missing_target(self, handle, target, event_bus, report):
        error = TargetNotFound(handle, target)
        logger.error(str(error))
        report.missing_targets[handle] = target
        report.errors.append(error)
        if event_bus is not None:
            event_bus.publish(EVENT_TARGET_NOT_FOUND, {"entity": handle, "target": target}, self.name)

    def get_state(self):
        state = super().get_state()
        state.update({
            "epsilon": self.epsilon,
            "refresh_descendants": self.refresh_descendants,
            "last_report": self.last_report.to_dict(),
        })
        return state
