import logging

from rotate_towards.core.config import RotateTowardsConfig
from rotate_towards.core.constants import EVENT_HISTORY, EVENT_REFRESH_FAILED, EVENT_TARGET_NOT_FOUND
from rotate_towards.core.event_bus import EventBus
from rotate_towards.scene.graph import SceneGraph
from rotate_towards.systems import RotateTowardsSystem

logger = logging.getLogger(__name__)


class Simulator:
    """
    Host loop driving a scene graph one tick at a time.

    Each tick runs the general propagation pass, then the rotation system
    (rotation update followed by world-transform refresh), then resets the
    scene's change tracking.
    """

    def __init__(self, scene=None, config=None, event_bus=None):
        """
        Args:
            scene (SceneGraph, optional): Scene to drive; an empty one if omitted
            config (RotateTowardsConfig, optional): Pipeline configuration
            event_bus (EventBus, optional): Bus receiving rotation events
        """
        self.config = config or RotateTowardsConfig()
        self.scene = scene if scene is not None else SceneGraph()
        self.event_bus = event_bus or EventBus(history=EVENT_HISTORY)
        self.systems = [RotateTowardsSystem.from_config(self.config)]
        self.dt = self.config.dt
        self.time = 0.0
        self.tick_count = 0

    @property
    def rotate_system(self):
        return self.systems[0]

    def add_system(self, system):
        """Append a system that runs after the rotation system each tick."""
        self.systems.append(system)
        return system

    def tick(self):
        """
        Run a single simulation tick.

        Returns:
            RotationReport: Report from the rotation system

        Raises:
            RefreshFailed: propagated from the rotation system
        """
        self.scene.propagate()

        report = None
        try:
            for system in self.systems:
                result = system.tick(self.dt, self.scene, self.event_bus)
                if report is None:
                    report = result
        finally:
            self.scene.clear_changes()
            self.time += self.dt
            self.tick_count += 1

        if report.updated or report.errors:
            logger.debug(f"Tick {self.tick_count}: {len(report.updated)} updated, "
                         f"{len(report.errors)} error(s)")
        return report

    def run(self, ticks):
        """
        Run ``ticks`` ticks.

        Returns:
            list: One RotationReport per tick
        """
        reports = []
        for _ in range(ticks):
            reports.append(self.tick())
        logger.info(f"Ran {ticks} tick(s), simulation time {self.time:.3f}s")
        return reports

    def get_state(self):
        """Per-rotator world pose snapshot."""
        rotators = {}
        for handle, world, _local, directive in self.scene.iter_rotators():
            rotators[self.scene.name_of(handle)] = {
                "entity": handle,
                "target": self.scene.name_of(directive.target),
                "updir": directive.updir.to_config(),
                "flip_vertical": directive.flip_vertical,
                "position": world.translation.tolist(),
                "forward": world.forward().tolist(),
                "up": world.up().tolist(),
                "rotation": world.rotation.to_list(),
            }
        return {
            "time": self.time,
            "ticks": self.tick_count,
            "rotators": rotators,
            "systems": [system.get_state() for system in self.systems],
            "errors": [
                event for event in self.event_bus.recent()
                if event["type"] in (EVENT_TARGET_NOT_FOUND, EVENT_REFRESH_FAILED)
            ],
        }
