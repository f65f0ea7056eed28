import numpy as np
import pytest

from rotate_towards import (
    RefreshFailed,
    RotateTo,
    RotateTowardsConfig,
    SceneGraph,
    Simulator,
    Transform,
    UpDirection,
)
from rotate_towards.core.base_system import BaseSystem
from rotate_towards.utils.quaternion import Quaternion


class RecordingSystem(BaseSystem):
    """Captures the world forward of a handle when it runs."""

    name = "recorder"

    def __init__(self, handle):
        super().__init__()
        self.handle = handle
        self.seen = []

    def tick(self, dt, scene, event_bus):
        self.seen.append(scene.get_world_transform(self.handle).forward())


@pytest.fixture
def orbit():
    """A moon orbiting a planet, with an observer tracking the moon."""
    graph = SceneGraph()
    planet = graph.spawn(Transform(), name="planet")
    moon = graph.spawn(Transform(translation=(10.0, 0.0, 0.0)), parent=planet, name="moon")
    observer = graph.spawn(Transform(translation=(0.0, 0.0, 20.0)), name="observer")
    graph.insert_directive(observer, RotateTo(target=moon, updir=UpDirection.target()))
    return graph, planet, moon, observer


def test_tick_order_tracks_moving_target(orbit):
    graph, planet, moon, observer = orbit
    sim = Simulator(graph)

    for angle in (0.0, 45.0, 90.0):
        graph.set_local_rotation(planet, Quaternion.from_axis_angle([0, 1, 0], angle))
        sim.tick()

        moon_pos = graph.get_world_transform(moon).translation
        obs = graph.get_world_transform(observer)
        expected = (moon_pos - obs.translation) / np.linalg.norm(moon_pos - obs.translation)
        assert np.allclose(obs.forward(), expected, atol=1e-9)


def test_later_systems_see_refreshed_world(orbit):
    graph, _planet, moon, observer = orbit
    sim = Simulator(graph)
    recorder = sim.add_system(RecordingSystem(observer))

    sim.tick()

    moon_pos = graph.get_world_transform(moon).translation
    expected = (moon_pos - np.array([0.0, 0.0, 20.0])) / np.linalg.norm(moon_pos - np.array([0.0, 0.0, 20.0]))
    assert np.allclose(recorder.seen[0], expected, atol=1e-9)


def test_run_and_state(orbit):
    graph, *_ = orbit
    sim = Simulator(graph, RotateTowardsConfig(dt=0.5))
    reports = sim.run(3)

    assert len(reports) == 3
    assert reports[0].updated and not reports[1].updated
    state = sim.get_state()
    assert state["ticks"] == 3
    assert state["time"] == pytest.approx(1.5)
    assert state["rotators"]["observer"]["target"] == "moon"
    assert graph.changed_handles() == frozenset()


def test_refresh_failure_reaches_host(orbit):
    graph, planet, _moon, _observer = orbit
    child = graph.spawn(Transform(translation=(1.0, 0.0, 0.0)), parent=planet, name="child")
    graph.insert_directive(child, RotateTo(target=_observer))
    sim = Simulator(graph)
    sim.tick()

    graph.despawn(planet, recursive=False)
    graph.set_local_transform(_observer, Transform(translation=(5.0, 5.0, 5.0)))
    with pytest.raises(RefreshFailed):
        sim.tick()
    assert sim.tick_count == 2
    assert graph.changed_handles() == frozenset()


def test_missing_target_listed_in_state(orbit):
    graph, _planet, moon, observer = orbit
    graph.despawn(moon)
    sim = Simulator(graph)
    sim.tick()

    errors = sim.get_state()["errors"]
    assert len(errors) == 1
    assert errors[0]["type"] == "rotate_target_not_found"
    assert errors[0]["data"] == {"entity": observer, "target": moon}


def test_state_reports_up_policy(orbit):
    graph, *_ = orbit
    sim = Simulator(graph)
    sim.tick()

    observer = sim.get_state()["rotators"]["observer"]
    assert observer["updir"] == "target"
    assert observer["flip_vertical"] is False
