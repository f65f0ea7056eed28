import json
import logging
import os

import numpy as np
import pytest

from rotate_towards.cli import main

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TURRET_SCENE = os.path.join(ROOT_DIR, "scenes", "turret.yaml")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("ROTATE_TOWARDS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_text_output(capsys):
    assert main([TURRET_SCENE, "--no-log-file"]) == 0
    out = capsys.readouterr().out
    assert "after 3 tick(s)" in out
    assert "turret -> drone" in out
    assert "sign -> camera" in out


def test_json_output(capsys):
    assert main([TURRET_SCENE, "--json", "--ticks", "2", "--no-log-file"]) == 0
    state = json.loads(capsys.readouterr().out)

    assert state["ticks"] == 2
    turret = state["rotators"]["turret"]
    forward = np.array(turret["forward"])
    to_drone = np.array([4.0, 6.0, -10.0]) - np.array(turret["position"])
    assert np.allclose(forward, to_drone / np.linalg.norm(to_drone), atol=1e-9)

    # flipped: the sign's front faces away from the camera
    sign = state["rotators"]["sign"]
    to_camera = np.array([0.0, 2.0, 8.0]) - np.array(sign["position"])
    assert np.dot(sign["forward"], to_camera) < 0


def test_log_file_written(tmp_path, capsys):
    log_path = tmp_path / "logs" / "run.log"
    assert main([TURRET_SCENE, "--log-file", str(log_path)]) == 0
    assert log_path.exists()


def test_missing_scene(capsys):
    assert main(["does-not-exist.yaml", "--no-log-file"]) == 1
    assert "SCENE_LOAD_FAILED" in capsys.readouterr().err


def test_refresh_failure_exit_code(tmp_path, capsys, monkeypatch):
    from rotate_towards.systems.rotate_towards_system import RotateTowardsSystem
    from rotate_towards.utils.errors import RefreshFailed

    def failing_refresh(self, scene, event_bus=None, report=None):
        raise RefreshFailed(0, "ancestor 7 not found")

    monkeypatch.setattr(RotateTowardsSystem, "update_global_transforms", failing_refresh)
    assert main([TURRET_SCENE, "--json", "--no-log-file"]) == 1
    error = json.loads(capsys.readouterr().out)
    assert error["error"] == "REFRESH_FAILED"
    assert error["entity"] == 0
