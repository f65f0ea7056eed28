import pytest

from rotate_towards.core.config import RotateTowardsConfig, get_default_config


def test_defaults():
    config = get_default_config()
    assert config.epsilon == 1e-6
    assert config.refresh_descendants is False
    assert config.dt == 0.1
    assert config.ticks == 1


def test_from_env(monkeypatch):
    monkeypatch.setenv("ROTATE_TOWARDS_EPSILON", "1e-4")
    monkeypatch.setenv("ROTATE_TOWARDS_REFRESH_DESCENDANTS", "yes")
    monkeypatch.setenv("ROTATE_TOWARDS_DT", "0.02")
    monkeypatch.setenv("ROTATE_TOWARDS_TICKS", "5")
    monkeypatch.delenv("ROTATE_TOWARDS_DEBUG", raising=False)

    config = RotateTowardsConfig.from_env()

    assert config.epsilon == pytest.approx(1e-4)
    assert config.refresh_descendants is True
    assert config.dt == pytest.approx(0.02)
    assert config.ticks == 5
    assert config.debug is False


def test_with_overrides_ignores_none_and_unknown(caplog):
    config = get_default_config().with_overrides({"ticks": 4, "dt": None, "bogus": 1})
    assert config.ticks == 4
    assert config.dt == 0.1
    assert "bogus" in caplog.text


def test_negative_epsilon_rejected():
    with pytest.raises(ValueError):
        RotateTowardsConfig(epsilon=-1.0)
