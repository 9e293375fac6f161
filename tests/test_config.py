import pytest

from hosts_writer.config import Config


def test_from_env_defaults(monkeypatch):
    for name in ("DOCKER_HOST", "HOSTS_FILE", "DEBUG", "LOG_LEVEL", "TRACKED_NETWORK",
                 "NETWORK_DRIVER", "LOCK_ATTEMPTS", "LOCK_RETRY_DELAY"):
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config == Config()
    assert config.lock_attempts == 5
    assert config.lock_retry_delay == 1.0
    assert config.debug is False


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("DOCKER_HOST", "tcp://127.0.0.1:2375")
    monkeypatch.setenv("HOSTS_FILE", "/tmp/hosts")
    monkeypatch.setenv("TRACKED_NETWORK", "backend")
    monkeypatch.delenv("NETWORK_DRIVER", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.delenv("DEBUG", raising=False)

    config = Config.from_env()

    assert config.docker_host == "tcp://127.0.0.1:2375"
    assert config.hosts_file_path == "/tmp/hosts"
    assert config.tracked_network == "backend"
    assert config.network_driver == "bridge"
    assert config.log_level == "WARNING"


def test_debug_presence_enables_verbose(monkeypatch):
    monkeypatch.setenv("DEBUG", "")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    config = Config.from_env()

    assert config.debug is True
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("overrides", [
    {"log_level": "LOUD"},
    {"lock_attempts": 0},
    {"lock_retry_delay": -1},
    {"tracked_network": ""},
    {"network_driver": ""},
])
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        Config(**overrides).validate()


def test_defaults_are_posix_paths():
    config = Config()

    assert config.hosts_file_path == "/etc/hosts"
    assert config.tracked_network == "bridge"
    assert config.network_driver == "bridge"


def test_custom_network_keeps_bridge_driver(monkeypatch):
    monkeypatch.setenv("TRACKED_NETWORK", "mynet")
    monkeypatch.delenv("NETWORK_DRIVER", raising=False)

    config = Config.from_env()

    assert (config.tracked_network, config.network_driver) == ("mynet", "bridge")
