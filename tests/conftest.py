import pytest

from daylog import configuration
from daylog.identity import StaticIdentityProvider
from daylog.model.user import User
from daylog.repository.configuration import CONFIGURATION_REPO, ConfigurationRepository
from daylog.repository.tracker import TRACKER_REPO, TrackerRepository
from daylog.repository.tracker_log import TRACKER_LOG_REPO, TrackerLogRepository
from daylog.repository.user import USER_REPO, UserRepository
from daylog.service.tracker import TRACKER_SERVICE, TrackerService
from daylog.view import state as view_state


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def user_repo(data_dir):
    return UserRepository(data_dir / "users")


@pytest.fixture
def tracker_repo(data_dir):
    return TrackerRepository(data_dir / "trackers")


@pytest.fixture
def tracker_log_repo(data_dir):
    return TrackerLogRepository(data_dir / "tracker_logs")


@pytest.fixture
def config_repo(tmp_path):
    return ConfigurationRepository(tmp_path / "config" / "config.yaml")


@pytest.fixture
def identity():
    return StaticIdentityProvider("auth|alice")


@pytest.fixture
def service(identity, user_repo, tracker_repo, tracker_log_repo):
    return TrackerService(identity, user_repo, tracker_repo, tracker_log_repo)


@pytest.fixture
def alice(service) -> User:
    return service.ensure_user("Alice", "alice@example.com")


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the application singletons at a temporary config and data directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(configuration, "DATA_USERS_DIR", tmp_path / "data" / "users")
    monkeypatch.setattr(
        configuration, "DATA_TRACKERS_DIR", tmp_path / "data" / "trackers"
    )
    monkeypatch.setattr(
        configuration, "DATA_TRACKER_LOGS_DIR", tmp_path / "data" / "tracker_logs"
    )

    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    for repository in (USER_REPO, TRACKER_REPO, TRACKER_LOG_REPO):
        monkeypatch.setattr(repository, "_entities", None)
        monkeypatch.setattr(repository, "_dirty_ids", set())
        monkeypatch.setattr(repository, "_deleted_files", set())
        monkeypatch.setattr(repository, "is_dirty", False)
    monkeypatch.setattr(TRACKER_LOG_REPO, "_day_index", None)

    CONFIGURATION_REPO.update_config(default_timezone="UTC", show_header=False)
    CONFIGURATION_REPO.flush()
    view_state.set_show_header(False)
    TRACKER_SERVICE.ensure_user("Tester", None)

    return tmp_path
