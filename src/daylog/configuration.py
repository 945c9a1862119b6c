# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daylog"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

LOG_LEVEL_ENV_VAR = "DAYLOG_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_AUTH_SUBJECT = "local"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_USERS_DIR: Path = DATA_PATH / "users"
DATA_TRACKERS_DIR: Path = DATA_PATH / "trackers"
DATA_TRACKER_LOGS_DIR: Path = DATA_PATH / "tracker_logs"


class Configuration(TypedDict):
    data_path: Optional[str]
    default_timezone: Optional[str]  # None uses the system zone
    auth_subject: Optional[str]
    user_name: str
    user_email: Optional[str]
    show_header: bool
    log_level: NotRequired[str]


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_USERS_DIR, DATA_TRACKERS_DIR, DATA_TRACKER_LOGS_DIR

    DATA_PATH = data_path
    DATA_USERS_DIR = DATA_PATH / "users"
    DATA_TRACKERS_DIR = DATA_PATH / "trackers"
    DATA_TRACKER_LOGS_DIR = DATA_PATH / "tracker_logs"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
