# SPDX-License-Identifier: MIT

import os

from daylog import configuration
from daylog.log_config import configure_logging
from daylog.repository.configuration import CONFIGURATION_REPO
from daylog.service.tracker import TRACKER_SERVICE
from daylog.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_dirs()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(
        os.environ.get(configuration.LOG_LEVEL_ENV_VAR, config.get("log_level"))
    )
    view_state.set_show_header(config["show_header"])

    if config["auth_subject"]:
        TRACKER_SERVICE.ensure_user(config["user_name"], config["user_email"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        # Loading a missing config yields the defaults; flushing writes them
        CONFIGURATION_REPO.get_config()
        CONFIGURATION_REPO.flush()


def __ensure_data_dirs() -> None:
    for data_dir in (
        configuration.DATA_USERS_DIR,
        configuration.DATA_TRACKERS_DIR,
        configuration.DATA_TRACKER_LOGS_DIR,
    ):
        if not data_dir.is_dir():
            data_dir.mkdir(parents=True, exist_ok=True)
            (data_dir / ".gitkeep").touch()
