# SPDX-License-Identifier: MIT

import atexit

from daylog.repository.configuration import CONFIGURATION_REPO
from daylog.repository.tracker import TRACKER_REPO
from daylog.repository.tracker_log import TRACKER_LOG_REPO
from daylog.repository.user import USER_REPO


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()

    # Flush entity repositories
    USER_REPO.flush()
    TRACKER_REPO.flush()
    TRACKER_LOG_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
