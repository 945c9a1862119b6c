# SPDX-License-Identifier: MIT


class EntityType:
    USER = "user"
    TRACKER = "tracker"
    TRACKER_LOG = "tracker_log"
