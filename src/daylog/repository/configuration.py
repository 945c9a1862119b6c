# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daylog import configuration
from daylog.configuration import Configuration


def get_default_config() -> Configuration:
    return {
        "data_path": None,
        "default_timezone": None,
        "auth_subject": configuration.DEFAULT_AUTH_SUBJECT,
        "user_name": "me",
        "user_email": None,
        "show_header": True,
        "log_level": configuration.DEFAULT_LOG_LEVEL,
    }


class ConfigurationRepository:
    """The YAML settings file, read on first use and written by flush()."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = config_path
        self._config: Optional[Configuration] = None
        self.is_dirty = False

    @property
    def config_path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return configuration.APP_CONFIG_PATH

    @property
    def config(self) -> Configuration:
        if self._config is None:
            self._config, self.is_dirty = self.__read()
        return self._config

    def __read(self) -> tuple[Configuration, bool]:
        """
        Return the stored settings and whether they differ from the file.

        A missing file yields the defaults. Keys added since the file was
        written are filled in from the defaults.
        """
        defaults = get_default_config()
        if not self.config_path.is_file():
            return defaults, True

        stored: dict[str, Any] = load(self.config_path.read_text(), Loader=Loader) or {}
        missing_keys = defaults.keys() - stored.keys()
        return cast(Configuration, {**defaults, **stored}), bool(missing_keys)

    def flush(self) -> bool:
        if self._config is None or not self.is_dirty:
            return False

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(dump(dict(self._config), Dumper=Dumper))
        self.is_dirty = False
        return True

    def get_config(self) -> Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        default_timezone: Optional[str] = None,
        remove_default_timezone: bool = False,
        auth_subject: Optional[str] = None,
        user_name: Optional[str] = None,
        user_email: Optional[str] = None,
        remove_user_email: bool = False,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        """Set every given value; a remove flag clears its key even when a value is given."""
        changes: dict[str, Any] = {
            "data_path": data_path,
            "default_timezone": default_timezone,
            "auth_subject": auth_subject,
            "user_name": user_name,
            "user_email": user_email,
            "show_header": show_header,
            "log_level": log_level.upper() if log_level is not None else None,
        }
        removals = {
            "data_path": remove_data_path,
            "default_timezone": remove_default_timezone,
            "user_email": remove_user_email,
        }

        config = cast(dict[str, Any], self.config)
        config.update({key: value for key, value in changes.items() if value is not None})
        for key, remove in removals.items():
            if remove:
                config[key] = None
        self.is_dirty = True


CONFIGURATION_REPO = ConfigurationRepository()
