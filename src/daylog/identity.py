# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

from daylog.repository.configuration import ConfigurationRepository


class IdentityProvider(Protocol):
    """Supplies the authenticated subject of the current caller, if any."""

    def get_subject(self) -> Optional[str]: ...


class StaticIdentityProvider:
    def __init__(self, subject: Optional[str]) -> None:
        self._subject = subject

    def get_subject(self) -> Optional[str]:
        return self._subject


class ConfigIdentityProvider:
    """The single local user configured under auth_subject."""

    def __init__(self, configuration_repository: ConfigurationRepository) -> None:
        self._configuration_repository = configuration_repository

    def get_subject(self) -> Optional[str]:
        subject = self._configuration_repository.get_config()["auth_subject"]
        if subject is None or subject == "":
            return None
        return subject
