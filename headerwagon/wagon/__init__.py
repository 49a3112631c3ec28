#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from headerwagon.repository import AuthenticationInfo, ProxyInfoProvider, Repository


class Wagon(ABC):
    """
    A transport that moves resources between a remote repository and the local file system.
    """

    @abstractmethod
    def connect(
        self,
        repository: Repository,
        auth_info: AuthenticationInfo | None = None,
        proxy_info_provider: ProxyInfoProvider | None = None,
    ) -> None: ...

    @abstractmethod
    def disconnect(self) -> None: ...

    @abstractmethod
    def set_http_headers(self, headers: Mapping[str, str]) -> None:
        """
        Replaces the additional headers sent with every request.
        """

    @property
    @abstractmethod
    def http_headers(self) -> dict[str, str]: ...

    @property
    @abstractmethod
    def repository(self) -> Repository | None: ...

    @property
    @abstractmethod
    def is_connected(self) -> bool: ...

    @abstractmethod
    def get(self, resource_name: str, destination: Path) -> None: ...

    @abstractmethod
    def get_if_newer(self, resource_name: str, destination: Path, timestamp: float) -> bool:
        """
        Downloads the resource only if it was modified after the given timestamp (seconds since the epoch).

        :return: True if the resource has been downloaded, False otherwise
        """

    @abstractmethod
    def put(self, source: Path, destination: str) -> None: ...

    @abstractmethod
    def resource_exists(self, resource_name: str) -> bool: ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.is_connected:
            self.disconnect()
