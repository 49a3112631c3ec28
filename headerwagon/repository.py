#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

from __future__ import annotations

import dataclasses
import fnmatch
from collections.abc import Callable
from urllib.parse import quote, urlparse


@dataclasses.dataclass
class Repository:
    """
    Describes a remote repository a wagon connects to.

    The url is mutable, wagons are allowed to rewrite it while connecting.
    """

    id: str
    url: str
    name: str | None = None

    @property
    def protocol(self) -> str:
        protocol, sep, _ = self.url.partition(":")
        return protocol if sep else ""

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or ""

    @property
    def port(self) -> int | None:
        return urlparse(self.url).port

    @property
    def basedir(self) -> str:
        path = urlparse(self.url).path
        return path if path else "/"

    def __str__(self) -> str:
        return f"Repository(id={self.id}, url={self.url})"


@dataclasses.dataclass(frozen=True)
class AuthenticationInfo:
    """
    Credentials used to authenticate against a repository.
    """

    username: str | None = None
    password: str | None = dataclasses.field(default=None, repr=False)
    passphrase: str | None = dataclasses.field(default=None, repr=False)

    def __str__(self) -> str:
        return f"AuthenticationInfo(username={self.username})"


@dataclasses.dataclass(frozen=True)
class ProxyInfo:
    host: str
    port: int
    type: str = "http"
    username: str | None = None
    password: str | None = dataclasses.field(default=None, repr=False)
    non_proxy_hosts: str | None = None

    def is_proxied(self, host: str) -> bool:
        """
        Returns whether requests to the given host should go through this proxy.

        non_proxy_hosts holds '|' separated host patterns, e.g. 'localhost|*.example.com'.
        """
        if self.non_proxy_hosts is None:
            return True

        for pattern in self.non_proxy_hosts.split("|"):
            pattern = pattern.strip()
            if len(pattern) > 0 and fnmatch.fnmatch(host.lower(), pattern.lower()):
                return False

        return True

    @property
    def url(self) -> str:
        if self.username is not None:
            credentials = quote(self.username, safe="")
            if self.password is not None:
                credentials += ":" + quote(self.password, safe="")

            return f"{self.type}://{credentials}@{self.host}:{self.port}"
        else:
            return f"{self.type}://{self.host}:{self.port}"


# maps a protocol, e.g. 'https', to the proxy that should be used for it
ProxyInfoProvider = Callable[[str], ProxyInfo | None]
