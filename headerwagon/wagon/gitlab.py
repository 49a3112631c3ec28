#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

"""
A wagon that authenticates against GitLab package registries.

GitLab private registries expect the access token in a custom http header like

    Private-Token: <user-private-token>

rather than via basic authentication. For any repository url of the form gitlab://<domain>/... the wagon will

- use the username of the authentication info as header name, defaulting to 'Private-Token'
- use the password, or the passphrase if no password is set, as header value
- not pass the credentials on, so the wrapped wagon does not perform basic authentication
- connect to https://<domain>/... instead

Any other repository is passed through to the wrapped wagon unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from headerwagon.exception import AuthenticationException
from headerwagon.logging import get_logger

from . import Wagon

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from headerwagon.repository import AuthenticationInfo, ProxyInfoProvider, Repository

_logger = get_logger(__name__)

GITLAB_SCHEME = "gitlab:"
REPOSITORY_SCHEME = "https:"
DEFAULT_TOKEN_NAME = "Private-Token"


def correct_url(url: str, scheme: str = GITLAB_SCHEME, replacement: str = REPOSITORY_SCHEME) -> str:
    # plain substring replacement, an occurrence of the scheme later in the url is replaced as well
    return url.replace(scheme, replacement)


def token_header(
    auth_info: AuthenticationInfo | None, default_token_name: str = DEFAULT_TOKEN_NAME
) -> tuple[str, str]:
    """
    Derives the name and value of the http header carrying the access token.

    :param auth_info: the username is used as header name, the password or passphrase as its value
    :param default_token_name: header name to use if no username is available
    :raises AuthenticationException: if neither a password nor a passphrase is available
    """
    if auth_info is None:
        raise AuthenticationException("No password or passphrase defined for GitLab token")

    token_name = auth_info.username if auth_info.username else default_token_name
    token = auth_info.password if auth_info.password is not None else auth_info.passphrase

    if not token:
        raise AuthenticationException("No password or passphrase defined for GitLab token")

    return token_name, token


class GitLabWagon(Wagon):
    GITLAB_SCHEME = GITLAB_SCHEME
    REPOSITORY_SCHEME = REPOSITORY_SCHEME
    DEFAULT_TOKEN_NAME = DEFAULT_TOKEN_NAME

    def __init__(self, wagon: Wagon | None = None):
        if wagon is None:
            from .http import HttpWagon

            wagon = HttpWagon()

        self._wagon = wagon

    @property
    def wagon(self) -> Wagon:
        return self._wagon

    def connect(
        self,
        repository: Repository,
        auth_info: AuthenticationInfo | None = None,
        proxy_info_provider: ProxyInfoProvider | None = None,
    ) -> None:
        if not repository.url.startswith(self.GITLAB_SCHEME):
            self._wagon.connect(repository, auth_info, proxy_info_provider)
            return

        repository.url = correct_url(repository.url, self.GITLAB_SCHEME, self.REPOSITORY_SCHEME)
        _logger.debug("repository '%s' rewritten to %s", repository.id, repository.url)

        self._set_http_headers_for_authentication(auth_info)

        # the token is sent as header, the wrapped wagon must not try basic authentication
        self._wagon.connect(repository, None, proxy_info_provider)

    def _set_http_headers_for_authentication(self, auth_info: AuthenticationInfo | None) -> None:
        token_name, token = token_header(auth_info, self.DEFAULT_TOKEN_NAME)
        _logger.trace("using http header '%s' for authentication", token_name)
        self._wagon.set_http_headers({token_name: token})

    def disconnect(self) -> None:
        self._wagon.disconnect()

    def set_http_headers(self, headers: Mapping[str, str]) -> None:
        self._wagon.set_http_headers(headers)

    @property
    def http_headers(self) -> dict[str, str]:
        return self._wagon.http_headers

    @property
    def repository(self) -> Repository | None:
        return self._wagon.repository

    @property
    def is_connected(self) -> bool:
        return self._wagon.is_connected

    def get(self, resource_name: str, destination: Path) -> None:
        self._wagon.get(resource_name, destination)

    def get_if_newer(self, resource_name: str, destination: Path, timestamp: float) -> bool:
        return self._wagon.get_if_newer(resource_name, destination, timestamp)

    def put(self, source: Path, destination: str) -> None:
        self._wagon.put(source, destination)

    def resource_exists(self, resource_name: str) -> bool:
        return self._wagon.resource_exists(resource_name)

    def __repr__(self) -> str:
        return f"GitLabWagon(wagon={self._wagon!r})"
