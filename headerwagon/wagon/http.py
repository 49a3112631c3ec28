#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from email.utils import formatdate, parsedate_to_datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from headerwagon import __version__
from headerwagon.exception import (
    AuthorizationException,
    ConnectionException,
    ResourceDoesNotExistException,
    TransferFailedException,
)
from headerwagon.logging import get_logger

from . import Wagon

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from headerwagon.repository import AuthenticationInfo, ProxyInfoProvider, Repository

_logger = get_logger(__name__)

_SUPPORTED_PROTOCOLS = ("http", "https")
_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class _HeaderAuth(AuthBase):
    headers: Mapping[str, str]
    basic_auth: HTTPBasicAuth | None = None

    def __call__(self, r):
        self.update_headers(r.headers)
        if self.basic_auth is not None:
            return self.basic_auth(r)
        return r

    def update_headers(self, headers: MutableMapping[str, Any]) -> None:
        for name, value in self.headers.items():
            headers[name] = value


class _WagonSession(requests.Session):
    """
    A session that also strips the wagon specific headers when being redirected to another host.
    """

    def __init__(self) -> None:
        super().__init__()
        self.private_headers: tuple[str, ...] = ()

    def rebuild_auth(self, prepared_request, response):
        super().rebuild_auth(prepared_request, response)

        if self.should_strip_auth(response.request.url, prepared_request.url):
            for name in self.private_headers:
                prepared_request.headers.pop(name, None)


class HttpWagon(Wagon):
    """
    A wagon transferring resources via HTTP(S) using a requests session.
    """

    def __init__(self, timeout: float = 60, user_agent: str | None = None):
        self._timeout = timeout
        self._user_agent = user_agent if user_agent is not None else f"headerwagon/{__version__}"

        self._headers: dict[str, str] = {}
        self._repository: Repository | None = None
        self._basic_auth: HTTPBasicAuth | None = None
        self._session: _WagonSession | None = None

    def connect(
        self,
        repository: Repository,
        auth_info: AuthenticationInfo | None = None,
        proxy_info_provider: ProxyInfoProvider | None = None,
    ) -> None:
        if self._session is not None:
            raise ConnectionException("wagon is already connected", self._repository_url())

        if repository.protocol not in _SUPPORTED_PROTOCOLS:
            raise ConnectionException(f"unsupported protocol '{repository.protocol}'", repository.url)

        _logger.debug("connecting to repository '%s' at %s", repository.id, repository.url)

        if auth_info is not None and auth_info.username:
            _logger.trace("using basic authentication with user '%s'", auth_info.username)
            self._basic_auth = HTTPBasicAuth(auth_info.username, auth_info.password or "")
        else:
            self._basic_auth = None

        session = _WagonSession()
        session.headers["User-Agent"] = self._user_agent

        if proxy_info_provider is not None:
            proxy_info = proxy_info_provider(repository.protocol)
            if proxy_info is not None and proxy_info.is_proxied(repository.host):
                _logger.debug("using proxy %s:%d", proxy_info.host, proxy_info.port)
                session.proxies[repository.protocol] = proxy_info.url

        self._repository = repository
        self._session = session

    def disconnect(self) -> None:
        if self._session is not None:
            _logger.debug("disconnecting from %s", self._repository_url())
            self._session.close()

        self._session = None
        self._basic_auth = None

    def set_http_headers(self, headers: Mapping[str, str]) -> None:
        _logger.trace("setting http headers %s", list(headers.keys()))
        self._headers = dict(headers)

    @property
    def http_headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def repository(self) -> Repository | None:
        return self._repository

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def get(self, resource_name: str, destination: Path) -> None:
        url = self._build_url(resource_name)
        with self._request("GET", url, stream=True) as response:
            self._check_response(resource_name, url, response)
            self._write_to_file(response, Path(destination))

    def get_if_newer(self, resource_name: str, destination: Path, timestamp: float) -> bool:
        url = self._build_url(resource_name)
        headers = {"If-Modified-Since": formatdate(timestamp, usegmt=True)}

        with self._request("GET", url, headers=headers, stream=True) as response:
            if response.status_code == 304:
                _logger.debug("resource '%s' not modified", resource_name)
                return False

            self._check_response(resource_name, url, response)

            last_modified = response.headers.get("Last-Modified")
            if last_modified is not None:
                try:
                    if parsedate_to_datetime(last_modified).timestamp() <= timestamp:
                        _logger.debug("resource '%s' is not newer than local copy", resource_name)
                        return False
                except (TypeError, ValueError):
                    _logger.warning("could not parse Last-Modified header '%s' of %s", last_modified, url)

            self._write_to_file(response, Path(destination))
            return True

    def put(self, source: Path, destination: str) -> None:
        url = self._build_url(destination)
        with open(source, "rb") as file:
            response = self._request("PUT", url, data=file)

        with response:
            self._check_response(destination, url, response)

    def resource_exists(self, resource_name: str) -> bool:
        url = self._build_url(resource_name)
        with self._request("HEAD", url, allow_redirects=True) as response:
            if response.status_code == 404:
                return False

            self._check_response(resource_name, url, response)
            return True

    def _repository_url(self) -> str | None:
        return self._repository.url if self._repository is not None else None

    def _build_url(self, resource_name: str) -> str:
        if self._repository is None:
            raise ConnectionException("wagon is not connected")

        return f"{self._repository.url.rstrip('/')}/{resource_name.lstrip('/')}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        if self._session is None:
            raise ConnectionException("wagon is not connected", url)

        self._session.private_headers = tuple(self._headers)

        try:
            response = self._session.request(
                method,
                url,
                auth=_HeaderAuth(dict(self._headers), self._basic_auth),
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as ex:
            raise TransferFailedException(f"'{method}' request failed: {ex}", url) from ex

        _logger.trace("'%s' url = %s, result = (%d)", method, url, response.status_code)
        return response

    @staticmethod
    def _check_response(resource_name: str, url: str, response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return

        match status:
            case 401 | 403 | 407:
                raise AuthorizationException(f"access denied to '{resource_name}'", url, status)
            case 404:
                raise ResourceDoesNotExistException(resource_name, url)
            case _:
                raise TransferFailedException(
                    f"failed to transfer '{resource_name}': status={status}, reason={response.reason}", url
                )

    @staticmethod
    def _write_to_file(response: requests.Response, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=f".{destination.name}.")
        try:
            with os.fdopen(fd, "wb") as file:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    file.write(chunk)

            os.replace(tmp_name, destination)
        except requests.RequestException as ex:
            os.unlink(tmp_name)
            raise TransferFailedException(f"failed to download to '{destination}': {ex}", response.url) from ex
        except OSError:
            os.unlink(tmp_name)
            raise

    def __repr__(self) -> str:
        return f"HttpWagon(repository={self._repository_url()})"
