#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

import io
from dataclasses import dataclass, field

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


@dataclass
class FakeHttpResponse:
    status: int = 200
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class ServedRequest:
    method: str
    url: str
    headers: CaseInsensitiveDict
    body: bytes | None


class HttpAdapterMock(BaseAdapter):
    """
    A requests transport adapter serving predefined responses.

    Requests are matched by method and url, every expected response is served once.
    """

    def __init__(self) -> None:
        super().__init__()
        self.expected: dict[tuple[str, str], FakeHttpResponse] = {}
        self.served_requests: list[ServedRequest] = []
        self.error: Exception | None = None

    def expect(self, method: str, url: str, status: int = 200, body: bytes = b"", headers=None) -> None:
        self.expected[(method.upper(), url)] = FakeHttpResponse(status, body, headers or {})

    def fail_with(self, error: Exception) -> None:
        self.error = error

    @property
    def last_request(self) -> ServedRequest:
        return self.served_requests[-1]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        if self.error is not None:
            raise self.error

        body = request.body
        if hasattr(body, "read"):
            body = body.read()
        elif isinstance(body, str):
            body = body.encode("utf-8")

        self.served_requests.append(ServedRequest(request.method, request.url, request.headers.copy(), body))

        key = (request.method, request.url)
        if key not in self.expected:
            available = "\n".join(f"{m} {u}" for m, u in self.expected)
            pytest.fail(f"No matching response found for {request.method} {request.url}.\n{available}", pytrace=False)

        fake = self.expected.pop(key)

        response = requests.Response()
        response.status_code = fake.status
        response.reason = "OK" if fake.status < 400 else "Error"
        response.headers = CaseInsensitiveDict(fake.headers)
        response.raw = io.BytesIO(fake.body)
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass

    def verify_all_called(self) -> None:
        if warnings := [f"Expected request not made: {method} {url}" for method, url in self.expected]:
            pytest.fail("\n".join(warnings), pytrace=False)


@pytest.fixture()
def http_mock(monkeypatch) -> HttpAdapterMock:
    import headerwagon.wagon.http as http

    adapter = HttpAdapterMock()

    class _MockedSession(http._WagonSession):
        def __init__(self):
            super().__init__()
            self.trust_env = False
            self.mount("https://", adapter)
            self.mount("http://", adapter)

    monkeypatch.setattr(http, "_WagonSession", _MockedSession)
    return adapter
