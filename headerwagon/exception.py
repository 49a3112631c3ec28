#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************


class WagonException(Exception):
    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.__message = message
        self.__url = url

    @property
    def message(self) -> str:
        return self.__message

    @property
    def url(self) -> str | None:
        return self.__url

    def __str__(self):
        if self.url is None:
            return self.message
        else:
            return f"{self.message} (url='{self.url}')"


class ConnectionException(WagonException):
    pass


class AuthenticationException(WagonException):
    pass


class TransferFailedException(WagonException):
    pass


class AuthorizationException(WagonException):
    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message, url)
        self.__status = status

    @property
    def status(self) -> int | None:
        return self.__status

    def __str__(self):
        return f"Not authorized: {super().__str__()}, status={self.status}"


class ResourceDoesNotExistException(WagonException):
    def __init__(self, resource_name: str, url: str | None = None):
        super().__init__(f"resource '{resource_name}' does not exist", url)
        self.__resource_name = resource_name

    @property
    def resource_name(self) -> str:
        return self.__resource_name
