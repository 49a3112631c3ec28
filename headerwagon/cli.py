#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from headerwagon.logging import init_logging, print_exception, print_info

from . import __version__
from .repository import AuthenticationInfo, Repository
from .wagon import Wagon
from .wagon.gitlab import GitLabWagon
from .wagon.http import HttpWagon

_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"], "max_content_width": 120}

_AUTH_INFO: AuthenticationInfo | None = None


class StdCommand(click.Command):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.context_settings = _CONTEXT_SETTINGS
        self.params.insert(
            0,
            click.Option(
                ["-v", "--verbose"],
                count=True,
                help="enable verbose output (-vvv for more verbose output)",
            ),
        )

        self.params.insert(
            0,
            click.Option(
                ["--passphrase"],
                envvar="HEADERWAGON_PASSPHRASE",
                help="token used if no password is given",
            ),
        )

        self.params.insert(
            0,
            click.Option(
                ["-p", "--password"],
                envvar="HEADERWAGON_PASSWORD",
                help="password, or the token for gitlab: repositories",
            ),
        )

        self.params.insert(
            0,
            click.Option(
                ["-u", "--username"],
                envvar="HEADERWAGON_USERNAME",
                help="username, or the token header name for gitlab: repositories",
            ),
        )

    def invoke(self, ctx: click.Context) -> Any:
        global _AUTH_INFO

        verbose = ctx.params.pop("verbose")
        init_logging(verbose)

        username = ctx.params.pop("username")
        password = ctx.params.pop("password")
        passphrase = ctx.params.pop("passphrase")

        if username is None and password is None and passphrase is None:
            _AUTH_INFO = None
        else:
            _AUTH_INFO = AuthenticationInfo(username, password, passphrase)

        return super().invoke(ctx)


@click.group(context_settings=_CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="headerwagon")
def cli():
    """
    Transfers resources from and to package repositories, supporting header based token authentication.
    """


@cli.command(cls=StdCommand)
@click.argument("url")
@click.argument("resource")
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
def get(url: str, resource: str, destination: Path):
    """
    Downloads RESOURCE from the repository at URL to DESTINATION.
    """

    def _get(wagon: Wagon) -> int:
        wagon.get(resource, destination)
        print_info(f"downloaded '{resource}' to '{destination}'")
        return 0

    _execute(url, _get)


@cli.command(cls=StdCommand)
@click.argument("url")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("resource")
def put(url: str, source: Path, resource: str):
    """
    Uploads SOURCE as RESOURCE to the repository at URL.
    """

    def _put(wagon: Wagon) -> int:
        wagon.put(source, resource)
        print_info(f"uploaded '{source}' as '{resource}'")
        return 0

    _execute(url, _put)


@cli.command(cls=StdCommand)
@click.argument("url")
@click.argument("resource")
def exists(url: str, resource: str):
    """
    Checks whether RESOURCE exists in the repository at URL, exits with 1 if it does not.
    """

    def _exists(wagon: Wagon) -> int:
        if wagon.resource_exists(resource):
            click.echo(f"'{resource}' exists")
            return 0
        else:
            click.echo(f"'{resource}' does not exist")
            return 1

    _execute(url, _exists)


def _execute(url: str, action: Callable[[Wagon], int]) -> None:
    try:
        repository = Repository("cli", url)
        with GitLabWagon(HttpWagon()) as wagon:
            wagon.connect(repository, _AUTH_INFO)
            exit_code = action(wagon)

        sys.exit(exit_code)

    except Exception as exc:
        print_exception(exc)
        sys.exit(2)


if __name__ == "__main__":
    cli()
