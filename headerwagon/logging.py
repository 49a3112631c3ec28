#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

import logging
from typing import cast

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

TRACE = logging.DEBUG - 5

# verbose levels
# 0: warning
# 1: info
# 2: debug
# 3: trace
_verbose_level = 0

CONSOLE_STDOUT = Console(
    theme=Theme(
        {
            "logging.level.error": "red",
            "logging.level.warning": "yellow",
            "logging.level.info": "green",
            "logging.level.debug": "cyan",
            "logging.level.trace": "magenta",
        }
    ),
    highlight=False,
)
CONSOLE_STDERR = Console(stderr=True, highlight=False)


class CustomLogger(logging.Logger):
    def __init__(self, name, level=logging.NOTSET):
        super().__init__(name, level)

        logging.addLevelName(TRACE, "TRACE")

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)


logging.setLoggerClass(CustomLogger)


def init_logging(verbose: int, setup_python_logger: bool = True) -> None:
    global _verbose_level
    _verbose_level = verbose

    if verbose < 0:
        raise RuntimeError(f"negative verbose level not valid: {verbose}")

    match verbose:
        case 0:
            level = logging.WARNING
        case 1:
            level = logging.INFO
        case 2:
            level = logging.DEBUG
        case _:
            level = TRACE

    if setup_python_logger is True:
        logging.basicConfig(
            level=logging.WARNING,
            format="%(message)s",
            handlers=[
                RichHandler(
                    rich_tracebacks=True,
                    show_time=False,
                    console=CONSOLE_STDERR,
                )
            ],
        )

    import headerwagon

    logging.getLogger(headerwagon.__name__).setLevel(level)


def get_logger(name: str) -> CustomLogger:
    return cast(CustomLogger, logging.getLogger(name))


def is_info_enabled() -> bool:
    return _verbose_level >= 1


def is_debug_enabled() -> bool:
    return _verbose_level >= 2


def is_trace_enabled() -> bool:
    return _verbose_level >= 3


def print_exception(exc: Exception) -> None:
    """
    Prints the given exception, with a full traceback when running at debug level or above.
    """
    if is_debug_enabled():
        from rich.traceback import Traceback

        CONSOLE_STDERR.print(
            Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=is_trace_enabled(),
                width=None,
            )
        )
    else:
        print_error(str(exc), CONSOLE_STDERR)


def print_info(msg: str, console: Console = CONSOLE_STDOUT) -> None:
    if is_info_enabled():
        _print_message(msg, "green", "Info", console)


def print_error(msg: str, console: Console = CONSOLE_STDOUT) -> None:
    _print_message(msg, "red", "Error", console)


def _print_message(msg: str, color: str, level: str, console: Console) -> None:
    from rich.text import Text

    text = Text()
    text.append(f"{level}: ", style=color)
    text.append(msg)
    console.print(text)
