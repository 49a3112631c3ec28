#  *******************************************************************************
#  Copyright (c) 2026 Eclipse Foundation and others.
#  This program and the accompanying materials are made available
#  under the terms of the Eclipse Public License 2.0
#  which is available at http://www.eclipse.org/legal/epl-v20.html
#  SPDX-License-Identifier: EPL-2.0
#  *******************************************************************************

import logging

import pytest

from headerwagon.logging import TRACE, CustomLogger, get_logger, init_logging, is_debug_enabled, is_trace_enabled


@pytest.mark.parametrize(
    "verbose, level",
    [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (3, TRACE),
        (5, TRACE),
    ],
)
def test_init_logging_levels(verbose, level):
    init_logging(verbose, setup_python_logger=False)

    assert logging.getLogger("headerwagon").level == level
    assert is_debug_enabled() is (verbose >= 2)
    assert is_trace_enabled() is (verbose >= 3)


def test_negative_verbose_level():
    with pytest.raises(RuntimeError) as err:
        init_logging(-1, setup_python_logger=False)

    assert str(err.value) == "negative verbose level not valid: -1"


def test_trace(caplog):
    init_logging(3, setup_python_logger=False)
    logger = get_logger("headerwagon.tests.trace")

    assert isinstance(logger, CustomLogger)

    with caplog.at_level(TRACE, logger="headerwagon"):
        logger.trace("tracing %s", "value")

    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [("TRACE", "tracing value")]
    init_logging(0, setup_python_logger=False)
