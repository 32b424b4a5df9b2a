from __future__ import annotations

import logging
from typing import Generator

import pytest

import artiformat.utils.logger as logger_module
from artiformat.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Restore process-wide state the CLI mutates.

    The CLI group callback toggles ``NO_COLOR``, rebuilds the Rich console
    singletons and installs a handler on the ``artiformat`` logger.
    """
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("ARTIFORMAT_CONFIG", raising=False)
    reconfigure_console()

    yield

    root_logger = logging.getLogger(logger_module.ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False
    reconfigure_console()
