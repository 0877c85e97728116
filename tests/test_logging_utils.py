from __future__ import annotations

import logging

import pytest

from pic2speak_admin.logging_utils import configure_logging


@pytest.fixture()
def package_logger():
    logger = logging.getLogger("pic2speak_admin")
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved


def test_repeated_configuration_adds_one_handler(package_logger):
    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG
