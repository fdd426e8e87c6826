import logging

import pytest

from toilet_finder.common.http import OSM_RATE_LIMITER
from toilet_finder.common.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_shared_rate_limiter():
    OSM_RATE_LIMITER.buckets.clear()
    yield
    OSM_RATE_LIMITER.buckets.clear()


@pytest.fixture(autouse=True)
def reset_toilet_finder_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
