"""
Общие фикстуры тестов.
"""

import logging

import pytest

from pathmap_scanner.logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Закрывает обработчики логгера приложения после каждого теста."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
