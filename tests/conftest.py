import logging

import pytest

from insumos.infra import logger as insumos_logger


@pytest.fixture
def logs_isolados():
    """Desfaz o estado global deixado por ``configurar_logs``."""
    enable = insumos_logger.ENABLE_LOGGING
    logs_dir = insumos_logger._logs_dir
    niveis = {name: logging.getLogger(name).level for name in insumos_logger.LOG_FILES}
    yield
    for name, nivel in niveis.items():
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(nivel)
    insumos_logger.ENABLE_LOGGING = enable
    insumos_logger._logs_dir = logs_dir
