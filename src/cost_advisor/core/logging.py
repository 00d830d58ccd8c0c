"""
logging.py - Configuración de logs

Los módulos del motor usan logging.getLogger(__name__) bajo el logger
raíz "cost_advisor"; setup_logger() solo instala el handler de Rich una vez.
"""

import logging
from typing import Optional, Union

from rich.logging import RichHandler

from .config import get_settings


def setup_logger(
    name: str = "cost_advisor",
    level: Optional[Union[int, str]] = None,
) -> logging.Logger:
    """Logger con formato Rich

    Args:
        name: nombre del logger
        level: nivel (int o "DEBUG"/"INFO"/...). None usa COST_ADVISOR_LOG_LEVEL
            (DEBUG si COST_ADVISOR_DEBUG=true).
    """
    if level is None:
        settings = get_settings()
        level = "DEBUG" if settings.debug_mode else settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
