"""
Logging setup for command-line entry points.

Library modules only create loggers; handlers are installed here, once,
by whoever owns the process.
"""

import logging
import os
from typing import Optional, Union

ENV_VAR = 'ELKTRACER_LOG'
LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def initialize(level: Optional[Union[int, str]] = None) -> None:
    """Configure root logging.

    Args:
        level: Log level name or number; defaults to $ELKTRACER_LOG, then INFO
    """
    if level is None:
        level = os.environ.get(ENV_VAR, 'INFO')
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging initialized")
