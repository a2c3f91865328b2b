"""
Logging module for the application.
Provides consistent logging across the package.
"""

import logging
import os

from aspectframe.config import CONFIG

_default_level = 'DEBUG' if CONFIG['debug']['verbose_logging'] else 'INFO'

# Configure logging
logging.basicConfig(
    level=os.environ.get('ASPECTFRAME_LOG_LEVEL', _default_level).upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def get_logger(name):
    """Get a logger with the specified name."""
    return logging.getLogger(name)
