"""Configuration constants for Image Tweener."""

import logging
import os
from typing import Optional

# Supported input file extensions
SUPPORTED_EXTENSIONS = ('.png',)

# CLI defaults
DEFAULT_OUTDIR = 'frames'
DEFAULT_N_FRAMES = 50

# Output naming
FRAME_NAME_TEMPLATE = 'frame_{index:09d}.png'
PNG_COMPRESS_LEVEL = 6

# Logging
LOG_LEVEL_ENV = 'TWEENER_LOG_LEVEL'
DEFAULT_LOG_LEVEL = 'WARNING'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging.

    Args:
        level: Level name. Falls back to the TWEENER_LOG_LEVEL environment
            variable, then to WARNING.
    """
    name = level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    log_level = getattr(logging, name.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%dT%H:%M:%S',
    )
