"""
Utility functions for writers.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def unique_output_path(directory: Path, stem: str, suffix: str) -> Path:
    """
    Path for a new output file that does not overwrite an existing one.

    Repeated message ids get ``-1``, ``-2``, ... appended to the stem.
    """
    path = directory / f"{stem}{suffix}"
    counter = 0
    while path.exists():
        counter += 1
        path = directory / f"{stem}-{counter}{suffix}"
    if counter:
        logger.warning(f"Output file for {stem} already exists, writing {path.name}")
    return path
