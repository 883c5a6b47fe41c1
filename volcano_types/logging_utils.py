"""
Project-wide logging setup.

Usage in the pipeline scripts:

    from volcano_types.logging_utils import get_logger
    logger = get_logger(__name__)
    logger.info("Fitting %d resamples", n)

Library modules inside volcano_types use logging.getLogger(__name__) and
inherit whatever handlers the calling script has configured.
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Return a named logger with a consistent format.

    Handlers are attached once per name, so repeated calls (for example when a
    script is re-run inside the same interpreter session) don't double up lines.
    The package logger gets the same handler so messages from volcano_types.*
    modules show up next to the script's own output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level)

        package_logger = logging.getLogger("volcano_types")
        if not name.startswith("volcano_types") and not package_logger.handlers:
            package_logger.addHandler(handler)
            package_logger.setLevel(level)
    return logger
