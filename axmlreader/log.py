import sys

from loguru import logger

LOG_FORMAT = "{line: >4}:{level}:\t{message}"


def setup_logger(level: str = "WARNING", sink=sys.stderr) -> int:
    """
    Enable the log messages of axmlreader.

    The package is silent by default. All configured handlers are removed
    and a single one writing to `sink` is added.

    :returns: the id of the new handler, see `loguru.logger.remove`
    """
    logger.remove()
    logger.enable("axmlreader")
    return logger.add(sink, level=level, format=LOG_FORMAT)
