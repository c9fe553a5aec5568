import sys
from loguru import logger


def setup_logging(level="INFO", show_time=True, log_file=None):
    """Configure loguru for the solver.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    log_file : str, optional
        Also write plain (uncolored) records to this file.
    """
    logger.remove()

    if show_time:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
        )
    else:
        log_format = "<level>{level: <8}</level> | <level>{message}</level>"

    logger.add(sys.stderr, format=log_format, level=level, colorize=True)
    if log_file:
        logger.add(log_file, format=log_format, level=level, colorize=False)

    return logger
