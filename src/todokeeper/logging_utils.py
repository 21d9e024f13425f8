import logging


def _logger(log_level: int) -> logging.Logger:
    logging.basicConfig(level=log_level, format="%(asctime)s - %(filename)s - %(lineno)d - %(levelname)s - %(message)s")
    return logging.getLogger()


def parse_level(level_name: str) -> int:
    """Map a level name such as `debug` or `WARNING` to its logging constant"""
    try:
        return logging.getLevelNamesMapping()[level_name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level_name}") from None


def set_level(log_level: int, *, logger: logging.Logger) -> None:
    """Set level of the logger"""
    logger.setLevel(log_level)

    # Enable our own retry_utils logger which reports failed write attempts
    logging.getLogger("todokeeper.retry_utils").setLevel(log_level)

    # Tenacity logs through its own logger when retrying
    logging.getLogger("tenacity").setLevel(log_level)


# Quiet by default so log lines do not interleave with the interactive prompt.
logger = _logger(log_level=logging.WARNING)
