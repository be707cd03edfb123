import logging

from colorlog import ColoredFormatter

from releaseinfo.config import cfg

TRACE_LEVEL = 15  # ... info - trace - debug
logging.addLevelName(TRACE_LEVEL, "TRACE")


class LoggerEx(logging.Logger):
    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE_LEVEL):
            kwargs.setdefault("stacklevel", 2)
            self._log(TRACE_LEVEL, msg, args, **kwargs)


# color formatter
formatter = ColoredFormatter(
    "%(log_color)s[%(asctime)s] [%(filename)s:%(lineno)d] [%(levelname)s] %(message)s",
    datefmt="%d/%m/%y %H:%M:%S",
    log_colors={
        "TRACE": "white",
        "DEBUG": "blue",
        "INFO": "white",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    },
)

handler = logging.StreamHandler()
handler.setFormatter(fmt=formatter)

logger = LoggerEx("releaseinfo")
logger.addHandler(handler)


def resolve_level(level_name: str) -> int:
    """Numeric level for a name such as "DEBUG" or "TRACE"; raises ValueError if unknown."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def apply_level(level_name: str) -> None:
    """Set the shared logger to a level name such as "DEBUG" or "TRACE"."""
    logger.setLevel(resolve_level(level_name))


apply_level(cfg.log_level)
