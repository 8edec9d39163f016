import logging
from pathlib import Path

PACKAGE_LOGGER_PREFIX = "reggie"

# level for loggers created without an explicit one; see set_level()
_default_level = logging.INFO


def resolve_level(level) -> int:
    """Accept a logging constant or a level name such as "debug"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def set_level(level) -> int:
    """Apply ``level`` to every reggie logger, existing and future."""
    global _default_level
    _default_level = resolve_level(level)
    for name, obj in list(logging.root.manager.loggerDict.items()):
        if name.split(".")[0] == PACKAGE_LOGGER_PREFIX and isinstance(obj, logging.Logger):
            obj.setLevel(_default_level)
    return _default_level


def get_logger(name: str, level=None) -> logging.Logger:
    """Get a named logger with the service's standard formatting.

    Example:
        logger = get_logger(__name__)
        logger.info("published %s", message_id)

    Records go to stderr and to ``log/<name>.log``. When ``level`` is omitted
    the level last given to ``set_level`` applies (INFO until configured).

    Returns:
        logging.Logger: Configured logger instance.
    """
    if level is None:
        level = _default_level
    logger = logging.getLogger(name)

    # repeated calls (module reloads, tests) must not stack handlers
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logs_dir = Path("log")
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # read-only working dir: stream only
        logs_dir = None

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if logs_dir is not None:
        filehandler = logging.FileHandler(str(logs_dir / f"{name}.log"), encoding="utf-8")
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)

    logger.setLevel(level)
    logger.propagate = False
    logger.debug("logger '%s' initialized with level %s", name, logging.getLevelName(level))
    return logger
