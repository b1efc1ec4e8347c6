import logging
import os

# Third-party loggers that are chatty at INFO/DEBUG (web3 request manager, urllib3 pool)
NOISY_LOGGERS = ("web3", "urllib3", "PIL", "pyglet")


def configure_logging(default_level: int = logging.WARNING) -> int:
    """Configure the root logger for the pixelpond CLI.

    PIXELPOND_LOG_LEVEL, when set to a level name, overrides ``default_level``.
    Library loggers stay at WARNING unless the effective level is DEBUG.
    Returns the level applied.
    """
    level = default_level
    level_name = os.getenv("PIXELPOND_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return level
