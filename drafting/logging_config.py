import logging
import sys
from typing import Union

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# datastore client libraries that log every RPC at INFO
NOISY_LOGGERS = ("google", "google.auth", "urllib3")


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the ``drafting`` logger.

    ``level`` is a ``logging`` constant or a name such as ``"DEBUG"`` taken
    from ``Settings.log_level``. Calling again only adjusts the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("drafting")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return logger
