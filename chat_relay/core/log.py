import logging
import sys

_LOGGER_NAME = "chat_relay"
_CONFIGURED_ATTR = "_chat_relay_logging"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_level(raw: str) -> int:
    return getattr(logging, raw.strip().upper(), logging.INFO)


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_parse_level(level))

    if not any(getattr(handler, _CONFIGURED_ATTR, False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        setattr(handler, _CONFIGURED_ATTR, True)
        logger.addHandler(handler)
    return logger
