import logging

from shiftcore.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level and format to the ``shiftcore`` logger tree."""
    settings = settings or get_settings()

    root = logging.getLogger("shiftcore")
    root.setLevel(settings.LOG_LEVEL)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        root.addHandler(handler)
