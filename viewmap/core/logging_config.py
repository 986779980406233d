import logging

from viewmap.settings import Settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "viewmap-console"


def configure_logging(app_settings: Settings) -> None:
    """Configure root logging with a single console handler."""

    root_logger = logging.getLogger()
    root_logger.setLevel(app_settings.log_level.upper())

    if any(handler.get_name() == HANDLER_NAME for handler in root_logger.handlers):
        return

    console_handler = logging.StreamHandler()
    console_handler.set_name(HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
