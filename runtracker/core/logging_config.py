import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Attach one console handler to the `runtracker` logger tree."""
    logger = logging.getLogger("runtracker")
    logger.setLevel(level.upper())

    handler_name = "runtracker:console"
    if any(h.get_name() == handler_name for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    handler.set_name(handler_name)
    logger.addHandler(handler)
