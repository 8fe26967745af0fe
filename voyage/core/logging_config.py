import logging

from voyage.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Configure root logging for the application process."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
