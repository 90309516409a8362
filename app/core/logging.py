import logging
import sys
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure console logging for the speed-test service.

    Serverless hosts capture stdout, so a single stream handler is all
    the service installs. Calling this twice replaces the handler rather
    than stacking a second one.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    # Per-request access lines and outbound request lines are noise here
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured for %s (%s)", settings.service_name, settings.environment
    )
