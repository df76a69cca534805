import logging
import sys

from portal.core.config import settings


def configure_logging() -> None:
    """
    Configure logging for the whole service.
    Called once from the application lifespan at startup.
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


logger = logging.getLogger("portal")
