"""Logging setup shared by the API and CLI scripts."""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.

    Level defaults to settings.log_level; unknown level names fall back to INFO.
    """
    if level is None:
        from vies_proxy.core.config import settings

        level = settings.log_level
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger("vies_proxy").setLevel(log_level)
    # urllib3 logs every pooled connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))
