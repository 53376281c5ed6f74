"""Logging setup shared by the API process and scripts."""
import logging
import sys

from app.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure root logging once and return the application logger."""
    resolved = (level or settings.log_level or "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)
    # SQLAlchemy echoes through its own logger when SQL_DEBUG is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.sql_debug else logging.WARNING)
    return logging.getLogger("app")
