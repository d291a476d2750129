"""Startup script for the FastAPI application.

    python scripts/start.py

Or run uvicorn directly:
    uvicorn outage_journal.main:app --reload
"""

import structlog
import uvicorn

from outage_journal.core.config import get_settings
from outage_journal.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.LOG_LEVEL, json_logs=not settings.DEBUG)

logger = structlog.get_logger()


def main():
    """Main function to start the application."""
    logger.info(
        "Starting Outage Journal",
        host=settings.HOST,
        port=settings.PORT,
        debug=settings.DEBUG,
        reload=settings.RELOAD,
        database=settings.DATABASE_URL,
    )

    uvicorn.run(
        "outage_journal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
