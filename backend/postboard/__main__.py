"""Entry point: `python -m postboard` serves the API with uvicorn.

Host, port and log level come from the same settings the app uses
(HOST, PORT, LOG_LEVEL). In production, a missing JWT_SECRET or
DATABASE_URL stops the process before the server binds.
"""
import logging
import sys

import uvicorn

from postboard.config import settings


def main() -> int:
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger("postboard").error("Configuration error: %s", e)
        return 1

    uvicorn.run(
        "postboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
