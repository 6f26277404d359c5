"""
API process entry point.

Serves api.main:app with uvicorn on API_HOST:API_PORT from settings.

To run:
    python -m api.server
"""

import uvicorn

from config.settings import settings


def main():
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
