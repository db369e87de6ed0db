"""Serve the API with uvicorn: ``python -m stockroom`` or the ``stockroom`` script."""

import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run(
        "stockroom.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    main()
