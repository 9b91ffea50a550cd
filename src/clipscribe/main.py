"""Console entry point."""

import logging

import uvicorn

from clipscribe.config import get_settings


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger(__name__).info(f"Starting {settings.service_name} on port {settings.port}")
    uvicorn.run("clipscribe.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
