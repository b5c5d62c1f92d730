"""Run the admin API with uvicorn: ``python -m mediacat``."""

import uvicorn

from .core.config import settings


def main():
    uvicorn.run(
        "mediacat.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
