"""Run the application with uvicorn: ``python -m jersey_store``."""

import uvicorn

from jersey_store.core.config import settings


def main() -> None:
    uvicorn.run(
        "jersey_store.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
