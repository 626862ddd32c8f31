import uvicorn

from .config import settings
from .logger import logger


def main():
    logger.info(f"Serving event admin API on {settings.host}:{settings.port}")
    uvicorn.run(
        "event_admin.main:app", host=settings.host, port=settings.port, reload=False
    )


if __name__ == "__main__":
    main()
