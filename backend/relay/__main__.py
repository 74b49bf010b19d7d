import uvicorn
from loguru import logger

from relay.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logger.info("listening at {}/tcp", settings.port)
    uvicorn.run("relay.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
