from loguru import logger


def init_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sink=lambda msg: print(msg, end=""),
        level=level.upper(),
        backtrace=True,
        diagnose=False,
    )
