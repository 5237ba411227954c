"""로깅 설정"""
import logging
from rich.logging import RichHandler

LOGGER_NAME = "runner_configs"


def setup_logging(level: str | int = "WARNING") -> logging.Logger:
    """패키지 로거에 Rich 핸들러 연결 (여러 번 호출해도 핸들러는 하나)"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
