"""애플리케이션 로깅 설정.

Application logging configuration. Modules log through
logging.getLogger(__name__); setup_logging() configures the root logger
once at application start-up. API request logs go to Axiom through
AxiomLoggingMiddleware.
"""

import logging

from eventforge.config import settings

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 모듈별 로그 레벨 — Noisy third-party loggers
MODULE_LOG_LEVELS: dict[str, str] = {
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosmtplib": "WARNING",
    "httpx": "WARNING",
}


def setup_logging(log_level: str | None = None) -> None:
    """루트 로거를 설정합니다 — 기존 핸들러는 교체.

    Args:
        log_level: 로그 레벨 (Overrides settings.LOG_LEVEL)
    """
    level: str = (log_level or settings.LOG_LEVEL).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info("Logging configured: level=%s", level)
