"""로깅 설정 — 앱 전체 포맷 + 모듈별 logger"""

import logging
from typing import Mapping, Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO", overrides: Optional[Mapping[str, str]] = None
) -> None:
    """루트 로거 설정. overrides로 특정 logger 레벨만 따로 지정 (예: sqlalchemy)."""
    logging.basicConfig(level=_level(level), format=LOG_FORMAT, datefmt=DATE_FORMAT)
    for name, name_level in (overrides or {}).items():
        logging.getLogger(name).setLevel(_level(name_level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
