"""Database engine and session configuration."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from restraint_bond.config import settings


def _connect_args(url: str) -> dict:
    # SQLite 커넥션을 FastAPI 워커 스레드에서도 쓰기 위해
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """요청 단위 세션 (FastAPI 의존성). 요청이 끝나면 닫는다."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """세이브 테이블 생성 (variant_templates, save_states)."""
    from restraint_bond.db.models import Base

    Base.metadata.create_all(bind=engine)
