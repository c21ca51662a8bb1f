"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

from restraint_bond.api.game import router as game_router
from restraint_bond.api.health import router as health_router
from restraint_bond.config import settings
from restraint_bond.core.hooks import HookRegistry
from restraint_bond.core.item.registry import RestraintRegistry, VariantRegistry
from restraint_bond.core.logging import get_logger, setup_logging
from restraint_bond.core.text import TextCatalog
from restraint_bond.db.database import SessionLocal, init_db
from restraint_bond.modules.bonding.module import BondingModule
from restraint_bond.modules.module_manager import ModuleManager
from restraint_bond.services.dungeon_host import DungeonHost
from restraint_bond.services.save_service import SaveService

setup_logging(
    settings.LOG_LEVEL,
    overrides=None if settings.DEBUG else {"sqlalchemy.engine": "WARNING"},
)
logger = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"


def load_texts(language: str) -> TextCatalog:
    """언어별 문자열 로드. 해당 언어 파일이 없으면 EN."""
    texts = TextCatalog(language)
    path = DATA_DIR / f"text_{texts.language.lower()}.json"
    if not path.exists():
        logger.warning("No text file for %s, falling back to EN", texts.language)
        path = DATA_DIR / "text_en.json"
    texts.load_from_json(path)
    return texts


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    init_db()
    logger.info("Database tables created.")

    # 호스트 데이터
    restraints = RestraintRegistry()
    restraints.load_from_json(DATA_DIR / "restraints.json")
    variants = VariantRegistry()
    variants.load_from_json(DATA_DIR / "variants.json")
    texts = load_texts(settings.TEXT_LANGUAGE)

    # 레퍼런스 호스트 + 모듈
    logger.info("Initializing host and modules...")
    hooks = HookRegistry()
    host = DungeonHost(restraints, variants, hooks=hooks)
    manager = ModuleManager(hooks=hooks)
    bonding = BondingModule(
        host=host,
        hooks=hooks,
        event_bus=manager.event_bus,
        config=settings.bond_config(),
        texts=texts,
    )
    manager.register(bonding)
    manager.enable(bonding.name)
    logger.info("Bonding module enabled.")

    # 저장된 템플릿이 있으면 시드 위에 덮어쓴다
    db_session = SessionLocal()
    save_service = SaveService(db=db_session, event_bus=manager.event_bus, host=host)
    save_service.load()

    app.state.host = host
    app.state.module_manager = manager
    app.state.bonding_module = bonding
    app.state.event_bus = manager.event_bus
    app.state.save_service = save_service

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    save_service.flush()
    manager.disable(bonding.name)
    db_session.close()


app = FastAPI(title="Restraint Bond", lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
