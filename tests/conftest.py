"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import restraint_bond
from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.hooks import HookRegistry
from restraint_bond.core.item.registry import RestraintRegistry, VariantRegistry
from restraint_bond.core.text import TextCatalog
from restraint_bond.db.database import get_db
from restraint_bond.db.models import Base
from restraint_bond.main import app
from restraint_bond.modules.bonding.module import BondingModule
from restraint_bond.modules.module_manager import ModuleManager
from restraint_bond.services.dungeon_host import DungeonHost

DATA_DIR = Path(restraint_bond.__file__).parent / "data"

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    return TestClient(app)


@pytest.fixture()
def db_session() -> Session:
    """Raw database session on a fresh in-memory schema."""
    Base.metadata.create_all(TEST_ENGINE)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(TEST_ENGINE)


# ── 도메인 픽스처 ────────────────────────────────────────────


@pytest.fixture()
def config() -> BondConfig:
    return BondConfig()


@pytest.fixture()
def texts() -> TextCatalog:
    catalog = TextCatalog("EN")
    catalog.load_from_json(DATA_DIR / "text_en.json")
    return catalog


@pytest.fixture()
def restraints() -> RestraintRegistry:
    registry = RestraintRegistry()
    registry.load_from_json(DATA_DIR / "restraints.json")
    return registry


@pytest.fixture()
def variants() -> VariantRegistry:
    registry = VariantRegistry()
    registry.load_from_json(DATA_DIR / "variants.json")
    return registry


@pytest.fixture()
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture()
def host(restraints, variants, hooks) -> DungeonHost:
    """1층에서 시작하는 레퍼런스 호스트 (모듈 없음)"""
    return DungeonHost(restraints, variants, hooks=hooks)


@pytest.fixture()
def manager(hooks) -> ModuleManager:
    return ModuleManager(hooks=hooks)


@pytest.fixture()
def bonding(host, hooks, manager, config, texts) -> BondingModule:
    """호스트에 연결된 활성 BondingModule"""
    module = BondingModule(
        host=host,
        hooks=hooks,
        event_bus=manager.event_bus,
        config=config,
        texts=texts,
    )
    manager.register(module)
    manager.enable(module.name)
    return module
