"""SQLAlchemy declarative base + 레퍼런스 호스트 세이브 테이블

모드 필드는 별도 테이블 없이 variant 템플릿 행에 그대로 붙어 있다.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class VariantTemplateModel(Base):
    """ORM model for variant templates (호스트 세이브)."""

    __tablename__ = "variant_templates"

    variant_id: Mapped[str] = mapped_column(String, primary_key=True)
    template: Mapped[str] = mapped_column(String, nullable=False)
    display_name: Mapped[str] = mapped_column(String, default="")
    events: Mapped[list] = mapped_column(JSON, default=list)

    # 모드 소유 필드 (BondData)
    is_new_restraint: Mapped[bool] = mapped_column(Boolean, default=False)
    bond_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    lock_level: Mapped[int] = mapped_column(Integer, default=0)
    has_new_lock: Mapped[bool] = mapped_column(Boolean, default=False)
    true_name: Mapped[str | None] = mapped_column(String, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class SaveStateModel(Base):
    """ORM model for host progression counters."""

    __tablename__ = "save_states"

    slot: Mapped[str] = mapped_column(String, primary_key=True)
    current_floor: Mapped[int] = mapped_column(Integer, default=1)
    highest_floor: Mapped[int] = mapped_column(Integer, default=1)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
