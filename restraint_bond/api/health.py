"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from restraint_bond import __version__
from restraint_bond.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return application, database and bonding module status."""
    manager = getattr(request.app.state, "module_manager", None)
    bonding = "enabled" if manager and manager.is_enabled("bonding") else "disabled"
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
        status = "ok"
    except SQLAlchemyError:
        database = "disconnected"
        status = "error"
    return {
        "status": status,
        "database": database,
        "bonding": bonding,
        "version": __version__,
    }
