"""DB session dependencies (composition root)."""

from app.infrastructure.persistence.database import get_db, get_db_transactional

__all__ = ["get_db", "get_db_transactional"]
