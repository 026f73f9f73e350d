"""Domain entities."""

from app.domain.entities.principal import Principal

__all__ = ["Principal"]
