"""Persistence models: ORM entities."""

from app.infrastructure.persistence.models.audit import Audit

__all__ = [
    "Audit",
]
