"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IAuditRepository
from app.application.interfaces.services import IAssetDirectory

__all__ = [
    "IAssetDirectory",
    "IAuditRepository",
]
