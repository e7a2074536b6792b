"""
Kernel Layer

Entity models, the in-process repository, and the transaction boundary
the workflows write through:
- Entity Repository (CRUD lookups, foreign-key filters, dashboard stats)
- Transaction Coordinator (single-slot snapshot, commit/rollback)
- Domain exceptions for the read side
"""

from eportfolio.kernel.errors import (
    CurriculumNotFoundError,
    DoctorNotFoundError,
    NotFoundError,
    PortfolioError,
)
from eportfolio.kernel.repository import EntityRepository
from eportfolio.kernel.transaction import TransactionCoordinator

__all__ = [
    "EntityRepository",
    "TransactionCoordinator",
    "PortfolioError",
    "NotFoundError",
    "DoctorNotFoundError",
    "CurriculumNotFoundError",
]
