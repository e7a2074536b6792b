"""
Exceptions raised by the read side of the core.

Workflows never raise across their boundary; they return result objects.
"""

from typing import Optional


class PortfolioError(Exception):
    """Base exception for e-portfolio domain failures."""


class NotFoundError(PortfolioError, LookupError):
    """
    Raised when an entity required for a computation does not resolve.

    Attributes:
        entity_type: Kind of entity that was looked up
        entity_id: The identifier that did not resolve
    """

    def __init__(self, entity_type: str, entity_id: Optional[str]):
        super().__init__(f"{entity_type} with ID {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DoctorNotFoundError(NotFoundError):
    def __init__(self, doctor_id: Optional[str]):
        super().__init__("Doctor", doctor_id)


class CurriculumNotFoundError(NotFoundError):
    def __init__(self, curriculum_id: Optional[str]):
        super().__init__("Curriculum", curriculum_id)
