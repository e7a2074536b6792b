"""
User models - trainee doctors and their supervisors.

Credentials beyond the email address are handled outside the core.
"""

from typing import List

from pydantic import Field

from eportfolio.kernel.models.base import TimestampedModel, generate_id


class Doctor(TimestampedModel):
    """
    A trainee enrolled in exactly one curriculum.

    supervisor_ids keeps the order in which supervisors were assigned.
    """

    id: str = Field(default_factory=generate_id)
    first_name: str
    last_name: str
    email: str
    specialty: str = ""
    year_of_training: int = Field(default=1, ge=1)
    curriculum_id: str
    supervisor_ids: List[str] = []

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_supervised_by(self, supervisor_id: str) -> bool:
        return supervisor_id in self.supervisor_ids


class Supervisor(TimestampedModel):
    """A consultant who verifies procedures performed by doctors."""

    id: str = Field(default_factory=generate_id)
    first_name: str
    last_name: str
    email: str
    title: str = ""
    specialty: str = ""
    years_of_experience: int = Field(default=0, ge=0)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
