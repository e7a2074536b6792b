"""
Pydantic schemas for curriculum progress reports.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from eportfolio.kernel.models import SkillLevel


class ProcedureStatus(str, Enum):
    """Completion state of a single procedure."""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class VerificationSummary(BaseModel):
    """One verification as shown under its procedure."""

    id: str
    skill_level: SkillLevel
    rating: int
    date_performed: datetime
    supervisor_name: str


class ProcedureProgress(BaseModel):
    """Progress of a doctor against one curriculum procedure."""

    procedure_id: str
    procedure_name: str
    procedure_code: str
    category: str
    status: ProcedureStatus
    current_level: Optional[SkillLevel] = None
    minimum_level_required: SkillLevel
    minimum_cases_required: int
    completed_cases: int
    cases_remaining: int
    meets_minimum_level: bool
    meets_minimum_cases: bool
    theory_completed: bool
    practice_completed: bool
    percentage_complete: int
    verifications: List[VerificationSummary] = []


class ProgressReport(BaseModel):
    """A doctor's progress across their whole curriculum."""

    doctor_id: str
    curriculum_id: str
    overall_percentage: int
    total_procedures: int
    completed_procedures: int
    in_progress_procedures: int
    not_started_procedures: int
    procedure_progress: List[ProcedureProgress] = []
    last_updated: datetime
