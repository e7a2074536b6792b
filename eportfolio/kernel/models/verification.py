"""
Verification model - the supervisor-authored outcome of a request.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from eportfolio.kernel.models.base import TimestampedModel, generate_id, utcnow
from eportfolio.kernel.models.curriculum import SkillLevel
from eportfolio.kernel.models.request import PatientSex, Urgency


class Verification(TimestampedModel):
    """
    Immutable record confirming a procedure and the skill level shown.

    Performance, patient and location fields are copied from the
    originating request, which is deleted when this record is created.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    doctor_id: str
    supervisor_id: str
    procedure_id: str
    request_id: str
    skill_level: SkillLevel
    rating: int = Field(..., ge=1, le=5)
    date_performed: datetime
    date_verified: datetime = Field(default_factory=utcnow)
    supervisor_notes: str
    doctor_notes: str = ""
    patient_age: Optional[int] = None
    patient_sex: Optional[PatientSex] = None
    location: str = ""
    urgency: Optional[Urgency] = None
    complications: Optional[str] = None
    areas_of_strength: List[str] = []
    areas_for_improvement: List[str] = []
    follow_up_required: bool = False
