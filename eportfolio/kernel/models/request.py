"""
Procedure request model - an unverified claim awaiting supervisor sign-off.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from eportfolio.kernel.models.base import TimestampedModel, generate_id, utcnow
from eportfolio.kernel.models.curriculum import SkillLevel


class RequestStatus(str, Enum):
    """
    Lifecycle states of a request.

    Only PENDING is produced by the core: a successful verification
    deletes the request instead of moving it to REVIEWED.
    """
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"


class Urgency(str, Enum):
    """Clinical urgency of the performed procedure."""
    ROUTINE = "Routine"
    URGENT = "Urgent"
    EMERGENCY = "Emergency"


class PatientSex(str, Enum):
    """Optional patient metadata."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ProcedureRequest(TimestampedModel):
    """
    A doctor's request for a supervisor to verify a performed procedure.

    expires_at is stored data only; nothing in the core sweeps expired requests.
    """

    id: str = Field(default_factory=generate_id)
    doctor_id: str
    supervisor_id: str
    procedure_id: str
    requested_level: SkillLevel
    status: RequestStatus = RequestStatus.PENDING
    date_performed: datetime
    notes: str
    location: str
    urgency: Urgency
    patient_age: Optional[int] = None
    patient_sex: Optional[PatientSex] = None
    complications: Optional[str] = None
    expires_at: datetime

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether expires_at has passed. Does not change status."""
        return (now or utcnow()) >= self.expires_at
