"""
Entity models for the e-portfolio core.
"""

from eportfolio.kernel.models.base import TimestampedModel, generate_id, utcnow
from eportfolio.kernel.models.user import Doctor, Supervisor
from eportfolio.kernel.models.curriculum import Curriculum, Procedure, SkillLevel
from eportfolio.kernel.models.request import (
    PatientSex,
    ProcedureRequest,
    RequestStatus,
    Urgency,
)
from eportfolio.kernel.models.verification import Verification

__all__ = [
    "TimestampedModel",
    "generate_id",
    "utcnow",
    # Users
    "Doctor",
    "Supervisor",
    # Curriculum
    "Curriculum",
    "Procedure",
    "SkillLevel",
    # Requests
    "ProcedureRequest",
    "RequestStatus",
    "Urgency",
    "PatientSex",
    # Verifications
    "Verification",
]
