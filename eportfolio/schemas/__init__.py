"""
Result and report schemas returned by the core.
"""

from eportfolio.schemas.common import Result, SubmissionResult
from eportfolio.schemas.progress import (
    ProcedureProgress,
    ProcedureStatus,
    ProgressReport,
    VerificationSummary,
)
from eportfolio.schemas.stats import DoctorStats, SupervisorStats
from eportfolio.schemas.submission import (
    RequestSubmissionResult,
    VerificationSubmissionResult,
)

__all__ = [
    "Result",
    "SubmissionResult",
    "ProcedureProgress",
    "ProcedureStatus",
    "ProgressReport",
    "VerificationSummary",
    "DoctorStats",
    "SupervisorStats",
    "RequestSubmissionResult",
    "VerificationSubmissionResult",
]
