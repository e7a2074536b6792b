"""
Pydantic schemas for request and verification submission outcomes.
"""

from typing import List, Optional

from eportfolio.kernel.models import ProcedureRequest, Verification
from eportfolio.schemas.common import SubmissionResult


class RequestSubmissionResult(SubmissionResult):
    """Outcome of submitting a verification request."""

    request_id: str = ""
    request: Optional[ProcedureRequest] = None

    @classmethod
    def failed(cls, message: str, errors: List[str]) -> "RequestSubmissionResult":
        return cls(success=False, message=message, errors=errors)


class VerificationSubmissionResult(SubmissionResult):
    """Outcome of verifying a pending request."""

    verification_id: str = ""
    verification: Optional[Verification] = None

    @classmethod
    def failed(cls, message: str, errors: List[str]) -> "VerificationSubmissionResult":
        return cls(success=False, message=message, errors=errors)
