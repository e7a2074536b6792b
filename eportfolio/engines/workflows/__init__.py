"""
Workflows - the request -> verification lifecycle.

Both entry points return result objects; no exception crosses them.
"""

from eportfolio.engines.workflows.field_validator import (
    SubmissionValidator,
    ValidationResult,
    ValidationStatus,
    parse_datetime,
)
from eportfolio.engines.workflows.request_workflow import RequestWorkflow
from eportfolio.engines.workflows.verification_workflow import VerificationWorkflow

__all__ = [
    "RequestWorkflow",
    "VerificationWorkflow",
    "SubmissionValidator",
    "ValidationResult",
    "ValidationStatus",
    "parse_datetime",
]
