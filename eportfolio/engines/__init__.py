"""
Engines - progress computation and the request/verification workflows.

Progress:
- ProgressCalculator: read-only report over the repository's current state

Workflows:
- RequestWorkflow: validated creation of Pending requests
- VerificationWorkflow: transactional request -> verification conversion
"""

from eportfolio.engines.progress import ProgressCalculator
from eportfolio.engines.workflows import RequestWorkflow, VerificationWorkflow

__all__ = [
    "ProgressCalculator",
    "RequestWorkflow",
    "VerificationWorkflow",
]
