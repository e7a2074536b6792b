"""
Pydantic schemas for dashboard statistics.
"""

from pydantic import BaseModel


class DoctorStats(BaseModel):
    """Counts shown on a doctor's dashboard."""

    total_verifications: int = 0
    pending_requests: int = 0
    average_rating: float = 0.0


class SupervisorStats(BaseModel):
    """Counts shown on a supervisor's dashboard."""

    total_verifications: int = 0
    pending_requests: int = 0
    doctors_supervised: int = 0
