"""
Pytest fixtures for e-portfolio tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from eportfolio.config import Settings
from eportfolio.engines.progress import ProgressCalculator
from eportfolio.engines.workflows import RequestWorkflow, VerificationWorkflow
from eportfolio.kernel.models import (
    ProcedureRequest,
    SkillLevel,
    Urgency,
    Verification,
)
from eportfolio.kernel.repository import EntityRepository
from eportfolio.kernel.transaction import TransactionCoordinator
from eportfolio.portfolio_service import PortfolioService


FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
SEEDED_AT = datetime(2025, 8, 1, 9, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def seed() -> dict:
    """
    Two curricula, three supervisors, two doctors.

    doc-1 is supervised by sup-1 and sup-2; sup-3 is not assigned to doc-1.
    proc-9 lives in the cardiology curriculum only.
    """
    return {
        "supervisors": [
            {"id": "sup-1", "first_name": "Alice", "last_name": "Morgan", "email": "a.morgan@example.com",
             "title": "Consultant Surgeon", "specialty": "General Surgery", "years_of_experience": 15,
             "created_at": SEEDED_AT, "updated_at": SEEDED_AT},
            {"id": "sup-2", "first_name": "Bruno", "last_name": "Keller", "email": "b.keller@example.com",
             "title": "Consultant", "specialty": "General Surgery", "years_of_experience": 8,
             "created_at": SEEDED_AT, "updated_at": SEEDED_AT},
            {"id": "sup-3", "first_name": "Chen", "last_name": "Wei", "email": "c.wei@example.com",
             "title": "Registrar", "specialty": "Cardiology", "years_of_experience": 5,
             "created_at": SEEDED_AT, "updated_at": SEEDED_AT},
        ],
        "curricula": [
            {
                "id": "cur-surg",
                "specialty": "General Surgery",
                "name": "Core Surgical Training",
                "procedures": [
                    {"id": "proc-1", "name": "Central line insertion", "code": "CVC-01",
                     "category": "Vascular", "minimum_level": "Supervised", "minimum_cases": 3,
                     "theory_required": False, "practice_required": True},
                    {"id": "proc-2", "name": "Lumbar puncture", "code": "LP-01",
                     "category": "Neuro", "minimum_level": "Assisted", "minimum_cases": 0,
                     "theory_required": False, "practice_required": False},
                    {"id": "proc-3", "name": "Chest drain insertion", "code": "CD-01",
                     "category": "Thoracic", "minimum_level": "Independent", "minimum_cases": 2,
                     "theory_required": True, "practice_required": True},
                ],
                "created_at": SEEDED_AT,
                "updated_at": SEEDED_AT,
            },
            {
                "id": "cur-cardio",
                "specialty": "Cardiology",
                "procedures": [
                    {"id": "proc-9", "name": "Pericardiocentesis", "code": "PC-01",
                     "minimum_level": "Supervised", "minimum_cases": 1},
                ],
            },
            {"id": "cur-empty", "specialty": "Foundation", "procedures": []},
        ],
        "doctors": [
            {"id": "doc-1", "first_name": "Dana", "last_name": "Okafor", "email": "d.okafor@example.com",
             "specialty": "General Surgery", "year_of_training": 2, "curriculum_id": "cur-surg",
             "supervisor_ids": ["sup-2", "sup-1"], "created_at": SEEDED_AT, "updated_at": SEEDED_AT},
            {"id": "doc-2", "first_name": "Eli", "last_name": "Novak", "email": "e.novak@example.com",
             "specialty": "General Surgery", "curriculum_id": "cur-surg", "supervisor_ids": ["sup-2"]},
            {"id": "doc-3", "first_name": "Fay", "last_name": "Lund", "email": "f.lund@example.com",
             "curriculum_id": "cur-empty", "supervisor_ids": ["sup-1"]},
            {"id": "doc-orphan", "first_name": "Gil", "last_name": "Ross", "email": "g.ross@example.com",
             "curriculum_id": "cur-missing", "supervisor_ids": ["sup-1"]},
        ],
    }


@pytest.fixture
def repository(seed: dict) -> EntityRepository:
    return EntityRepository.from_seed(seed)


@pytest.fixture
def transactions(repository: EntityRepository) -> TransactionCoordinator:
    return TransactionCoordinator(repository)


@pytest.fixture
def calculator(repository: EntityRepository, settings: Settings) -> ProgressCalculator:
    return ProgressCalculator(repository, settings)


@pytest.fixture
def request_workflow(repository: EntityRepository, settings: Settings) -> RequestWorkflow:
    return RequestWorkflow(repository, settings, clock=fixed_clock)


@pytest.fixture
def verification_workflow(
    repository: EntityRepository,
    transactions: TransactionCoordinator,
) -> VerificationWorkflow:
    return VerificationWorkflow(repository, transactions, clock=fixed_clock)


@pytest.fixture
def service(repository: EntityRepository, settings: Settings) -> PortfolioService:
    return PortfolioService(repository, settings, clock=fixed_clock)


@pytest.fixture
def add_verification(repository: EntityRepository) -> Callable[..., Verification]:
    """Insert a verification directly, bypassing the workflow."""

    def _add(
        procedure_id: str,
        skill_level: SkillLevel,
        doctor_id: str = "doc-1",
        supervisor_id: str = "sup-1",
        notes: str = "Good technique",
        rating: int = 4,
    ) -> Verification:
        verification = Verification(
            doctor_id=doctor_id,
            supervisor_id=supervisor_id,
            procedure_id=procedure_id,
            request_id=f"req-for-{procedure_id}",
            skill_level=skill_level,
            rating=rating,
            date_performed=FIXED_NOW - timedelta(days=3),
            supervisor_notes=notes,
        )
        return repository.create_verification(verification)

    return _add


@pytest.fixture
def pending_request(repository: EntityRepository) -> ProcedureRequest:
    """A Pending request from doc-1 to sup-1 for proc-1."""
    request = ProcedureRequest(
        id="req-1",
        doctor_id="doc-1",
        supervisor_id="sup-1",
        procedure_id="proc-1",
        requested_level=SkillLevel.SUPERVISED,
        date_performed=FIXED_NOW - timedelta(days=2),
        notes="Right IJ line under ultrasound",
        location="Theatre 4",
        urgency=Urgency.URGENT,
        patient_age=67,
        patient_sex="Female",
        complications="None",
        created_at=FIXED_NOW - timedelta(days=1),
        updated_at=FIXED_NOW - timedelta(days=1),
        expires_at=FIXED_NOW + timedelta(days=29),
    )
    return repository.create_request(request)
