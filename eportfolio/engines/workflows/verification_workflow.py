"""
Verification Workflow - turns a pending request into a verification record.

The verification is created and its request deleted inside one
transaction; any failure after begin() rolls both back.
"""

from datetime import datetime
from typing import Any, Callable, List, Optional

from eportfolio.engines.workflows.field_validator import SubmissionValidator, collect_errors
from eportfolio.engines.workflows.references import resolve_curriculum_procedure
from eportfolio.kernel.models import (
    ProcedureRequest,
    SkillLevel,
    Verification,
    utcnow,
)
from eportfolio.kernel.repository import EntityRepository
from eportfolio.kernel.transaction import TransactionCoordinator
from eportfolio.logging_config import get_logger
from eportfolio.schemas.common import Result
from eportfolio.schemas.submission import VerificationSubmissionResult

logger = get_logger(__name__)


class VerificationWorkflow:
    """
    Verifies pending requests on behalf of their assigned supervisor.

    Steps inside the transaction:
    1. Request exists and is Pending
    2. Supervisor exists and is the one the request was addressed to
    3. Doctor, curriculum and procedure still resolve
    4. Verification created, request deleted, transaction committed
    """

    def __init__(
        self,
        repository: EntityRepository,
        transactions: TransactionCoordinator,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.transactions = transactions
        self.clock = clock

    def submit_verification(
        self,
        request_id: str,
        supervisor_id: str,
        rating: int,
        skill_level: Any,
        notes: str,
        areas_of_strength: Optional[List[str]] = None,
        areas_for_improvement: Optional[List[str]] = None,
        follow_up_required: bool = False,
    ) -> VerificationSubmissionResult:
        """
        Validate, authorize and record a verification.

        Args:
            request_id: Pending request being verified
            supervisor_id: Supervisor submitting; must match the request's supervisor
            rating: Overall rating, 1-5
            skill_level: SkillLevel (or its value) demonstrated
            notes: Supervisor notes; mentioning theory counts towards theory completion
            areas_of_strength: Optional ordered list
            areas_for_improvement: Optional ordered list
            follow_up_required: Whether the supervisor wants a follow-up

        Returns:
            VerificationSubmissionResult; on success it carries the new verification
        """
        v = SubmissionValidator
        errors = collect_errors([
            v.validate_required(request_id, "request_id", "Request ID is required"),
            v.validate_required(supervisor_id, "supervisor_id", "Supervisor ID is required"),
            v.validate_rating(rating),
            v.validate_choice(skill_level, SkillLevel, "skill_level", "Skill level"),
            v.validate_required(notes, "notes", "Supervisor notes are required"),
            v.validate_text_list(areas_of_strength, "areas_of_strength", "Areas of strength"),
            v.validate_text_list(
                areas_for_improvement, "areas_for_improvement", "Areas for improvement"
            ),
        ])
        if errors:
            logger.info(
                "Verification rejected by validation",
                extra={"request_id": request_id, "error_count": len(errors)},
            )
            return VerificationSubmissionResult.failed("Validation failed", errors)

        self.transactions.begin()
        try:
            outcome = self._verify(
                request_id=request_id,
                supervisor_id=supervisor_id,
                rating=rating,
                skill_level=SkillLevel(skill_level),
                notes=notes,
                areas_of_strength=list(areas_of_strength or []),
                areas_for_improvement=list(areas_for_improvement or []),
                follow_up_required=follow_up_required,
            )
        except Exception as exc:
            logger.exception("Verification failed unexpectedly", extra={"request_id": request_id})
            outcome = Result.failure_result(str(exc) or type(exc).__name__)

        if not outcome.success:
            self.transactions.rollback()
            logger.info(
                "Verification rolled back",
                extra={"request_id": request_id, "reason": outcome.error},
            )
            return VerificationSubmissionResult.failed(
                f"Failed to submit verification: {outcome.error}", [outcome.error]
            )

        self.transactions.commit()
        verification = outcome.value
        logger.info(
            "Verification submitted",
            extra={
                "verification_id": verification.id,
                "request_id": request_id,
                "doctor_id": verification.doctor_id,
                "procedure_id": verification.procedure_id,
            },
        )
        return VerificationSubmissionResult(
            success=True,
            verification_id=verification.id,
            message="Verification submitted successfully",
            verification=verification,
        )

    def _verify(
        self,
        *,
        request_id: str,
        supervisor_id: str,
        rating: int,
        skill_level: SkillLevel,
        notes: str,
        areas_of_strength: List[str],
        areas_for_improvement: List[str],
        follow_up_required: bool,
    ) -> Result[Verification]:
        """Transactional body. Caller owns begin/commit/rollback."""
        authorized = self._authorize(request_id, supervisor_id)
        if not authorized.success:
            return Result.failure_result(authorized.error)
        request = authorized.value

        doctor = self.repository.get_doctor(request.doctor_id)
        if doctor is None:
            return Result.failure_result(f"Doctor with ID {request.doctor_id} not found")

        procedure = resolve_curriculum_procedure(self.repository, doctor, request.procedure_id)
        if not procedure.success:
            return Result.failure_result(procedure.error)

        now = self.clock()
        verification = Verification(
            doctor_id=request.doctor_id,
            supervisor_id=supervisor_id,
            procedure_id=request.procedure_id,
            request_id=request.id,
            skill_level=skill_level,
            rating=rating,
            date_performed=request.date_performed,
            date_verified=now,
            supervisor_notes=notes,
            doctor_notes=request.notes,
            patient_age=request.patient_age,
            patient_sex=request.patient_sex,
            location=request.location,
            urgency=request.urgency,
            complications=request.complications,
            areas_of_strength=areas_of_strength,
            areas_for_improvement=areas_for_improvement,
            follow_up_required=follow_up_required,
            created_at=now,
            updated_at=now,
        )

        self.repository.create_verification(verification)
        self.repository.delete_request(request.id)
        return Result.success_result(verification)

    def _authorize(self, request_id: str, supervisor_id: str) -> Result[ProcedureRequest]:
        request = self.repository.get_request(request_id)
        if request is None:
            return Result.failure_result(f"Request with ID {request_id} not found")
        if not request.is_pending:
            return Result.failure_result(
                f"Request status is {request.status.value}, cannot verify"
            )

        if self.repository.get_supervisor(supervisor_id) is None:
            return Result.failure_result(f"Supervisor with ID {supervisor_id} not found")
        if request.supervisor_id != supervisor_id:
            return Result.failure_result("Supervisor is not authorized to verify this request")

        return Result.success_result(request)
