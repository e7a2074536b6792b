"""
Request Workflow - validates and records a doctor's verification request.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from eportfolio.config import Settings, get_settings
from eportfolio.engines.workflows.field_validator import (
    SubmissionValidator,
    collect_errors,
    parse_datetime,
)
from eportfolio.engines.workflows.references import resolve_curriculum_procedure
from eportfolio.kernel.models import (
    PatientSex,
    Procedure,
    ProcedureRequest,
    RequestStatus,
    SkillLevel,
    Urgency,
    utcnow,
)
from eportfolio.kernel.repository import EntityRepository
from eportfolio.logging_config import get_logger
from eportfolio.schemas.common import Result
from eportfolio.schemas.submission import RequestSubmissionResult

logger = get_logger(__name__)


class RequestWorkflow:
    """
    Creates Pending requests for supervisor verification.

    Field validation reports every problem at once. Domain checks then run
    in order and stop at the first failure:
    doctor exists -> supervisor exists -> supervisor is assigned to the
    doctor -> procedure belongs to the doctor's curriculum.
    """

    def __init__(
        self,
        repository: EntityRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.settings = settings or get_settings()
        self.clock = clock

    def submit_request(
        self,
        doctor_id: str,
        supervisor_id: str,
        procedure_id: str,
        requested_level: Any,
        date_performed: Any,
        notes: str,
        location: str,
        urgency: Any,
        patient_age: Optional[int] = None,
        patient_sex: Optional[Any] = None,
        complications: Optional[str] = None,
    ) -> RequestSubmissionResult:
        """
        Validate and create a verification request.

        Args:
            doctor_id: Doctor submitting the request
            supervisor_id: Supervisor asked to verify; must be assigned to the doctor
            procedure_id: Procedure from the doctor's curriculum
            requested_level: SkillLevel (or its value) the doctor claims
            date_performed: date, datetime or ISO-8601 string; not in the future
            notes: Doctor's description of the case
            location: Where the procedure was performed
            urgency: Urgency (or its value)
            patient_age: Optional patient age in years
            patient_sex: Optional PatientSex (or its value)
            complications: Optional free text

        Returns:
            RequestSubmissionResult; on success it carries the created request
        """
        now = self.clock()
        v = SubmissionValidator
        checks = [
            v.validate_required(doctor_id, "doctor_id", "Doctor ID is required"),
            v.validate_required(supervisor_id, "supervisor_id", "Supervisor ID is required"),
            v.validate_required(procedure_id, "procedure_id", "Procedure ID is required"),
            v.validate_choice(requested_level, SkillLevel, "requested_level", "Requested level"),
            v.validate_date_performed(date_performed, now),
            v.validate_required(notes, "notes", "Procedure notes are required"),
            v.validate_required(location, "location", "Location is required"),
            v.validate_choice(urgency, Urgency, "urgency", "Urgency"),
            v.validate_patient_age(patient_age),
            v.validate_optional_text(complications, "complications", "Complications"),
        ]
        if patient_sex is not None:
            checks.append(v.validate_choice(patient_sex, PatientSex, "patient_sex", "Patient sex"))

        errors = collect_errors(checks)
        if errors:
            logger.info(
                "Request rejected by validation",
                extra={"doctor_id": doctor_id, "error_count": len(errors)},
            )
            return RequestSubmissionResult.failed("Validation failed", errors)

        checked = self._check_references(doctor_id, supervisor_id, procedure_id)
        if not checked.success:
            logger.info(
                "Request rejected",
                extra={"doctor_id": doctor_id, "reason": checked.error},
            )
            return RequestSubmissionResult.failed(
                f"Failed to submit request: {checked.error}", [checked.error]
            )

        try:
            request = self._create(
                now,
                doctor_id=doctor_id,
                supervisor_id=supervisor_id,
                procedure_id=procedure_id,
                requested_level=requested_level,
                date_performed=date_performed,
                notes=notes,
                location=location,
                urgency=urgency,
                patient_age=patient_age,
                patient_sex=patient_sex,
                complications=complications,
            )
        except Exception as exc:
            logger.exception("Request failed unexpectedly", extra={"doctor_id": doctor_id})
            error = str(exc) or type(exc).__name__
            return RequestSubmissionResult.failed(f"Failed to submit request: {error}", [error])

        logger.info(
            "Request submitted",
            extra={
                "request_id": request.id,
                "doctor_id": doctor_id,
                "supervisor_id": supervisor_id,
                "procedure_id": procedure_id,
            },
        )
        return RequestSubmissionResult(
            success=True,
            request_id=request.id,
            message="Request submitted successfully",
            request=request,
        )

    def _check_references(
        self,
        doctor_id: str,
        supervisor_id: str,
        procedure_id: str,
    ) -> Result[Procedure]:
        doctor = self.repository.get_doctor(doctor_id)
        if doctor is None:
            return Result.failure_result(f"Doctor with ID {doctor_id} not found")

        if self.repository.get_supervisor(supervisor_id) is None:
            return Result.failure_result(f"Supervisor with ID {supervisor_id} not found")

        if not doctor.is_supervised_by(supervisor_id):
            return Result.failure_result("Selected supervisor is not associated with this doctor")

        return resolve_curriculum_procedure(self.repository, doctor, procedure_id)

    def _create(self, now: datetime, **fields: Any) -> ProcedureRequest:
        patient_sex = fields["patient_sex"]
        request = ProcedureRequest(
            doctor_id=fields["doctor_id"],
            supervisor_id=fields["supervisor_id"],
            procedure_id=fields["procedure_id"],
            requested_level=SkillLevel(fields["requested_level"]),
            status=RequestStatus.PENDING,
            date_performed=parse_datetime(fields["date_performed"]),
            notes=fields["notes"],
            location=fields["location"],
            urgency=Urgency(fields["urgency"]),
            patient_age=fields["patient_age"],
            patient_sex=PatientSex(patient_sex) if patient_sex is not None else None,
            complications=fields["complications"],
            created_at=now,
            updated_at=now,
            expires_at=now + timedelta(days=self.settings.request_expiry_days),
        )
        return self.repository.create_request(request)
