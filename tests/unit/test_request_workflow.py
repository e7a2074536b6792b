"""Unit tests for the request workflow."""

from datetime import date, timedelta

import pytest

from eportfolio.config import Settings
from eportfolio.engines.workflows import RequestWorkflow
from eportfolio.kernel.models import RequestStatus, SkillLevel, Urgency

from conftest import FIXED_NOW, fixed_clock


def _submit(workflow: RequestWorkflow, **overrides):
    fields = {
        "doctor_id": "doc-1",
        "supervisor_id": "sup-1",
        "procedure_id": "proc-1",
        "requested_level": "Supervised",
        "date_performed": "2026-03-14",
        "notes": "Femoral line, first pass",
        "location": "ICU",
        "urgency": "Routine",
    }
    fields.update(overrides)
    return workflow.submit_request(**fields)


class TestSubmitRequestSuccess:
    """Valid submissions create Pending requests."""

    def test_creates_pending_request(self, request_workflow, repository):
        """Request is stored Pending with a 30-day expiry."""
        result = _submit(request_workflow)

        assert result.success is True
        assert result.message == "Request submitted successfully"
        assert result.errors == []
        stored = repository.get_request(result.request_id)
        assert stored == result.request
        assert stored.status == RequestStatus.PENDING
        assert stored.requested_level == SkillLevel.SUPERVISED
        assert stored.urgency == Urgency.ROUTINE
        assert stored.created_at == FIXED_NOW
        assert stored.expires_at == FIXED_NOW + timedelta(days=30)
        assert stored.date_performed.date() == date(2026, 3, 14)

    def test_accepts_enum_members_and_patient_fields(self, request_workflow):
        """Enum members, date objects and optional patient data are accepted."""
        result = _submit(
            request_workflow,
            requested_level=SkillLevel.INDEPENDENT,
            urgency=Urgency.EMERGENCY,
            date_performed=date(2026, 3, 1),
            patient_age=54,
            patient_sex="Male",
            complications="Minor bleeding",
        )
        assert result.success is True
        assert result.request.patient_age == 54
        assert result.request.patient_sex.value == "Male"
        assert result.request.complications == "Minor bleeding"

    def test_same_instant_is_not_future(self, request_workflow):
        """A performance time equal to now is accepted."""
        result = _submit(request_workflow, date_performed=FIXED_NOW)
        assert result.success is True

    def test_expiry_follows_settings(self, repository):
        """Expiry days come from settings."""
        workflow = RequestWorkflow(
            repository, Settings(_env_file=None, request_expiry_days=7), clock=fixed_clock
        )
        result = _submit(workflow)
        assert result.request.expires_at == FIXED_NOW + timedelta(days=7)


class TestSubmitRequestValidation:
    """Field validation collects every problem."""

    def test_collects_all_errors(self, request_workflow, repository):
        """Every missing or malformed field is reported, nothing is stored."""
        result = request_workflow.submit_request(
            doctor_id="",
            supervisor_id="  ",
            procedure_id=None,
            requested_level="Expert",
            date_performed="",
            notes="",
            location="",
            urgency="Whenever",
        )

        assert result.success is False
        assert result.message == "Validation failed"
        assert result.request_id == ""
        assert result.errors == [
            "Doctor ID is required",
            "Supervisor ID is required",
            "Procedure ID is required",
            "Requested level must be one of: Observed, Assisted, Supervised, Independent",
            "Date performed is required",
            "Procedure notes are required",
            "Location is required",
            "Urgency must be one of: Routine, Urgent, Emergency",
        ]
        assert repository.list_requests() == []

    def test_future_date_rejected(self, request_workflow, repository):
        """One day ahead of now fails validation."""
        result = _submit(request_workflow, date_performed=FIXED_NOW + timedelta(days=1))

        assert result.success is False
        assert "Date performed cannot be in the future" in result.errors
        assert repository.list_requests() == []

    def test_unparseable_date_rejected(self, request_workflow):
        result = _submit(request_workflow, date_performed="14/03/2026")
        assert result.errors == ["Invalid date format for datePerformed"]

    def test_offset_outside_datetime_range_rejected(self, request_workflow, repository):
        """Year-one instants that shift before datetime.min are a bad date, not a crash."""
        result = _submit(request_workflow, date_performed="0001-01-01T00:00:00+05:00")

        assert result.success is False
        assert result.errors == ["Invalid date format for datePerformed"]
        assert repository.list_requests() == []

    def test_non_text_complications_rejected(self, request_workflow, repository):
        result = _submit(request_workflow, complications=123)

        assert result.success is False
        assert result.errors == ["Complications must be text"]
        assert repository.list_requests() == []

    def test_store_failure_becomes_failure_result(self, request_workflow, repository, monkeypatch):
        """Errors while recording the request are reported, never raised."""
        def broken_create(request):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(repository, "create_request", broken_create)
        result = _submit(request_workflow)

        assert result.success is False
        assert result.message == "Failed to submit request: store unavailable"
        assert result.errors == ["store unavailable"]
        assert result.request is None

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"patient_age": -1}, "Patient age must be between 0 and 150"),
            ({"patient_age": 200}, "Patient age must be between 0 and 150"),
            ({"patient_sex": "Unknown"}, "Patient sex must be one of: Male, Female, Other"),
        ],
    )
    def test_optional_patient_fields_checked_when_present(self, request_workflow, overrides, message):
        result = _submit(request_workflow, **overrides)
        assert result.errors == [message]


class TestSubmitRequestDomainChecks:
    """Reference checks stop at the first failure."""

    @pytest.mark.parametrize(
        "overrides, reason",
        [
            ({"doctor_id": "doc-x"}, "Doctor with ID doc-x not found"),
            ({"supervisor_id": "sup-x"}, "Supervisor with ID sup-x not found"),
            ({"supervisor_id": "sup-3"}, "Selected supervisor is not associated with this doctor"),
            ({"procedure_id": "proc-9"}, "Procedure with ID proc-9 not found in curriculum"),
        ],
    )
    def test_single_message_failure(self, request_workflow, repository, overrides, reason):
        """Each broken reference yields exactly one message and no request."""
        result = _submit(request_workflow, **overrides)

        assert result.success is False
        assert result.errors == [reason]
        assert result.message == f"Failed to submit request: {reason}"
        assert repository.list_requests() == []

    def test_missing_curriculum(self, request_workflow):
        result = _submit(request_workflow, doctor_id="doc-orphan")
        assert result.errors == ["Curriculum with ID cur-missing not found"]
