"""
End-to-end flow through the service facade.

Request -> verification -> progress, against one seeded repository.
"""

import logging

import pytest

from eportfolio.kernel.errors import DoctorNotFoundError
from eportfolio.portfolio_service import PortfolioService, create_service
from eportfolio.schemas.progress import ProcedureStatus


def _request(service: PortfolioService, procedure_id: str = "proc-1", supervisor_id: str = "sup-1"):
    return service.submit_request(
        "doc-1", supervisor_id, procedure_id, "Supervised", "2026-03-10",
        "Subclavian approach", "Theatre 2", "Routine",
    )


class TestPortfolioFlow:
    """Full lifecycle."""

    def test_request_then_verification_round_trip(self, service, repository):
        """The request disappears and exactly one matching verification appears."""
        submitted = _request(service)
        assert submitted.success is True
        assert service.get_doctor_stats("doc-1").pending_requests == 1

        verified = service.submit_verification(
            submitted.request_id, "sup-1", 5, "Supervised", "Covered theory and practice well",
        )

        assert verified.success is True
        assert repository.get_request(submitted.request_id) is None
        verifications = repository.list_verifications()
        assert len(verifications) == 1
        assert verifications[0].doctor_id == "doc-1"
        assert verifications[0].procedure_id == "proc-1"
        assert verifications[0].request_id == submitted.request_id

    def test_request_cannot_be_verified_twice(self, service, repository):
        submitted = _request(service)
        first = service.submit_verification(submitted.request_id, "sup-1", 4, "Assisted", "Fine")
        second = service.submit_verification(submitted.request_id, "sup-1", 4, "Assisted", "Fine")

        assert first.success is True
        assert second.success is False
        assert second.errors == [f"Request with ID {submitted.request_id} not found"]
        assert len(repository.list_verifications()) == 1

    def test_progress_reflects_committed_verifications(self, service):
        """Three supervised cases complete proc-1; a rejected attempt changes nothing."""
        before = service.get_doctor_progress("doc-1")
        assert before.procedure_progress[0].status == ProcedureStatus.NOT_STARTED

        for _ in range(3):
            request_id = _request(service).request_id
            assert service.submit_verification(request_id, "sup-1", 4, "Supervised", "Solid").success

        rejected = _request(service).request_id
        assert service.submit_verification(rejected, "sup-2", 4, "Independent", "Solid").success is False

        after = service.get_doctor_progress("doc-1")
        entry = after.procedure_progress[0]
        assert entry.status == ProcedureStatus.COMPLETED
        assert entry.completed_cases == 3
        assert entry.current_level.value == "Supervised"
        assert after.completed_procedures == 1
        assert after.overall_percentage == 33

    def test_dashboard_queries(self, service):
        _request(service, supervisor_id="sup-2")
        _request(service, procedure_id="proc-2", supervisor_id="sup-2")

        pending = service.list_pending_requests_for_supervisor("sup-2")
        assert [r.procedure_id for r in pending] == ["proc-1", "proc-2"]
        assert service.get_supervisor_stats("sup-2").pending_requests == 2
        assert [s.id for s in service.find_supervisors_for_doctor("doc-1")] == ["sup-2", "sup-1"]
        assert service.find_supervisors_for_doctor("nobody") == []

    def test_progress_for_unknown_doctor_raises(self, service):
        with pytest.raises(DoctorNotFoundError):
            service.get_doctor_progress("nobody")

    def test_default_service_starts_empty(self, settings):
        service = PortfolioService(settings=settings)
        assert service.repository.list_doctors() == []
        result = service.submit_request(
            "doc-1", "sup-1", "proc-1", "Observed", "2020-01-01", "n", "l", "Routine",
        )
        assert result.errors == ["Doctor with ID doc-1 not found"]

    def test_create_service_configures_logging_and_seeds(self, seed, settings):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            service = create_service(seed, settings)
            assert len(root.handlers) == 1
            assert root.level == logging.INFO
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

        assert service.settings is settings
        assert len(service.repository.list_doctors()) == 4
        assert service.repository.get_supervisor("sup-1").display_name == "Alice Morgan"
