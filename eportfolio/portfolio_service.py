"""
Portfolio service - the functional surface offered to a UI layer.

Owns one repository, its transaction coordinator and the engines that
work on them. Every call runs under its own logging operation id.
"""

from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional

from eportfolio.config import Settings, get_settings
from eportfolio.engines.progress import ProgressCalculator
from eportfolio.engines.workflows import RequestWorkflow, VerificationWorkflow
from eportfolio.kernel.models import ProcedureRequest, Supervisor, utcnow
from eportfolio.kernel.repository import EntityRepository
from eportfolio.kernel.transaction import TransactionCoordinator
from eportfolio.logging_config import configure_logging, get_logger, operation_scope
from eportfolio.schemas.progress import ProgressReport
from eportfolio.schemas.stats import DoctorStats, SupervisorStats
from eportfolio.schemas.submission import (
    RequestSubmissionResult,
    VerificationSubmissionResult,
)

logger = get_logger(__name__)


class PortfolioService:
    """
    Entry point for doctor and supervisor dashboards.

    Usage:
        service = PortfolioService(EntityRepository.from_seed(seed))
        result = service.submit_request(doctor_id, supervisor_id, ...)
        report = service.get_doctor_progress(doctor_id)
    """

    def __init__(
        self,
        repository: Optional[EntityRepository] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.settings = settings or get_settings()
        self.repository = repository if repository is not None else EntityRepository()
        self.transactions = TransactionCoordinator(self.repository)
        self.progress = ProgressCalculator(self.repository, self.settings)
        self.requests = RequestWorkflow(self.repository, self.settings, clock=clock)
        self.verifications = VerificationWorkflow(self.repository, self.transactions, clock=clock)

    def get_doctor_progress(self, doctor_id: str) -> ProgressReport:
        """Raises NotFoundError if the doctor or their curriculum is missing."""
        with operation_scope():
            return self.progress.get_doctor_progress(doctor_id)

    def submit_request(self, *args: Any, **kwargs: Any) -> RequestSubmissionResult:
        """See RequestWorkflow.submit_request."""
        with operation_scope():
            return self.requests.submit_request(*args, **kwargs)

    def submit_verification(self, *args: Any, **kwargs: Any) -> VerificationSubmissionResult:
        """See VerificationWorkflow.submit_verification."""
        with operation_scope():
            return self.verifications.submit_verification(*args, **kwargs)

    def get_doctor_stats(self, doctor_id: str) -> DoctorStats:
        return self.repository.get_doctor_stats(doctor_id)

    def get_supervisor_stats(self, supervisor_id: str) -> SupervisorStats:
        return self.repository.get_supervisor_stats(supervisor_id)

    def list_pending_requests_for_supervisor(self, supervisor_id: str) -> List[ProcedureRequest]:
        return self.repository.find_pending_requests_for_supervisor(supervisor_id)

    def find_supervisors_for_doctor(self, doctor_id: str) -> List[Supervisor]:
        """Supervisors a doctor may address requests to, in assignment order."""
        doctor = self.repository.get_doctor(doctor_id)
        if doctor is None:
            return []
        return self.repository.find_supervisors_by_ids(doctor.supervisor_ids)


def create_service(
    seed: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None,
    settings: Optional[Settings] = None,
) -> PortfolioService:
    """
    Configure logging from settings and build a service over a fresh store.

    Args:
        seed: Optional initial data, see EntityRepository.from_seed
        settings: Overrides the cached environment settings

    Returns:
        A ready PortfolioService
    """
    settings = settings or get_settings()
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )
    repository = EntityRepository.from_seed(seed) if seed else EntityRepository()
    logger.info("Starting %s v%s", settings.project_name, settings.version)
    return PortfolioService(repository, settings)
