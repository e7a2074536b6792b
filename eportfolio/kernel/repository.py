"""
Entity Repository - in-process store for the five entity collections.

Lookups never raise on a miss: they return None, an empty list, or False,
and the calling engine decides what absence means.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, TypeVar

from eportfolio.kernel.models import (
    Curriculum,
    Doctor,
    Procedure,
    ProcedureRequest,
    RequestStatus,
    Supervisor,
    TimestampedModel,
    Verification,
    utcnow,
)
from eportfolio.logging_config import get_logger
from eportfolio.schemas.stats import DoctorStats, SupervisorStats

logger = get_logger(__name__)

M = TypeVar("M", bound=TimestampedModel)

# Mutable collections, in the order they are snapshotted and restored.
COLLECTIONS = ("doctors", "supervisors", "curricula", "requests", "verifications")


class EntityRepository:
    """
    Holds doctors, supervisors, curricula, requests and verifications.

    Each collection is a dict keyed by entity id; insertion order is the
    collection order seen by list and filter queries. Updates re-validate
    the entity, so invalid changes raise pydantic.ValidationError.

    Usage:
        repo = EntityRepository()
        repo.create_doctor(doctor)
        repo.find_verifications_by_doctor(doctor.id)
    """

    def __init__(self) -> None:
        self.doctors: Dict[str, Doctor] = {}
        self.supervisors: Dict[str, Supervisor] = {}
        self.curricula: Dict[str, Curriculum] = {}
        self.requests: Dict[str, ProcedureRequest] = {}
        self.verifications: Dict[str, Verification] = {}

    @classmethod
    def from_seed(cls, seed: Mapping[str, Iterable[Mapping[str, Any]]]) -> "EntityRepository":
        """
        Build a repository from plain dicts, validating each through its model.

        Args:
            seed: Mapping of collection name to a list of entity dicts.
                Unknown collection names are rejected.

        Returns:
            A populated EntityRepository

        Raises:
            ValueError: If seed names a collection the repository does not hold
        """
        unknown = set(seed) - set(COLLECTIONS)
        if unknown:
            raise ValueError(f"Unknown seed collections: {', '.join(sorted(unknown))}")

        repo = cls()
        model_for = {
            "doctors": Doctor,
            "supervisors": Supervisor,
            "curricula": Curriculum,
            "requests": ProcedureRequest,
            "verifications": Verification,
        }
        for name, rows in seed.items():
            collection = getattr(repo, name)
            for row in rows:
                entity = model_for[name].model_validate(row)
                collection[entity.id] = entity
        logger.debug(
            "Repository seeded",
            extra={name: len(getattr(repo, name)) for name in COLLECTIONS},
        )
        return repo

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _update(collection: Dict[str, M], entity_id: str, changes: Dict[str, Any]) -> Optional[M]:
        current = collection.get(entity_id)
        if current is None:
            return None
        changes.pop("id", None)
        updated = type(current).model_validate(
            {**current.model_dump(), **changes, "updated_at": utcnow()}
        )
        collection[entity_id] = updated
        return updated

    @staticmethod
    def _delete(collection: Dict[str, Any], entity_id: str) -> bool:
        return collection.pop(entity_id, None) is not None

    # ------------------------------------------------------------------
    # Doctors
    # ------------------------------------------------------------------

    def get_doctor(self, doctor_id: str) -> Optional[Doctor]:
        return self.doctors.get(doctor_id)

    def find_doctor_by_email(self, email: str) -> Optional[Doctor]:
        return next((d for d in self.doctors.values() if d.email == email), None)

    def list_doctors(self) -> List[Doctor]:
        return list(self.doctors.values())

    def create_doctor(self, doctor: Doctor) -> Doctor:
        self.doctors[doctor.id] = doctor
        return doctor

    def update_doctor(self, doctor_id: str, **changes: Any) -> Optional[Doctor]:
        return self._update(self.doctors, doctor_id, changes)

    def delete_doctor(self, doctor_id: str) -> bool:
        return self._delete(self.doctors, doctor_id)

    # ------------------------------------------------------------------
    # Supervisors
    # ------------------------------------------------------------------

    def get_supervisor(self, supervisor_id: str) -> Optional[Supervisor]:
        return self.supervisors.get(supervisor_id)

    def find_supervisor_by_email(self, email: str) -> Optional[Supervisor]:
        return next((s for s in self.supervisors.values() if s.email == email), None)

    def find_supervisors_by_ids(self, supervisor_ids: Iterable[str]) -> List[Supervisor]:
        """Resolve ids in the given order, skipping any that do not exist."""
        return [self.supervisors[sid] for sid in supervisor_ids if sid in self.supervisors]

    def list_supervisors(self) -> List[Supervisor]:
        return list(self.supervisors.values())

    def create_supervisor(self, supervisor: Supervisor) -> Supervisor:
        self.supervisors[supervisor.id] = supervisor
        return supervisor

    def update_supervisor(self, supervisor_id: str, **changes: Any) -> Optional[Supervisor]:
        return self._update(self.supervisors, supervisor_id, changes)

    def delete_supervisor(self, supervisor_id: str) -> bool:
        return self._delete(self.supervisors, supervisor_id)

    # ------------------------------------------------------------------
    # Curricula and procedures
    # ------------------------------------------------------------------

    def get_curriculum(self, curriculum_id: str) -> Optional[Curriculum]:
        return self.curricula.get(curriculum_id)

    def find_curriculum_by_specialty(self, specialty: str) -> Optional[Curriculum]:
        return next((c for c in self.curricula.values() if c.specialty == specialty), None)

    def list_curricula(self) -> List[Curriculum]:
        return list(self.curricula.values())

    def create_curriculum(self, curriculum: Curriculum) -> Curriculum:
        self.curricula[curriculum.id] = curriculum
        return curriculum

    def update_curriculum(self, curriculum_id: str, **changes: Any) -> Optional[Curriculum]:
        return self._update(self.curricula, curriculum_id, changes)

    def delete_curriculum(self, curriculum_id: str) -> bool:
        return self._delete(self.curricula, curriculum_id)

    def find_procedure(self, curriculum_id: str, procedure_id: str) -> Optional[Procedure]:
        """Procedure within one curriculum."""
        curriculum = self.get_curriculum(curriculum_id)
        if curriculum is None:
            return None
        return curriculum.find_procedure(procedure_id)

    def find_procedure_by_id(self, procedure_id: str) -> Optional[Procedure]:
        """First procedure with this id across all curricula."""
        for curriculum in self.curricula.values():
            procedure = curriculum.find_procedure(procedure_id)
            if procedure is not None:
                return procedure
        return None

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def get_request(self, request_id: str) -> Optional[ProcedureRequest]:
        return self.requests.get(request_id)

    def find_requests_by_doctor(self, doctor_id: str) -> List[ProcedureRequest]:
        return [r for r in self.requests.values() if r.doctor_id == doctor_id]

    def find_requests_by_supervisor(self, supervisor_id: str) -> List[ProcedureRequest]:
        return [r for r in self.requests.values() if r.supervisor_id == supervisor_id]

    def find_requests_by_status(self, status: RequestStatus) -> List[ProcedureRequest]:
        return [r for r in self.requests.values() if r.status == status]

    def find_pending_requests_for_supervisor(self, supervisor_id: str) -> List[ProcedureRequest]:
        return [r for r in self.find_requests_by_supervisor(supervisor_id) if r.is_pending]

    def list_requests(self) -> List[ProcedureRequest]:
        return list(self.requests.values())

    def create_request(self, request: ProcedureRequest) -> ProcedureRequest:
        self.requests[request.id] = request
        return request

    def update_request(self, request_id: str, **changes: Any) -> Optional[ProcedureRequest]:
        return self._update(self.requests, request_id, changes)

    def delete_request(self, request_id: str) -> bool:
        return self._delete(self.requests, request_id)

    # ------------------------------------------------------------------
    # Verifications
    # ------------------------------------------------------------------

    def get_verification(self, verification_id: str) -> Optional[Verification]:
        return self.verifications.get(verification_id)

    def find_verifications_by_doctor(self, doctor_id: str) -> List[Verification]:
        return [v for v in self.verifications.values() if v.doctor_id == doctor_id]

    def find_verifications_by_supervisor(self, supervisor_id: str) -> List[Verification]:
        return [v for v in self.verifications.values() if v.supervisor_id == supervisor_id]

    def find_verifications_by_procedure(self, procedure_id: str) -> List[Verification]:
        return [v for v in self.verifications.values() if v.procedure_id == procedure_id]

    def find_verifications_by_doctor_and_procedure(
        self,
        doctor_id: str,
        procedure_id: str,
    ) -> List[Verification]:
        return [
            v for v in self.verifications.values()
            if v.doctor_id == doctor_id and v.procedure_id == procedure_id
        ]

    def list_verifications(self) -> List[Verification]:
        return list(self.verifications.values())

    def create_verification(self, verification: Verification) -> Verification:
        self.verifications[verification.id] = verification
        return verification

    def update_verification(self, verification_id: str, **changes: Any) -> Optional[Verification]:
        return self._update(self.verifications, verification_id, changes)

    def delete_verification(self, verification_id: str) -> bool:
        return self._delete(self.verifications, verification_id)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_doctor_stats(self, doctor_id: str) -> DoctorStats:
        verifications = self.find_verifications_by_doctor(doctor_id)
        requests = self.find_requests_by_doctor(doctor_id)
        average = (
            sum(v.rating for v in verifications) / len(verifications)
            if verifications else 0.0
        )
        return DoctorStats(
            total_verifications=len(verifications),
            pending_requests=sum(1 for r in requests if r.is_pending),
            average_rating=average,
        )

    def get_supervisor_stats(self, supervisor_id: str) -> SupervisorStats:
        verifications = self.find_verifications_by_supervisor(supervisor_id)
        return SupervisorStats(
            total_verifications=len(verifications),
            pending_requests=len(self.find_pending_requests_for_supervisor(supervisor_id)),
            doctors_supervised=len({v.doctor_id for v in verifications}),
        )
