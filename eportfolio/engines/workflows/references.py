"""
Reference checks shared by the workflows.
"""

from eportfolio.kernel.models import Doctor, Procedure
from eportfolio.kernel.repository import EntityRepository
from eportfolio.schemas.common import Result


def resolve_curriculum_procedure(
    repository: EntityRepository,
    doctor: Doctor,
    procedure_id: str,
) -> Result[Procedure]:
    """Procedure must exist inside the doctor's own curriculum."""
    curriculum = repository.get_curriculum(doctor.curriculum_id)
    if curriculum is None:
        return Result.failure_result(f"Curriculum with ID {doctor.curriculum_id} not found")

    procedure = curriculum.find_procedure(procedure_id)
    if procedure is None:
        return Result.failure_result(f"Procedure with ID {procedure_id} not found in curriculum")
    return Result.success_result(procedure)
