"""
Progress Calculator - Derives curriculum progress from verification history.

Read-only: resolves doctor -> curriculum -> verifications and never writes.
"""

import math
from collections import defaultdict
from typing import Dict, List, Optional

from eportfolio.config import Settings, get_settings
from eportfolio.kernel.errors import CurriculumNotFoundError, DoctorNotFoundError
from eportfolio.kernel.models import Procedure, SkillLevel, Verification, utcnow
from eportfolio.kernel.repository import EntityRepository
from eportfolio.logging_config import get_logger
from eportfolio.schemas.progress import (
    ProcedureProgress,
    ProcedureStatus,
    ProgressReport,
    VerificationSummary,
)

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 upwards, matching dashboard percentages rather than banker's rounding."""
    return int(math.floor(value + 0.5))


class ProgressCalculator:
    """
    Computes per-procedure and overall completion for a doctor.

    Per procedure:
    - current level: highest-ranked verified skill level (first occurrence wins ties)
    - theory: satisfied by any supervisor note mentioning the theory keyword
    - practice: satisfied once completed cases reach the minimum
    - percentage: 40% cases, 30% level, 15% theory, 15% practice

    A procedure is Completed when it meets the minimum level and cases and
    both theory and practice are satisfied.
    """

    CASES_WEIGHT = 0.40
    LEVEL_WEIGHT = 0.30
    THEORY_WEIGHT = 0.15
    PRACTICE_WEIGHT = 0.15

    def __init__(self, repository: EntityRepository, settings: Optional[Settings] = None):
        self.repository = repository
        self.settings = settings or get_settings()

    def get_doctor_progress(self, doctor_id: str) -> ProgressReport:
        """
        Build the progress report for a doctor.

        Args:
            doctor_id: Doctor whose curriculum progress is computed

        Returns:
            ProgressReport with one entry per procedure, in curriculum order

        Raises:
            DoctorNotFoundError: If the doctor does not exist
            CurriculumNotFoundError: If the doctor's curriculum does not exist
        """
        doctor = self.repository.get_doctor(doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(doctor_id)

        curriculum = self.repository.get_curriculum(doctor.curriculum_id)
        if curriculum is None:
            raise CurriculumNotFoundError(doctor.curriculum_id)

        by_procedure: Dict[str, List[Verification]] = defaultdict(list)
        for verification in self.repository.find_verifications_by_doctor(doctor_id):
            by_procedure[verification.procedure_id].append(verification)

        procedure_progress = [
            self.evaluate_procedure(procedure, by_procedure.get(procedure.id, []))
            for procedure in curriculum.procedures
        ]

        counts = {status: 0 for status in ProcedureStatus}
        for entry in procedure_progress:
            counts[entry.status] += 1

        total = len(procedure_progress)
        completed = counts[ProcedureStatus.COMPLETED]
        overall = round_half_up(completed / total * 100) if total > 0 else 0

        logger.debug(
            "Progress computed",
            extra={"doctor_id": doctor_id, "overall_percentage": overall},
        )
        return ProgressReport(
            doctor_id=doctor_id,
            curriculum_id=curriculum.id,
            overall_percentage=overall,
            total_procedures=total,
            completed_procedures=completed,
            in_progress_procedures=counts[ProcedureStatus.IN_PROGRESS],
            not_started_procedures=counts[ProcedureStatus.NOT_STARTED],
            procedure_progress=procedure_progress,
            last_updated=utcnow(),
        )

    def evaluate_procedure(
        self,
        procedure: Procedure,
        verifications: List[Verification],
    ) -> ProcedureProgress:
        """Progress against a single procedure from its verifications."""
        completed_cases = len(verifications)
        current_level = self.highest_level(verifications)

        current_rank = SkillLevel.rank_of(current_level)
        minimum_rank = procedure.minimum_level.rank
        meets_minimum_level = current_rank >= minimum_rank
        meets_minimum_cases = completed_cases >= procedure.minimum_cases

        theory_completed = (
            not procedure.theory_required
            or any(self._mentions_theory(v) for v in verifications)
        )
        practice_completed = not procedure.practice_required or meets_minimum_cases

        if completed_cases == 0:
            status = ProcedureStatus.NOT_STARTED
        elif meets_minimum_level and meets_minimum_cases and theory_completed and practice_completed:
            status = ProcedureStatus.COMPLETED
        else:
            status = ProcedureStatus.IN_PROGRESS

        if procedure.minimum_cases == 0:
            cases_progress = 100.0
        else:
            cases_progress = min(completed_cases / procedure.minimum_cases * 100, 100.0)
        if meets_minimum_level:
            level_progress = 100.0
        else:
            level_progress = (current_rank + 1) / (minimum_rank + 1) * 100

        percentage = round_half_up(
            cases_progress * self.CASES_WEIGHT
            + level_progress * self.LEVEL_WEIGHT
            + (100 if theory_completed else 0) * self.THEORY_WEIGHT
            + (100 if practice_completed else 0) * self.PRACTICE_WEIGHT
        )

        return ProcedureProgress(
            procedure_id=procedure.id,
            procedure_name=procedure.name,
            procedure_code=procedure.code,
            category=procedure.category,
            status=status,
            current_level=current_level,
            minimum_level_required=procedure.minimum_level,
            minimum_cases_required=procedure.minimum_cases,
            completed_cases=completed_cases,
            cases_remaining=max(0, procedure.minimum_cases - completed_cases),
            meets_minimum_level=meets_minimum_level,
            meets_minimum_cases=meets_minimum_cases,
            theory_completed=theory_completed,
            practice_completed=practice_completed,
            percentage_complete=percentage,
            verifications=[self._summarize(v) for v in verifications],
        )

    @staticmethod
    def highest_level(verifications: List[Verification]) -> Optional[SkillLevel]:
        """Highest skill level verified; an equal rank never replaces the current one."""
        current: Optional[SkillLevel] = None
        for verification in verifications:
            if verification.skill_level.rank > SkillLevel.rank_of(current):
                current = verification.skill_level
        return current

    def _mentions_theory(self, verification: Verification) -> bool:
        return self.settings.theory_keyword.lower() in verification.supervisor_notes.lower()

    def _summarize(self, verification: Verification) -> VerificationSummary:
        supervisor = self.repository.get_supervisor(verification.supervisor_id)
        return VerificationSummary(
            id=verification.id,
            skill_level=verification.skill_level,
            rating=verification.rating,
            date_performed=verification.date_performed,
            supervisor_name=(
                supervisor.display_name if supervisor else self.settings.unknown_supervisor_name
            ),
        )
