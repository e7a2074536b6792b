"""
Curriculum models - ordered procedure definitions and the skill ladder.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from eportfolio.kernel.models.base import TimestampedModel, generate_id


class SkillLevel(str, Enum):
    """Competency levels, declared lowest to highest."""
    OBSERVED = "Observed"
    ASSISTED = "Assisted"
    SUPERVISED = "Supervised"
    INDEPENDENT = "Independent"

    @property
    def rank(self) -> int:
        return list(SkillLevel).index(self)

    @classmethod
    def rank_of(cls, level: Optional["SkillLevel"]) -> int:
        """Rank of a level, -1 when no level has been reached yet."""
        return level.rank if level is not None else -1


class Procedure(BaseModel):
    """A unit of competency inside a curriculum. Value object."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str
    code: str
    category: str = ""
    minimum_level: SkillLevel
    minimum_cases: int = Field(default=0, ge=0)
    theory_required: bool = False
    practice_required: bool = False


class Curriculum(TimestampedModel):
    """A specialty's ordered list of procedures."""

    id: str = Field(default_factory=generate_id)
    specialty: str
    name: str = ""
    procedures: List[Procedure] = []

    def find_procedure(self, procedure_id: str) -> Optional[Procedure]:
        for procedure in self.procedures:
            if procedure.id == procedure_id:
                return procedure
        return None
