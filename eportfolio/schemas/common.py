"""
Common result types shared by the engines.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success-or-failure value threaded through workflow domain checks.

    Example:
        result = Result.success_result(doctor)
        if not result.success:
            return result.error
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success_result(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def failure_result(cls, error: str) -> "Result[T]":
        return cls(success=False, error=error)


class SubmissionResult(BaseModel):
    """Base shape of a workflow outcome returned to callers."""

    success: bool
    message: str
    errors: List[str] = []
