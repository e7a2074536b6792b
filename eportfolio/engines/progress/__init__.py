"""
Progress Engine - curriculum completion from verification history.
"""

from eportfolio.engines.progress.progress_calculator import ProgressCalculator, round_half_up

__all__ = [
    "ProgressCalculator",
    "round_half_up",
]
