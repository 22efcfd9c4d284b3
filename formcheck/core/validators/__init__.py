"""
Validation evaluator applying rule lists to field values.
"""

from .evaluator import ValidationEvaluator

__all__ = [
    "ValidationEvaluator",
]
