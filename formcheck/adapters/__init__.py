"""
Field source and field surface interfaces, with in-memory implementations.
"""

from .base import FieldSource, FieldSurface, SubmitAttempt, SubmitHandler, ValueHandler
from .memory import InMemoryFieldSource, InMemoryFieldSurface

__all__ = [
    "FieldSource",
    "FieldSurface",
    "SubmitAttempt",
    "SubmitHandler",
    "ValueHandler",
    "InMemoryFieldSource",
    "InMemoryFieldSurface",
]
