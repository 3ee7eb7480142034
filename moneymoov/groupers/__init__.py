"""
Groupers Package

Provides one attempt grouper per payment rail.
"""

from .card import CardAttemptGrouper
from .pisp import PispAttemptGrouper

__all__ = [
    "CardAttemptGrouper",
    "PispAttemptGrouper",
]
