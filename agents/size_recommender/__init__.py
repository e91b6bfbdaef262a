"""Totals (over/under) recommendation agent."""

from .models import ClassificationInput, ClassificationResult, HistoricalRecord, Recommendation
from .rules import classify

__all__ = [
    "ClassificationInput",
    "ClassificationResult",
    "HistoricalRecord",
    "Recommendation",
    "classify",
]
