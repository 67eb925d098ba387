"""Personal rhythm detection for daily wellness check-ins."""

from rhythmpy.core.config import AnalysisSettings
from rhythmpy.core.models import DailySample, Indicator, PeriodEstimate, RhythmResult
from rhythmpy.core.orchestrator import analyze, run
from rhythmpy.core.service import RhythmService
from rhythmpy.processing.recompute import should_recompute

__all__ = [
    "AnalysisSettings",
    "DailySample",
    "Indicator",
    "PeriodEstimate",
    "RhythmResult",
    "RhythmService",
    "analyze",
    "run",
    "should_recompute",
]
