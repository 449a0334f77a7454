"""End-to-end season analysis."""

from .season import SeasonAnalysis, SeasonAnalysisConfig, SeasonReport, TeamResult

__all__ = ["SeasonAnalysis", "SeasonAnalysisConfig", "SeasonReport", "TeamResult"]
