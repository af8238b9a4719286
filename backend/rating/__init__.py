"""
Rating package for job applicants.
Provides signal extraction, answer analysis and rating calculation.
"""

from .engine import RatingEngine, RatingCalculator, RatingResult
from .analyzer import Analysis, QuestionAnalyzer
from .extractor import SignalExtractor
from .search import SearchMatch, SearchResult, search_application
from .signals import (
    EducationSignal,
    InstitutionSignal,
    QuestionAnswer
)

__all__ = [
    'RatingEngine',
    'RatingCalculator',
    'RatingResult',
    'Analysis',
    'QuestionAnalyzer',
    'SignalExtractor',
    'SearchMatch',
    'SearchResult',
    'search_application',
    'EducationSignal',
    'InstitutionSignal',
    'QuestionAnswer',
]
