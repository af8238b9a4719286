"""
BambooHR integration: API client, application payload adapter, search and batch runners.
"""

from bamboohr.applications import Application, normalize_text, parse_application, rate_application
from bamboohr.client import BambooHRClient, BambooHRConfigError, BambooHRError, parse_status_id
from bamboohr.runner import (
    BulkStatusResult,
    CandidateRating,
    RatingRunner,
    StatusUpdate,
    StatusUpdater
)
from bamboohr.search import CandidateSearch, search_candidates

__all__ = [
    'Application',
    'normalize_text',
    'parse_application',
    'rate_application',
    'BambooHRClient',
    'BambooHRConfigError',
    'BambooHRError',
    'parse_status_id',
    'BulkStatusResult',
    'CandidateRating',
    'RatingRunner',
    'StatusUpdate',
    'StatusUpdater',
    'CandidateSearch',
    'search_candidates',
]
