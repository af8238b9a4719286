"""
Keyword search across every application in BambooHR.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging

from bamboohr.applications import parse_application
from bamboohr.client import BambooHRError
from rating.search import SearchResult, normalize_keyword, search_application

logger = logging.getLogger(__name__)


@dataclass
class CandidateSearch:
    """Search results for one keyword."""
    keyword: str
    results: List[SearchResult] = field(default_factory=list)

    @property
    def total_results(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "totalResults": self.total_results,
            "results": [result.to_dict() for result in self.results],
        }


def search_candidates(client, keyword: str, job_id=None, search_cv: bool = False) -> CandidateSearch:
    """
    Search every application's answers, and optionally resume text, for a keyword.

    Args:
        client: BambooHRClient used to list and fetch applications
        keyword: Search keyword (at least two characters)
        job_id: Only search applications for this job opening (optional)
        search_cv: Also search resume text

    Returns:
        CandidateSearch with one SearchResult per matching candidate

    Raises:
        ValueError: If the keyword is too short
        BambooHRError: If the application list cannot be fetched
    """
    normalize_keyword(keyword)
    search = CandidateSearch(keyword=keyword)

    for summary in client.list_applications(job_id=job_id):
        app_id = summary.get('id')
        try:
            payload = client.get_application(app_id)
        except BambooHRError as e:
            # Skip applications that fail to load
            logger.error(f"[{app_id}] Skipped in search: {e}")
            continue

        result = search_application(parse_application(payload), keyword, search_cv=search_cv)
        if result:
            search.results.append(result)

    logger.info(f"Search for {keyword!r} matched {search.total_results} candidates")
    return search
