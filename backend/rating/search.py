"""
Keyword search over application answers and resume text.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .signals import QuestionAnswer

MIN_KEYWORD_LENGTH = 2


@dataclass
class SearchMatch:
    """A single place where the keyword was found."""
    type: str  # 'question' or 'cv'
    question: Optional[str] = None
    answer: Optional[str] = None
    cv_excerpt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.type == "cv":
            return {"type": self.type, "cvExcerpt": self.cv_excerpt}
        return {"type": self.type, "question": self.question, "answer": self.answer}


@dataclass
class SearchResult:
    """All matches for one candidate."""
    candidate_id: str
    candidate_name: str
    email: str
    job_title: str
    matches: List[SearchMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidateId": self.candidate_id,
            "candidateName": self.candidate_name,
            "email": self.email,
            "jobTitle": self.job_title,
            "matches": [match.to_dict() for match in self.matches],
        }


def normalize_keyword(keyword: str) -> str:
    """
    Lower-case and trim a search keyword.

    Raises:
        ValueError: If the keyword is shorter than two characters
    """
    term = (keyword or "").strip().lower()
    if len(term) < MIN_KEYWORD_LENGTH:
        raise ValueError(
            f"Search keyword must be at least {MIN_KEYWORD_LENGTH} characters."
        )
    return term


def extract_excerpt(text: str, term: str, window: int = 50) -> Optional[str]:
    """
    Extract short text snippet around first occurrence of term.

    Args:
        text: Text to search in
        term: Lower-case search term
        window: Number of characters before and after the term (default: 50)

    Returns:
        Snippet with collapsed whitespace and ellipsis if truncated, or None if no match
    """
    idx = text.lower().find(term)
    if idx == -1:
        return None

    start = max(idx - window, 0)
    end = min(idx + len(term) + window, len(text))
    snippet = re.sub(r"\s+", " ", text[start:end].strip())

    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."
    return snippet


def search_application(
    application,
    keyword: str,
    search_cv: bool = True
) -> Optional[SearchResult]:
    """
    Search an application's answers and resume text for a keyword.

    Args:
        application: Application from bamboohr.applications.parse_application
        keyword: Search keyword (at least two characters)
        search_cv: Also search the resume text

    Returns:
        SearchResult with all matches, or None if nothing matched

    Raises:
        ValueError: If the keyword is too short
    """
    term = normalize_keyword(keyword)
    matches = []

    for qa in application.questions_and_answers:
        qa = QuestionAnswer.from_payload(qa)
        if term in qa.question.lower() or term in qa.answer.lower():
            matches.append(SearchMatch(type="question", question=qa.question, answer=qa.answer))

    if search_cv and application.resume_text:
        excerpt = extract_excerpt(application.resume_text, term)
        if excerpt:
            matches.append(SearchMatch(type="cv", cv_excerpt=excerpt))

    if not matches:
        return None

    return SearchResult(
        candidate_id=application.id,
        candidate_name=application.candidate_name,
        email=application.email,
        job_title=application.job_title,
        matches=matches,
    )
