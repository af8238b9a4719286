"""
Application payload adapter.

Turns BambooHR applicant-tracking JSON into the inputs of the rating engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
from bs4 import BeautifulSoup

from config import RatingConfig
from rating import QuestionAnswer, RatingEngine, RatingResult

logger = logging.getLogger(__name__)


@dataclass
class Application:
    """
    Application data needed for rating and search.

    Attributes:
        id: BambooHR application ID
        candidate_name: Applicant first and last name
        email: Applicant email address
        job_title: Title of the job applied for
        questions_and_answers: Application form answers
        resume_text: Plain resume text, if BambooHR parsed the resume
        cover_letter_text: Plain cover letter text, if present
        resume_file_id: File ID of the uploaded resume (optional)
    """
    id: str
    candidate_name: str = ""
    email: str = ""
    job_title: str = ""
    questions_and_answers: List[QuestionAnswer] = field(default_factory=list)
    resume_text: str = ""
    cover_letter_text: str = ""
    resume_file_id: Optional[str] = None


def normalize_text(html: str) -> str:
    """
    Strip HTML tags and preserve paragraph breaks.

    Args:
        html: HTML text (may contain tags)

    Returns:
        Plain text with preserved paragraph breaks
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, 'html.parser')
    text = soup.get_text("\n")
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join([l for l in lines if l])


def parse_application(payload: Dict[str, Any]) -> Application:
    """
    Build an Application from a BambooHR application object.

    Args:
        payload: Decoded JSON from /applicant_tracking/applications/{id}

    Returns:
        Application with answers and resume text normalized
    """
    applicant = payload.get('applicant') or {}
    job = payload.get('job') or {}
    title = job.get('title')
    if isinstance(title, dict):
        title = title.get('label')

    name = f"{applicant.get('firstName') or ''} {applicant.get('lastName') or ''}".strip()
    resume_file_id = payload.get('resumeFileId')

    return Application(
        id=str(payload.get('id', '')),
        candidate_name=name,
        email=applicant.get('email') or '',
        job_title=title or '',
        questions_and_answers=[
            QuestionAnswer.from_payload(item)
            for item in payload.get('questionsAndAnswers') or []
        ],
        resume_text=normalize_text(payload.get('resumeText') or payload.get('parsedResume') or ''),
        cover_letter_text=normalize_text(payload.get('coverLetterText') or ''),
        resume_file_id=str(resume_file_id) if resume_file_id is not None else None,
    )


def rate_application(
    payload: Dict[str, Any],
    config: Optional[RatingConfig] = None,
    engine: Optional[RatingEngine] = None
) -> RatingResult:
    """
    Rate a BambooHR application object.

    Args:
        payload: Decoded application JSON
        config: Rating configuration (ignored when engine is given)
        engine: Pre-built RatingEngine to reuse across applications

    Returns:
        RatingResult for the applicant
    """
    application = parse_application(payload)
    engine = engine or RatingEngine(config)
    result = engine.rate(
        application.questions_and_answers,
        resume_text=application.resume_text,
        cover_letter_text=application.cover_letter_text,
    )
    logger.info(
        f"Application {application.id}: overall={result.overall} "
        f"confidence={result.confidence}"
    )
    return result
