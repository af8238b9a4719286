"""
Rating engine for job applicants.
Combines education, institution and experience signals into a 0-10 rating.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .analyzer import Analysis, QuestionAnalyzer
from .extractor import SignalExtractor
from config import RatingConfig

logger = logging.getLogger(__name__)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"


@dataclass
class RatingResult:
    """Rating for a single candidate."""
    overall: float
    education_score: int
    education_level: Optional[str]
    institution: Optional[str]
    experience_score: int
    years_experience: Optional[int]
    confidence: str
    data_source: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON response body for this rating."""
        return {
            "overall": self.overall,
            "breakdown": {
                "education": {
                    "score": self.education_score,
                    "level": self.education_level,
                    "institution": self.institution,
                },
                "experience": {
                    "score": self.experience_score,
                    "years": self.years_experience,
                },
            },
            "confidence": self.confidence,
            "dataSource": list(self.data_source),
        }


class RatingCalculator:
    """Turns an Analysis into a RatingResult."""

    def __init__(self, config: Optional[RatingConfig] = None):
        """
        Initialize rating calculator.

        Args:
            config: Rating configuration with bonuses, steps and weights
        """
        self.config = config or RatingConfig()

    def calculate(self, analysis: Analysis) -> RatingResult:
        """
        Calculate the rating for an analysis.

        Missing signals lower the confidence instead of raising.

        Args:
            analysis: Signals extracted from an application

        Returns:
            RatingResult ready to serialize
        """
        education_score = self._education_score(analysis)
        experience_score = (
            self.score_experience(analysis.experience)
            if analysis.experience is not None else 0
        )

        has_education = analysis.education is not None
        has_experience = analysis.experience is not None
        weights = self.config.weights

        if has_education and has_experience:
            overall = round(
                education_score * weights.education + experience_score * weights.experience, 1
            )
            confidence = HIGH
        elif has_education or has_experience:
            overall = education_score if has_education else experience_score
            confidence = MEDIUM
        else:
            overall = 0
            confidence = LOW

        return RatingResult(
            overall=_clamp(overall),
            education_score=education_score,
            education_level=analysis.education.level if analysis.education else None,
            institution=analysis.institution.name if analysis.institution else None,
            experience_score=experience_score,
            years_experience=analysis.experience,
            confidence=confidence,
            data_source=list(dict.fromkeys(analysis.sources)),
        )

    def _education_score(self, analysis: Analysis) -> int:
        score = analysis.education.score if analysis.education else 0
        institution = analysis.institution
        if institution is not None:
            bonus = self.config.institution_bonus
            score += bonus.prestigious if institution.is_prestigious else bonus.recognised
        return _clamp(score)

    def score_experience(self, years: int) -> int:
        """
        Map years of experience onto the 0-10 step table.

        Args:
            years: Years of experience

        Returns:
            Score of the highest step reached, or the floor score below all steps
        """
        for step in self.config.experience_steps:
            if years >= step.min_years:
                return _clamp(step.score)
        return _clamp(self.config.experience_floor)


class RatingEngine:
    """Rates applicants from their answers and resume text."""

    def __init__(self, config: Optional[RatingConfig] = None):
        """
        Initialize rating engine.

        Args:
            config: Rating configuration shared by the extractor,
                analyzer and calculator (default: built-in tables)
        """
        self.config = config or RatingConfig()
        self.extractor = SignalExtractor(self.config)
        self.analyzer = QuestionAnalyzer(self.config, self.extractor)
        self.calculator = RatingCalculator(self.config)

    def rate(
        self,
        questions_and_answers: Iterable,
        resume_text: Optional[str] = None,
        cover_letter_text: Optional[str] = None
    ) -> RatingResult:
        """
        Rate one applicant.

        Args:
            questions_and_answers: QuestionAnswer pairs or raw BambooHR dicts
            resume_text: Plain resume text used for categories the answers miss
            cover_letter_text: Passed through to the analyzer; not scored

        Returns:
            RatingResult for the applicant
        """
        analysis = self.analyzer.analyze(
            questions_and_answers,
            resume_text=resume_text,
            cover_letter_text=cover_letter_text,
        )
        result = self.calculator.calculate(analysis)
        logger.debug(
            f"Rated candidate overall={result.overall} confidence={result.confidence}"
        )
        return result


def _clamp(value, low=0, high=10):
    return max(low, min(high, value))
