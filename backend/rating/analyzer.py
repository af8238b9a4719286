"""
Question/answer analysis for candidate rating.

Routes each application answer to the extractors its question asks about
and folds the results into an immutable analysis snapshot.
"""

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Optional, Tuple

from .extractor import SignalExtractor
from .signals import EducationSignal, InstitutionSignal, QuestionAnswer
from config import RatingConfig

logger = logging.getLogger(__name__)

QA_SOURCE = "questionsAndAnswers"
RESUME_SOURCE = "resumeText"


@dataclass(frozen=True)
class Analysis:
    """Best signals found so far and where they came from."""
    education: Optional[EducationSignal] = None
    institution: Optional[InstitutionSignal] = None
    experience: Optional[int] = None
    sources: Tuple[str, ...] = ()

    def tagged(self, source: str, category: str) -> "Analysis":
        """Return a copy with ``source:category`` recorded once."""
        tag = f"{source}:{category}"
        if tag in self.sources:
            return self
        return replace(self, sources=self.sources + (tag,))


class QuestionAnalyzer:
    """Accumulates rating signals across application answers."""

    def __init__(
        self,
        config: Optional[RatingConfig] = None,
        extractor: Optional[SignalExtractor] = None
    ):
        """
        Initialize the analyzer.

        Args:
            config: Rating configuration with question routing keywords
            extractor: SignalExtractor instance (default: built from config)
        """
        self.config = config or RatingConfig()
        self.extractor = extractor or SignalExtractor(self.config)

    def analyze(
        self,
        questions_and_answers: Iterable,
        resume_text: Optional[str] = None,
        cover_letter_text: Optional[str] = None
    ) -> Analysis:
        """
        Extract signals from answers, falling back to resume text.

        Args:
            questions_and_answers: QuestionAnswer pairs or raw BambooHR dicts
            resume_text: Plain resume text used for categories the answers miss
            cover_letter_text: Accepted for callers that have it; not scored

        Returns:
            Analysis snapshot with the best signals found
        """
        pairs = [QuestionAnswer.from_payload(item) for item in questions_and_answers or []]
        analysis = reduce(self._fold, pairs, Analysis())

        if resume_text:
            analysis = self._fallback(analysis, resume_text)

        logger.debug(f"Analysis complete: sources={list(analysis.sources)}")
        return analysis

    def _fold(self, analysis: Analysis, qa: QuestionAnswer) -> Analysis:
        """Apply one question/answer pair to the running analysis."""
        if not qa.answer:
            return analysis

        question = qa.question.lower()
        answer = qa.answer
        routes = self.config.routes

        if _mentions(question, routes.education):
            edu = self.extractor.extract_education(answer)
            if edu and (analysis.education is None or edu.score > analysis.education.score):
                analysis = replace(analysis, education=edu).tagged(QA_SOURCE, "education")

            # An education answer often names the institution too
            if analysis.institution is None:
                inst = self.extractor.extract_institution(answer, is_direct_question=False)
                if inst:
                    analysis = replace(analysis, institution=inst).tagged(QA_SOURCE, "institution")

        if _mentions(question, routes.institution):
            inst = self.extractor.extract_institution(answer, is_direct_question=True)
            if inst:
                analysis = replace(analysis, institution=inst).tagged(QA_SOURCE, "institution")

        if _mentions(question, routes.experience):
            years = self.extractor.extract_experience(answer)
            if years is not None:
                analysis = replace(analysis, experience=years).tagged(QA_SOURCE, "experience")

        return analysis

    def _fallback(self, analysis: Analysis, resume_text: str) -> Analysis:
        """Fill categories the answers left empty from resume text."""
        if analysis.education is None:
            edu = self.extractor.extract_education(resume_text)
            if edu:
                analysis = replace(analysis, education=edu).tagged(RESUME_SOURCE, "education")

        if analysis.institution is None:
            inst = self.extractor.extract_institution(resume_text, is_direct_question=False)
            if inst:
                analysis = replace(analysis, institution=inst).tagged(RESUME_SOURCE, "institution")

        if analysis.experience is None:
            years = self.extractor.extract_experience(resume_text)
            if years is not None:
                analysis = replace(analysis, experience=years).tagged(RESUME_SOURCE, "experience")

        return analysis


def _mentions(question: str, keywords) -> bool:
    return any(kw in question for kw in keywords)
