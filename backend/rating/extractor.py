"""
Signal extraction module for candidate rating.
Extracts education, institution and experience signals from free text
based on ordered keyword tables and patterns.
"""

import re
import logging
from typing import List, Optional

from .signals import EducationSignal, InstitutionSignal
from config import RatingConfig

logger = logging.getLogger(__name__)


WORD_RUN = re.compile(r"[\w\s]+")
# "university of <words>"
NOUN_OF_PATTERN = re.compile(
    r"(?:university|college|institute|school)\s+of\s+[\w\s]+",
    re.IGNORECASE,
)
# Zero-width so overlapping nouns are all seen
NOUN_POSITIONS = re.compile(
    r"(?=(university|college|institute|school|technikon))",
    re.IGNORECASE,
)


def find_institution_span(text: str) -> Optional[str]:
    """
    Find the leftmost "university of <words>" or "<words> university" span.

    Works one run of word/space characters at a time: a run either opens
    with "<noun> of <words>", or spans from its start to the end of its
    last institution noun.

    Args:
        text: Free-form text

    Returns:
        Matched span, or None if no run contains an institution noun
    """
    for run in WORD_RUN.finditer(text):
        start, end = run.span()

        match = NOUN_OF_PATTERN.match(text, start, end)
        if match:
            return match.group(0)

        last_noun = None
        for noun in NOUN_POSITIONS.finditer(text, start + 1, end):
            last_noun = noun
        if last_noun:
            return text[start:last_noun.end(1)]

    return None

DIGITS_ONLY = re.compile(r"[0-9]+")

UNIT = r"(?:years?|yrs?)"


def _experience_patterns(number_words: List[str]) -> List[re.Pattern]:
    words = "|".join(re.escape(word) for word in number_words)
    return [
        # "5-7 years" takes the lower bound
        re.compile(rf"(\d+)\s*-\s*\d+\s*{UNIT}", re.IGNORECASE),
        re.compile(rf"(\d+)\+?\s*{UNIT}", re.IGNORECASE),
        re.compile(rf"({words})\s*{UNIT}?", re.IGNORECASE),
        re.compile(rf"(\d+)\+?\s*(?:completed|full)?\s*{UNIT}?", re.IGNORECASE),
    ]


class SignalExtractor:
    """Extracts rating signals from application text."""

    def __init__(self, config: Optional[RatingConfig] = None):
        """
        Initialize signal extractor with configuration.

        Args:
            config: Rating configuration with keyword tables (default: built-in tables)
        """
        self.config = config or RatingConfig()
        # Longest alternatives first
        words = sorted(self.config.number_words, key=len, reverse=True)
        self._experience_patterns = _experience_patterns(words)

    def extract_education(self, text: str) -> Optional[EducationSignal]:
        """
        Find the education level of the first table row with a keyword in the text.

        Table order decides, not position in the text: a text mentioning a
        bachelor's degree before a PhD still reports the PhD.

        Args:
            text: Free-form answer or resume text

        Returns:
            EducationSignal with level and score, or None if nothing matches
        """
        if not text:
            return None
        text_lower = text.lower()

        for row in self.config.education_levels:
            for kw in row.keywords:
                if kw.lower() in text_lower:
                    return EducationSignal(level=row.label, score=row.score)

        return None

    def extract_institution(
        self,
        text: str,
        is_direct_question: bool = False
    ) -> Optional[InstitutionSignal]:
        """
        Identify an institution name and whether it is prestigious.

        Args:
            text: Free-form answer or resume text
            is_direct_question: True when the question asked where the
                candidate studied, so the whole answer is the institution

        Returns:
            InstitutionSignal, or None if no institution could be identified
        """
        if not text:
            return None
        text_lower = text.lower().strip()
        if len(text_lower) < 2:
            return None

        for institution in self.config.institutions:
            for kw in institution.keywords:
                if kw.strip().lower() in text_lower:
                    return InstitutionSignal(name=institution.name, is_prestigious=True)

        if is_direct_question:
            return InstitutionSignal(name=text.strip(), is_prestigious=False)

        span = find_institution_span(text)
        if span:
            return InstitutionSignal(name=span.strip(), is_prestigious=False)

        return None

    def extract_experience(self, text: str) -> Optional[int]:
        """
        Parse a free-text answer into a number of years.

        Args:
            text: Free-form answer, e.g. "5", "5+ years", "5-7 yrs" or "ten years"

        Returns:
            Years of experience, or None if no number could be found
        """
        if not text:
            return None
        trimmed = text.strip()

        if DIGITS_ONLY.fullmatch(trimmed):
            return int(trimmed)

        number_words = self.config.number_words
        for pattern in self._experience_patterns:
            match = pattern.search(text)
            if not match:
                continue
            value = match.group(1)
            if value.lower() in number_words:
                return number_words[value.lower()]
            try:
                return int(value)
            except ValueError:
                logger.debug(f"Unparseable experience value {value!r}")
                continue

        return None
